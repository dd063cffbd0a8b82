"""Centralized configuration — all env vars in one place."""

import os


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # ESPN read APIs (public, cookies unlock private leagues)
        self.espn_api_base: str = os.getenv(
            "ESPN_API_BASE", "https://lm-api-reads.fantasy.espn.com/apis/v3/games/ffl"
        )
        self.espn_site_api_base: str = os.getenv(
            "ESPN_SITE_API_BASE", "https://site.api.espn.com/apis/fantasy/v2/games/ffl"
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
