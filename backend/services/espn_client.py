"""ESPN fantasy football read API client.

Public leagues need no auth. Private leagues need the ``espn_s2`` and
``SWID`` cookies from a logged-in browser session; both must be present or
neither is sent.

Endpoint patterns:
    {api_base}/seasons/{season}/segments/0/leagues/{league}   (2018+)
    {api_base}/leagueHistory/{league}?seasonId={season}        (before 2018)
    {site_api_base}/games?dates={start}-{end}                  (NFL schedule)
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from config import settings

logger = logging.getLogger(__name__)

# First season served by the current league route; older ones live in leagueHistory.
FIRST_CURRENT_SEASON = 2018

FREE_AGENT_LIMIT = 100

POSITIONS = {1: "QB", 2: "RB", 3: "WR", 4: "TE", 5: "K", 16: "D/ST"}

LINEUP_SLOTS = {
    0: "QB", 2: "RB", 4: "WR", 6: "TE", 16: "D/ST", 17: "K",
    20: "Bench", 21: "IR", 23: "FLEX",
}

PRO_TEAMS = {
    0: "FA", 1: "ATL", 2: "BUF", 3: "CHI", 4: "CIN", 5: "CLE", 6: "DAL", 7: "DEN",
    8: "DET", 9: "GB", 10: "TEN", 11: "IND", 12: "KC", 13: "LV", 14: "LAR", 15: "MIA",
    16: "MIN", 17: "NE", 18: "NO", 19: "NYG", 20: "NYJ", 21: "PHI", 22: "ARI", 23: "PIT",
    24: "LAC", 25: "SF", 26: "SEA", 27: "TB", 28: "WSH", 29: "CAR", 30: "JAX", 33: "BAL",
    34: "HOU",
}


@dataclass(frozen=True)
class Credentials:
    espn_s2: str | None = None
    swid: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.espn_s2 and self.swid)

    def cookie_header(self) -> dict[str, str]:
        if not self.is_complete:
            return {}
        return {"Cookie": f"espn_s2={self.espn_s2}; SWID={self.swid}"}


class EspnClient:
    """Implements ``fetch_league_resource(kind, params, credentials)``."""

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        api_base: str | None = None,
        site_api_base: str | None = None,
    ):
        # No timeout: a slow ESPN stalls only the request waiting on it.
        self._http = http or httpx.AsyncClient(timeout=None)
        self.api_base = (api_base or settings.espn_api_base).rstrip("/")
        self.site_api_base = (site_api_base or settings.espn_site_api_base).rstrip("/")
        self._fetchers = {
            "league_info": self._league_info,
            "teams": self._teams,
            "boxscores": self._boxscores,
            "free_agents": self._free_agents,
            "draft": self._draft,
            "nfl_games": self._nfl_games,
        }

    @property
    def kinds(self) -> list[str]:
        return sorted(self._fetchers)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch_league_resource(
        self, kind: str, params: dict, credentials: Credentials | None = None
    ) -> Any:
        """Fetch one resource from ESPN and return it as plain JSON data.

        Args:
            kind: One of ``kinds`` (league_info, teams, boxscores, ...).
            params: Integer ids (league_id, season_id, scoring_period_id,
                matchup_period_id) or date strings (start_date, end_date).
            credentials: Optional private-league cookies.

        Raises:
            ValueError: Unknown ``kind``.
            httpx.HTTPError: Transport failure or non-2xx ESPN response.
        """
        fetcher = self._fetchers.get(kind)
        if fetcher is None:
            raise ValueError(f"Unknown resource kind: {kind}. Supported: {self.kinds}")
        return await fetcher(params, credentials or Credentials())

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _get_json(self, url: str, params: list[tuple[str, Any]], headers: dict[str, str]) -> Any:
        logger.info("ESPN request: %s %s", url, params)
        resp = await self._http.get(url, params=params, headers=headers)
        resp.raise_for_status()
        return resp.json()

    async def _get_league(
        self,
        league_id: int,
        season_id: int,
        params: list[tuple[str, Any]],
        credentials: Credentials,
        extra_headers: dict[str, str] | None = None,
    ) -> dict:
        headers = {**credentials.cookie_header(), **(extra_headers or {})}
        if season_id < FIRST_CURRENT_SEASON:
            url = f"{self.api_base}/leagueHistory/{league_id}"
            data = await self._get_json(url, [("seasonId", season_id), *params], headers)
            if not data:
                raise ValueError(f"No history for league {league_id} in season {season_id}")
            return data[0]

        url = f"{self.api_base}/seasons/{season_id}/segments/0/leagues/{league_id}"
        return await self._get_json(url, params, headers)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    async def _league_info(self, params: dict, credentials: Credentials) -> dict:
        data = await self._get_league(
            params["league_id"], params["season_id"], [("view", "mSettings")], credentials
        )
        league_settings = data.get("settings", {})
        return {
            "id": data.get("id"),
            "seasonId": data.get("seasonId"),
            "name": league_settings.get("name"),
            "size": league_settings.get("size"),
            "isPublic": league_settings.get("isPublic"),
            "currentMatchupPeriod": data.get("status", {}).get("currentMatchupPeriod"),
            "draftSettings": league_settings.get("draftSettings", {}),
            "rosterSettings": league_settings.get("rosterSettings", {}),
            "scheduleSettings": league_settings.get("scheduleSettings", {}),
            "scoringSettings": league_settings.get("scoringSettings", {}),
            "tradeSettings": league_settings.get("tradeSettings", {}),
            "acquisitionSettings": league_settings.get("acquisitionSettings", {}),
        }

    async def _teams(self, params: dict, credentials: Credentials) -> list[dict]:
        scoring_period = params["scoring_period_id"]
        data = await self._get_league(
            params["league_id"],
            params["season_id"],
            [
                ("scoringPeriodId", scoring_period),
                ("view", "mTeam"),
                ("view", "mRoster"),
                ("view", "mMatchup"),
                ("view", "mMatchupScore"),
            ],
            credentials,
        )
        return [_team(team) for team in data.get("teams", [])]

    async def _boxscores(self, params: dict, credentials: Credentials) -> list[dict]:
        matchup_period = params["matchup_period_id"]
        data = await self._get_league(
            params["league_id"],
            params["season_id"],
            [
                ("scoringPeriodId", params["scoring_period_id"]),
                ("view", "mMatchupScore"),
                ("view", "mScoreboard"),
            ],
            credentials,
        )
        return [
            _matchup(matchup)
            for matchup in data.get("schedule", [])
            if matchup.get("matchupPeriodId") == matchup_period
        ]

    async def _free_agents(self, params: dict, credentials: Credentials) -> list[dict]:
        scoring_period = params["scoring_period_id"]
        fantasy_filter = {
            "players": {
                "filterStatus": {"value": ["FREEAGENT", "WAIVERS"]},
                "limit": FREE_AGENT_LIMIT,
                "sortPercOwned": {"sortAsc": False, "sortPriority": 1},
            }
        }
        data = await self._get_league(
            params["league_id"],
            params["season_id"],
            [("scoringPeriodId", scoring_period), ("view", "kona_player_info")],
            credentials,
            extra_headers={"X-Fantasy-Filter": json.dumps(fantasy_filter)},
        )
        return [_free_agent(entry, scoring_period) for entry in data.get("players", [])]

    async def _draft(self, params: dict, credentials: Credentials) -> list[dict]:
        season_id = params["season_id"]
        data = await self._get_league(
            params["league_id"], season_id, [("view", "mDraftDetail")], credentials
        )
        picks = data.get("draftDetail", {}).get("picks", [])
        if not picks:
            return []

        players = await self._player_index(season_id, credentials)
        return [_pick(pick, players.get(pick.get("playerId"))) for pick in picks]

    async def _player_index(self, season_id: int, credentials: Credentials) -> dict[int, dict]:
        """All players for a season keyed by id (draft picks carry only ids)."""
        url = f"{self.api_base}/seasons/{season_id}/players"
        data = await self._get_json(
            url, [("scoringPeriodId", 0), ("view", "players_wl")], credentials.cookie_header()
        )
        return {player["id"]: _player(player) for player in data if "id" in player}

    async def _nfl_games(self, params: dict, credentials: Credentials) -> list[dict]:
        url = f"{self.site_api_base}/games"
        dates = f"{params['start_date']}-{params['end_date']}"
        data = await self._get_json(url, [("dates", dates), ("pbpOnly", "true")], {})
        return [_game(event) for event in data.get("events", [])]


# ----------------------------------------------------------------------
# ESPN payload -> dashboard shape
# ----------------------------------------------------------------------

def _player(player: dict) -> dict:
    return {
        "id": player.get("id"),
        "fullName": player.get("fullName"),
        "defaultPosition": POSITIONS.get(player.get("defaultPositionId")),
        "proTeamAbbreviation": PRO_TEAMS.get(player.get("proTeamId")),
        "injuryStatus": player.get("injuryStatus"),
        "percentOwned": player.get("ownership", {}).get("percentOwned"),
    }


def _points(player: dict, scoring_period: int, stat_source: int) -> float:
    for stat in player.get("stats", []):
        if stat.get("scoringPeriodId") == scoring_period and stat.get("statSourceId") == stat_source:
            return stat.get("appliedTotal", 0)
    return 0


def _team(team: dict) -> dict:
    record = team.get("record", {}).get("overall", {})
    name = team.get("name") or f"{team.get('location', '')} {team.get('nickname', '')}".strip()
    roster = [
        {
            **_player(entry.get("playerPoolEntry", {}).get("player", {})),
            "lineupSlot": LINEUP_SLOTS.get(entry.get("lineupSlotId")),
        }
        for entry in team.get("roster", {}).get("entries", [])
    ]
    return {
        "id": team.get("id"),
        "abbreviation": team.get("abbrev"),
        "name": name or None,
        "logoURL": team.get("logo"),
        "wins": record.get("wins", 0),
        "losses": record.get("losses", 0),
        "ties": record.get("ties", 0),
        "points": record.get("pointsFor", 0),
        "pointsAgainst": record.get("pointsAgainst", 0),
        "playoffSeed": team.get("playoffSeed"),
        "roster": roster,
    }


def _matchup(matchup: dict) -> dict:
    home = matchup.get("home", {})
    # Bye weeks have no away side.
    away = matchup.get("away", {})
    return {
        "id": matchup.get("id"),
        "matchupPeriodId": matchup.get("matchupPeriodId"),
        "homeTeamId": home.get("teamId"),
        "homeScore": home.get("totalPoints", 0),
        "awayTeamId": away.get("teamId"),
        "awayScore": away.get("totalPoints", 0),
        "winner": matchup.get("winner"),
    }


def _free_agent(entry: dict, scoring_period: int) -> dict:
    player = entry.get("player", {})
    return {
        "player": _player(player),
        "status": entry.get("status"),
        "totalPoints": _points(player, scoring_period, stat_source=0),
        "projectedPoints": _points(player, scoring_period, stat_source=1),
    }


def _pick(pick: dict, player: dict | None) -> dict:
    return {
        "id": pick.get("id"),
        "pickNumber": pick.get("overallPickNumber"),
        "roundNumber": pick.get("roundId"),
        "roundPickNumber": pick.get("roundPickNumber"),
        "teamId": pick.get("teamId"),
        "playerId": pick.get("playerId"),
        "bidAmount": pick.get("bidAmount"),
        "keeper": pick.get("keeper", False),
        "player": player,
    }


def _game(event: dict) -> dict:
    sides = {c.get("homeAway"): c for c in event.get("competitors", [])}

    def side(key: str) -> dict:
        competitor = sides.get(key, {})
        return {
            "id": competitor.get("id"),
            "abbreviation": competitor.get("abbreviation"),
            "score": competitor.get("score"),
        }

    return {
        "id": event.get("id"),
        "name": event.get("name"),
        "startTime": event.get("date"),
        "status": event.get("fullStatus", {}).get("type", {}).get("description", event.get("status")),
        "summary": event.get("summary"),
        "homeTeam": side("home"),
        "awayTeam": side("away"),
    }
