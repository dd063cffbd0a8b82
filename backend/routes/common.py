"""Helpers shared by the proxy routes: parameter checks and the upstream call."""

import logging
import re
from typing import Any

from fastapi import Header, Request

from errors import InvalidParameterError, MissingParameterError, UpstreamError
from services.espn_client import Credentials

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"\d{8}")


def get_credentials(
    espn_s2: str | None = Header(None, alias="espnS2"),
    swid: str | None = Header(None, alias="SWID"),
) -> Credentials:
    """Private-league cookies passed through as request headers."""
    return Credentials(espn_s2=espn_s2, swid=swid)


def require(message: str, *values: str | None) -> None:
    """Raise a 400 with ``message`` unless every value is present."""
    if any(value is None or value == "" for value in values):
        raise MissingParameterError(message)


def as_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidParameterError(name, value) from None


def as_date(name: str, value: str) -> str:
    if not _DATE_RE.fullmatch(value):
        raise InvalidParameterError(name, value, expected="a YYYYMMDD date")
    return value


async def fetch_resource(
    request: Request,
    kind: str,
    params: dict,
    failure: str,
    credentials: Credentials | None = None,
) -> Any:
    """Call the upstream client; any failure becomes a 500 carrying its message."""
    upstream = request.app.state.upstream
    try:
        return await upstream.fetch_league_resource(kind, params, credentials)
    except Exception as e:
        logger.exception("%s (%s %s)", failure, kind, params)
        raise UpstreamError(failure, str(e)) from e
