# services/bulletin.py
import logging
from typing import Callable, Dict, NamedTuple

import requests

from .errors import NoBulletinError, TransportError
from .extract import extract_readings
from .parser import parse_bulletin

logger = logging.getLogger(__name__)


class FetchResult(NamedTuple):
    ok: bool
    status: int
    body: bytes


def bulletin_url(hour: int, settings) -> str:
    return f"{settings.base_url}/img{hour:02d}/{settings.station}.xml"


def fetch_bulletin(hour: int, settings) -> FetchResult:
    """
    Download the bulletin published at the given hour of today.
    Any HTTP status is a valid result; only transport failures raise.
    """
    url = bulletin_url(hour, settings)
    try:
        r = requests.get(url, timeout=settings.timeout)
    except requests.exceptions.RequestException as e:
        raise TransportError(f"error getting response: {e}") from e

    ok = 200 <= r.status_code < 300
    # r.content reads the whole body into memory
    return FetchResult(ok=ok, status=r.status_code, body=r.content if ok else b"")


def resolve_bulletin(current_hour: int, settings,
                     fetch: Callable[[int, object], FetchResult] = fetch_bulletin) -> bytes:
    """
    Walk back from current_hour to midnight and return the body of the first
    hour the upstream has published. The previous day is never consulted.
    """
    if not 0 <= current_hour <= 23:
        raise ValueError(f"hour must be between 0 and 23, got {current_hour}")

    hour = current_hour
    while hour >= 0:
        result = fetch(hour, settings)
        if result.ok:
            logger.info("Using bulletin for hour %02d (station %s)", hour, settings.station)
            return result.body
        logger.debug("No bulletin for hour %02d yet (status %s)", hour, result.status)
        hour -= 1

    raise NoBulletinError()


def latest_readings(current_hour: int, settings,
                    fetch: Callable[[int, object], FetchResult] = fetch_bulletin) -> Dict[str, float]:
    """Resolve, decode and reduce today's latest bulletin to {sensor type: value}."""
    body = resolve_bulletin(current_hour, settings, fetch=fetch)
    return extract_readings(parse_bulletin(body))
