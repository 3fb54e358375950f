import os
from dataclasses import dataclass
from dotenv import load_dotenv

DEFAULT_PORT = 8080
DEFAULT_BASE_URL = "http://www.arpa.veneto.it/bollettini/meteo/h24"
DEFAULT_STATION = "0182"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    base_url: str = DEFAULT_BASE_URL
    station: str = DEFAULT_STATION
    timeout: float = DEFAULT_TIMEOUT


def _port_from(raw) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_PORT
    return port if 0 <= port <= 65535 else DEFAULT_PORT


def _timeout_from(raw) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


def load_settings() -> Settings:
    # Loads .env into process env; safe to call multiple times
    load_dotenv()
    return Settings(
        port=_port_from(os.getenv("PORT")),
        host=os.getenv("HOST") or "0.0.0.0",
        base_url=(os.getenv("ARPAV_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        station=os.getenv("ARPAV_STATION") or DEFAULT_STATION,
        timeout=_timeout_from(os.getenv("ARPAV_TIMEOUT")),
    )
