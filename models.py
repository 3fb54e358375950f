from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Reading:
    instant: int    # ISTANTE, e.g. 202410190900
    value: float    # VM


@dataclass(frozen=True)
class Sensor:
    id: int
    param_name: str
    type: str                     # key of the published JSON object
    unit_name: str
    unit_code: int
    note: str
    frequency: int
    readings: Tuple[Reading, ...]  # oldest first


@dataclass(frozen=True)
class Station:
    id: int
    name: str
    x: float
    y: float
    elevation: int
    station_type: str
    province: str
    municipality: str
    activation: str
    sensors: Tuple[Sensor, ...]


@dataclass(frozen=True)
class Container:
    provider: str
    run_instant: int
    note: str
    license: str
    period: str
    start: int
    end: int
    projection: str
    station: Station
