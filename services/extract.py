# services/extract.py
from typing import Dict

from models import Container


def extract_readings(container: Container) -> Dict[str, float]:
    """
    Last reading value per sensor type. Sensors without readings are skipped;
    on a repeated type code the later sensor wins.
    """
    out = {}
    for sensor in container.station.sensors:
        if sensor.readings:
            out[sensor.type] = sensor.readings[-1].value
    return out
