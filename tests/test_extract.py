from models import Container, Reading, Sensor, Station
from services.extract import extract_readings


def make_sensor(type_code, values):
    readings = tuple(Reading(instant=i, value=v) for i, v in enumerate(values))
    return Sensor(id=1, param_name="p", type=type_code, unit_name="u", unit_code=0,
                  note="", frequency=60, readings=readings)


def make_container(*sensors):
    station = Station(id=182, name="s", x=0.0, y=0.0, elevation=0, station_type="T",
                      province="PD", municipality="m", activation="", sensors=sensors)
    return Container(provider="ARPAV", run_instant=0, note="", license="", period="",
                     start=0, end=0, projection="", station=station)


def test_last_reading_per_sensor():
    c = make_container(make_sensor("TEMP", [12.3, 12.9]), make_sensor("RH", [80.0]))
    assert extract_readings(c) == {"TEMP": 12.9, "RH": 80.0}


def test_no_sensors():
    assert extract_readings(make_container()) == {}


def test_sensor_without_readings_is_omitted():
    c = make_container(make_sensor("TEMP", [1.0]), make_sensor("VV", []))
    assert extract_readings(c) == {"TEMP": 1.0}


def test_later_sensor_wins_on_duplicate_type():
    c = make_container(make_sensor("TEMP", [1.0, 2.0]), make_sensor("TEMP", [5.0, 7.5]))
    assert extract_readings(c) == {"TEMP": 7.5}


def test_empty_duplicate_does_not_erase_earlier_value():
    c = make_container(make_sensor("TEMP", [3.0]), make_sensor("TEMP", []))
    assert extract_readings(c) == {"TEMP": 3.0}
