import pytest

from config import Settings

HEADER = """<?xml version="1.0" encoding="ISO-8859-1"?>
<CONTENITORE>
  <FORNITORE>ARPAV</FORNITORE>
  <ISTANTERUN>202410190915</ISTANTERUN>
  <NOTE>Dati non validati</NOTE>
  <LICENZA>CC BY 4.0</LICENZA>
  <PERIODO>ultime 24 ore</PERIODO>
  <INIZIO>202410180900</INIZIO>
  <FINE>202410190900</FINE>
  <PROJECTION>EPSG:32632</PROJECTION>
"""

STATION_OPEN = """  <STAZIONE>
    <IDSTAZ>182</IDSTAZ>
    <NOME>Padova - Legnaro</NOME>
    <X>734553.0</X>
    <Y>5028316.0</Y>
    <QUOTA>8</QUOTA>
    <TIPOSTAZ>METEO</TIPOSTAZ>
    <PROVINCIA>PD</PROVINCIA>
    <COMUNE>Legnaro</COMUNE>
    <ATTIVAZIONE>01/01/1992</ATTIVAZIONE>
"""


def sensor_xml(type_code, readings, sensor_id=300001):
    dati = "".join(
        f'<DATI ISTANTE="{instant}"><VM>{value}</VM></DATI>' for instant, value in readings
    )
    return (
        f"<SENSORE><ID>{sensor_id}</ID><PARAMNM>Parametro {type_code}</PARAMNM>"
        f"<TYPE>{type_code}</TYPE><UNITNM>unit</UNITNM><UNITCODE>1</UNITCODE>"
        f"<NOTE></NOTE><FREQ>60</FREQ>{dati}</SENSORE>"
    )


def bulletin_xml(*sensors, station=True):
    """Build a bulletin document from sensor_xml() fragments."""
    doc = HEADER
    if station:
        doc += STATION_OPEN + "".join(sensors) + "</STAZIONE>"
    return (doc + "</CONTENITORE>").encode("iso-8859-1")


@pytest.fixture
def settings():
    return Settings(base_url="http://arpav.test/h24", station="0182", timeout=1.0)


@pytest.fixture
def temp_bulletin():
    return bulletin_xml(sensor_xml("TEMP", [(202410190800, 12.3), (202410190900, 12.9)]))
