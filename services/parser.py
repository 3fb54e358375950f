# services/parser.py
"""
Decoder for the ARPAV hourly station bulletin.

The document looks like

    <CONTENITORE>
      <FORNITORE>ARPAV</FORNITORE> ... <PROJECTION>...</PROJECTION>
      <STAZIONE>
        <IDSTAZ>182</IDSTAZ> ... <ATTIVAZIONE>...</ATTIVAZIONE>
        <SENSORE>
          <ID>300001</ID> <TYPE>TEMP</TYPE> ...
          <DATI ISTANTE="202410190800"><VM>12.3</VM></DATI>
          <DATI ISTANTE="202410190900"><VM>12.9</VM></DATI>
        </SENSORE>
      </STAZIONE>
    </CONTENITORE>

Each model field is bound to its tag by the schema tables below. A scalar is
read from the child element of that name, or from an attribute of that name
when no such child exists. Unknown tags are ignored, a missing or badly typed
field fails the whole document.
"""
import codecs
import re
import xml.etree.ElementTree as ET
from typing import Callable, NamedTuple, Optional

from models import Container, Reading, Sensor, Station
from .errors import DecodeError

_XML_DECL = re.compile(rb"\s*<\?xml[^>]*\?>")
_ENCODING = re.compile(rb"""encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")


class Field(NamedTuple):
    tag: str
    name: str
    coerce: Callable[[str], object]


class One(NamedTuple):
    tag: str
    name: str
    schema: "Schema"


class Many(NamedTuple):
    tag: str
    name: str
    schema: "Schema"


class Schema(NamedTuple):
    model: type
    fields: tuple


def _uint(bits: int):
    limit = 2 ** bits

    def coerce(text: str) -> int:
        s = text.strip()
        if not (s.isascii() and s.isdigit()):
            raise ValueError(f"expected an unsigned integer, got {text!r}")
        n = int(s)
        if n >= limit:
            raise ValueError(f"{s} does not fit in u{bits}")
        return n

    coerce.__name__ = f"u{bits}"
    return coerce


def _f64(text: str) -> float:
    s = text.strip()
    if "_" in s:
        raise ValueError(f"expected a float, got {text!r}")
    try:
        return float(s)
    except ValueError:
        raise ValueError(f"expected a float, got {text!r}") from None


def _str(text: str) -> str:
    return text


u8, u16, u64 = _uint(8), _uint(16), _uint(64)

READING = Schema(Reading, (
    Field("ISTANTE", "instant", u64),
    Field("VM", "value", _f64),
))

SENSOR = Schema(Sensor, (
    Field("ID", "id", u64),
    Field("PARAMNM", "param_name", _str),
    Field("TYPE", "type", _str),
    Field("UNITNM", "unit_name", _str),
    Field("UNITCODE", "unit_code", u8),
    Field("NOTE", "note", _str),
    Field("FREQ", "frequency", u8),
    Many("DATI", "readings", READING),
))

STATION = Schema(Station, (
    Field("IDSTAZ", "id", u16),
    Field("NOME", "name", _str),
    Field("X", "x", _f64),
    Field("Y", "y", _f64),
    Field("QUOTA", "elevation", u8),
    Field("TIPOSTAZ", "station_type", _str),
    Field("PROVINCIA", "province", _str),
    Field("COMUNE", "municipality", _str),
    Field("ATTIVAZIONE", "activation", _str),
    Many("SENSORE", "sensors", SENSOR),
))

CONTAINER = Schema(Container, (
    Field("FORNITORE", "provider", _str),
    Field("ISTANTERUN", "run_instant", u64),
    Field("NOTE", "note", _str),
    Field("LICENZA", "license", _str),
    Field("PERIODO", "period", _str),
    Field("INIZIO", "start", u64),
    Field("FINE", "end", u64),
    Field("PROJECTION", "projection", _str),
    One("STAZIONE", "station", STATION),
))


class _FieldError(Exception):
    pass


def _scalar(elem: ET.Element, field: Field):
    child = elem.find(field.tag)
    if child is not None:
        text = child.text or ""
    elif field.tag in elem.attrib:
        text = elem.attrib[field.tag]
    else:
        raise _FieldError(f"missing field `{field.tag}` in <{elem.tag}>")
    try:
        return field.coerce(text)
    except ValueError as e:
        raise _FieldError(f"invalid value for `{field.tag}` in <{elem.tag}>: {e}") from None


def _decode(elem: ET.Element, schema: Schema):
    values = {}
    for field in schema.fields:
        if isinstance(field, Many):
            values[field.name] = tuple(_decode(child, field.schema) for child in elem.findall(field.tag))
        elif isinstance(field, One):
            child = elem.find(field.tag)
            if child is None:
                raise _FieldError(f"missing field `{field.tag}` in <{elem.tag}>")
            values[field.name] = _decode(child, field.schema)
        else:
            values[field.name] = _scalar(elem, field)
    return schema.model(**values)


def _lossy_utf8(body: bytes) -> Optional[str]:
    """
    The body as text with invalid UTF-8 sequences replaced, or None when the
    document declares some other encoding.
    """
    if body.startswith(codecs.BOM_UTF8):
        body = body[len(codecs.BOM_UTF8):]
    decl = _XML_DECL.match(body)
    if decl:
        enc = _ENCODING.search(decl.group(0))
        if enc and codecs.lookup(enc.group(1).decode("ascii")).name != "utf-8":
            return None
        body = body[decl.end():]
    return body.decode("utf-8", errors="replace")


def parse_bulletin(body: bytes) -> Container:
    """
    Decode a raw bulletin into the Container graph.
    Raises DecodeError for malformed XML or any missing/ill-typed field.

    A UTF-8 (or undeclared) document with stray invalid bytes is still
    accepted; the bad bytes become U+FFFD.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        try:
            text = _lossy_utf8(body)
        except LookupError:
            text = None
        if text is None:
            raise DecodeError(f"error parsing XML: {e}") from e
        try:
            root = ET.fromstring(text)
        except ET.ParseError:
            raise DecodeError(f"error parsing XML: {e}") from e

    try:
        return _decode(root, CONTAINER)
    except _FieldError as e:
        raise DecodeError(f"error parsing XML: {e}") from None
