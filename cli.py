#!/usr/bin/env python3
import os, sys
if __package__ is None or __package__ == "":
    sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import argparse
import json
import logging
from dataclasses import asdict
from datetime import datetime

from config import load_settings
from services.bulletin import fetch_bulletin, resolve_bulletin
from services.errors import BulletinError
from services.extract import extract_readings
from services.parser import parse_bulletin


def station_info(station) -> dict:
    info = asdict(station)
    info.pop("sensors")
    info["sensors"] = [
        {"id": s.id, "type": s.type, "param": s.param_name, "unit": s.unit_name, "readings": len(s.readings)}
        for s in station.sensors
    ]
    return info


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="ARPAV station bulletin: latest readings per sensor")
    parser.add_argument("--hour", type=int, choices=range(24), metavar="0-23",
                        help="start the search at this hour instead of the current one")
    parser.add_argument("--station-info", action="store_true", help="also print the station metadata")
    parser.add_argument("--serve", action="store_true", help="run the HTTP service instead")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every fallback attempt")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s", stream=sys.stderr)

    if args.serve:
        from app import main as serve
        serve()
        return 0

    settings = load_settings()
    hour = datetime.now().hour if args.hour is None else args.hour

    try:
        container = parse_bulletin(resolve_bulletin(hour, settings, fetch=fetch_bulletin))
    except BulletinError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    out = {"readings": extract_readings(container)}
    if args.station_info:
        out["station"] = station_info(container.station)
    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
