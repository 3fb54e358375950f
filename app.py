# app.py
import logging
import math
from datetime import datetime

from flask import Flask, Response, current_app, jsonify, request
from flask_cors import CORS

from config import Settings, load_settings
from services.bulletin import fetch_bulletin, latest_readings
from services.errors import BulletinError

logger = logging.getLogger(__name__)

# HEAD is served like GET minus the body; every other verb is a 404
READ_METHODS = {"GET", "HEAD"}
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def _not_found(_error=None):
    return Response(status=404)


def dispatch(path=""):
    """
    The whole HTTP surface: every path is the same read-only resource.
    GET/HEAD return the latest readings; anything else is a 404.
    """
    if request.method not in READ_METHODS:
        return _not_found()

    settings = current_app.config["SETTINGS"]
    hour = current_app.config["CLOCK"]().hour
    fetch = current_app.config["FETCH"]

    try:
        readings = latest_readings(hour, settings, fetch=fetch)
    except BulletinError as e:
        logger.warning("Request for %s failed: %s", request.path, e)
        return Response(str(e), status=500, mimetype="text/plain")

    # NaN/inf are not JSON numbers
    return jsonify({k: (v if math.isfinite(v) else None) for k, v in readings.items()})


def create_app(settings: Settings = None, clock=None, fetch=None) -> Flask:
    app = Flask(__name__)
    CORS(app)
    app.json.sort_keys = False

    app.config["SETTINGS"] = settings or load_settings()
    app.config["CLOCK"] = clock or datetime.now
    app.config["FETCH"] = fetch or fetch_bulletin

    for rule in ("/", "/<path:path>"):
        app.add_url_rule(rule, "dispatch", dispatch, methods=ALL_METHODS,
                         provide_automatic_options=False)
    # Methods outside ALL_METHODS are treated like any other non-read request
    app.register_error_handler(405, _not_found)
    return app


def main():
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    settings = load_settings()
    app = create_app(settings)
    logger.info("Serving station %s on %s:%s", settings.station, settings.host, settings.port)
    # Werkzeug reports a failed bind itself and exits with status 1
    app.run(host=settings.host, port=settings.port, threaded=True, use_reloader=False)


if __name__ == "__main__":
    main()
