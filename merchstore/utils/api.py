# merchstore/utils/api.py
from datetime import datetime, timezone

from flask import jsonify, request


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso(dt: datetime | None) -> str | None:
    # sqlite hands back naive datetimes; every stored timestamp is UTC
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def api_error(message, data=None):
    return {"error": message, **(data or {})}


def ok(payload, status=200):
    r = jsonify(payload); r.status_code = status; return r


def err(msg, status=400, data=None):
    r = jsonify(api_error(msg, data)); r.status_code = status; return r


def read_body():
    payload = request.get_json(silent=True)
    if payload is None:
        # not JSON-typed or not decodable; let the schema layer judge the raw text
        return request.get_data(as_text=True)
    return payload
