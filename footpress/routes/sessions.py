# footpress/routes/sessions.py

import logging
from flask import Blueprint, current_app, request

from footpress.analysis.bmi import InvalidBiometrics
from footpress.reference.regions import REGIONS

sessions_bp = Blueprint("sessions", __name__)
logger = logging.getLogger(__name__)


def _store():
    return current_app.extensions["footpress.sessions"]


@sessions_bp.route("/regions", methods=["GET"])
def regions():
    return {"regions": [r.to_dict() for r in REGIONS]}


@sessions_bp.route("/session", methods=["POST"])
def start_session():
    """
    Input JSON: { "name": "Asha", "height": 170, "weight": 70 }
    Output JSON: session snapshot with "session_id"; 400 on invalid name, height or weight
    """
    body = request.get_json(silent=True) or {}
    name = body.get("name")
    if name is not None and not isinstance(name, str):
        return {"error": "name must be a string"}, 400
    try:
        session = _store().create(name, body.get("height"), body.get("weight"))
    except InvalidBiometrics as e:
        return {"error": str(e)}, 400
    return session.snapshot(), 201


@sessions_bp.route("/session/<session_id>", methods=["GET"])
def session_status(session_id):
    session = _store().get(session_id)
    if session is None:
        return {"error": "Session not found"}, 404
    return session.snapshot()


@sessions_bp.route("/session/<session_id>", methods=["DELETE"])
def restart_session(session_id):
    if not _store().discard(session_id):
        return {"error": "Session not found"}, 404
    return "", 204
