# footpress/routes/dashboard.py
from flask import Blueprint, current_app, render_template

from footpress.reference.regions import REGIONS

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.route("/", methods=["GET"])
def index():
    return render_template(
        "dashboard.html",
        regions=[r.to_dict() for r in REGIONS],
        tick_ms=int(current_app.config["TICK_SECONDS"] * 1000),
    )
