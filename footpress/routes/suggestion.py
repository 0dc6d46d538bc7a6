# footpress/routes/suggestion.py

import logging
from flask import Blueprint, request

from footpress.analysis.bmi import BmiCategory
from footpress.suggestions.provider import request_suggestion

suggestion_bp = Blueprint("suggestion", __name__)
logger = logging.getLogger(__name__)


def _parse_body(body):
    if not isinstance(body, dict):
        return None, "Body must be a JSON object"

    region_name = body.get("regionName")
    value = body.get("value")
    category = body.get("bmiCategory")
    bounds = body.get("range")

    if not isinstance(region_name, str) or not region_name.strip():
        return None, "Missing regionName"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None, "value must be a number"
    try:
        category = BmiCategory(category)
    except ValueError:
        return None, f"bmiCategory must be one of {[c.value for c in BmiCategory]}"
    if (not isinstance(bounds, (list, tuple)) or len(bounds) != 2
            or any(isinstance(b, bool) or not isinstance(b, (int, float)) for b in bounds)):
        return None, "range must be [min, max]"

    return (region_name.strip(), value, category, (bounds[0], bounds[1])), None


@suggestion_bp.route("/getSuggestion", methods=["POST"])
def get_suggestion():
    """
    Input JSON: { "regionName": "Heel", "value": 250, "bmiCategory": "Normal", "range": [300, 400] }
    Output JSON: { "suggestion": "Cause: ...\\nTreatment: ..." } or { "error": "..." }
    """
    parsed, err = _parse_body(request.get_json(silent=True))
    if err:
        return {"error": err}, 400

    region_name, value, category, bounds = parsed
    text, unavail = request_suggestion(region_name, value, category, bounds)
    if unavail or not text:
        logger.error("Suggestion unavailable for %s", region_name)
        return {"error": "Failed to get suggestion"}, 500

    # The model may ignore the requested format; the text is returned untouched
    return {"suggestion": text}
