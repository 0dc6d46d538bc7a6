# footpress/suggestions/prompt.py
import re
from typing import Optional, Tuple

_CAUSE_RE = re.compile(r"^\s*\**\s*cause\s*\**\s*:\s*\**\s*(.+)$", flags=re.I | re.M)
_TREATMENT_RE = re.compile(r"^\s*\**\s*treatment\s*\**\s*:\s*\**\s*(.+)$", flags=re.I | re.M)


def suggestion_prompt(region_name: str, value, bmi_category: str, bounds) -> str:
    lo, hi = bounds
    return (
        "You are a medical assistant specializing in foot pressure analysis.\n"
        "\n"
        "Given the following:\n"
        f"- Region: {region_name}\n"
        f"- Measured Pressure: {value}\n"
        f"- BMI Category: {bmi_category}\n"
        f"- Normal Range: {lo} to {hi}\n"
        "\n"
        "The measured pressure is outside the normal range.\n"
        "Provide:\n"
        "1. A possible **cause** of the abnormal pressure in sentence format (no bullet points).\n"
        "2. A recommended **treatment or suggestion** to address the issue, also in sentence format (no bullet points).\n"
        "\n"
        "Format your response exactly like this:\n"
        "Cause: <your cause here>\n"
        "Treatment: <your treatment here>"
    )


def split_suggestion(text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Pull the Cause/Treatment lines out of a model reply.

    Returns (None, None) unless both lines are present; callers then show the
    reply as-is.
    """
    cause = _CAUSE_RE.search(text or "")
    treatment = _TREATMENT_RE.search(text or "")
    if not cause or not treatment:
        return None, None
    return cause.group(1).strip(), treatment.group(1).strip()
