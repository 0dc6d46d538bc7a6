# footpress/analysis/bmi.py
import math
from dataclasses import dataclass
from enum import Enum


class BmiCategory(str, Enum):
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class InvalidBiometrics(ValueError):
    pass


@dataclass(frozen=True)
class BmiState:
    value: float
    category: BmiCategory


def _positive_number(raw, label: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidBiometrics(f"{label} must be a number, got {raw!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidBiometrics(f"{label} must be greater than zero, got {raw!r}")
    return value


def categorize(bmi: float) -> BmiCategory:
    if bmi < 25:
        return BmiCategory.NORMAL
    if bmi < 30:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def classify_bmi(height_cm, weight_kg) -> BmiState:
    """
    Compute BMI from height (cm) and weight (kg) and bucket it.

    Accepts numbers or numeric strings straight from a form. Anything that is not a
    strictly positive finite number raises InvalidBiometrics.
    """
    h = _positive_number(height_cm, "height")
    w = _positive_number(weight_kg, "weight")
    meters = h / 100
    bmi = w / (meters * meters)
    return BmiState(value=bmi, category=categorize(bmi))
