"""Tests for BMI classification."""

import pytest

from footpress.analysis.bmi import BmiCategory, InvalidBiometrics, classify_bmi, categorize


class TestClassifyBmi:
    """BMI value and category."""

    def test_normal_adult(self):
        state = classify_bmi(170, 70)
        assert state.value == pytest.approx(24.22, abs=0.01)
        assert state.category is BmiCategory.NORMAL

    def test_obese_adult(self):
        state = classify_bmi(160, 90)
        assert state.value == pytest.approx(35.16, abs=0.01)
        assert state.category is BmiCategory.OBESE

    def test_formula(self):
        state = classify_bmi(180, 81)
        assert state.value == pytest.approx(81 / (1.8 ** 2))

    def test_boundary_25_is_overweight(self):
        state = classify_bmi(200, 100)
        assert state.value == 25.0
        assert state.category is BmiCategory.OVERWEIGHT

    def test_boundary_30_is_obese(self):
        state = classify_bmi(200, 120)
        assert state.value == 30.0
        assert state.category is BmiCategory.OBESE

    def test_accepts_numeric_strings(self):
        assert classify_bmi("170", "70").category is BmiCategory.NORMAL

    @pytest.mark.parametrize("bmi,expected", [
        (18.0, BmiCategory.NORMAL),
        (24.99, BmiCategory.NORMAL),
        (27.5, BmiCategory.OVERWEIGHT),
        (29.99, BmiCategory.OVERWEIGHT),
        (42.0, BmiCategory.OBESE),
    ])
    def test_categorize(self, bmi, expected):
        assert categorize(bmi) is expected


class TestInvalidBiometrics:
    """Rejected inputs keep the user on the form."""

    @pytest.mark.parametrize("height,weight", [
        (0, 70),
        (170, 0),
        (-170, 70),
        (170, -1),
        ("", 70),
        ("tall", 70),
        (None, 70),
        (170, None),
        (float("nan"), 70),
        (float("inf"), 70),
    ])
    def test_rejected(self, height, weight):
        with pytest.raises(InvalidBiometrics):
            classify_bmi(height, weight)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            classify_bmi(0, 0)
