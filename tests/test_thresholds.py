"""Tests for the region table and threshold evaluation."""

from footpress.analysis.bmi import BmiCategory
from footpress.analysis.thresholds import evaluate, all_normal, abnormal, in_range
from footpress.reference.regions import REGIONS, REGION_KEYS, SENSOR_FIELDS, region_by_key


class TestRegionTable:

    def test_four_regions_in_sensor_order(self):
        assert REGION_KEYS == ["greatToe", "firstMetatarsal", "fifthMetatarsal", "heel"]
        assert list(SENSOR_FIELDS.values()) == REGION_KEYS

    def test_every_region_has_all_categories(self):
        for region in REGIONS:
            assert set(region.ranges) == set(BmiCategory)
            for lo, hi in region.ranges.values():
                assert lo < hi

    def test_lookup(self):
        heel = region_by_key("heel")
        assert heel.name == "Heel"
        assert heel.range_for(BmiCategory.NORMAL) == (300, 400)
        assert heel.range_for("Obese") == (400, 500)

    def test_to_dict(self):
        d = region_by_key("greatToe").to_dict()
        assert d["ranges"]["Obese"] == [300, 400]
        assert d["topPx"] == 40 and d["leftPx"] == 165


class TestEvaluate:

    def test_in_range_is_inclusive(self):
        assert in_range(300, (300, 400))
        assert in_range(400, (300, 400))
        assert not in_range(299, (300, 400))
        assert not in_range(401, (300, 400))

    def test_heel_normal_for_normal_bmi(self):
        verdicts = {v.key: v for v in evaluate({"heel": 350}, BmiCategory.NORMAL)}
        assert verdicts["heel"].is_normal
        assert verdicts["heel"].range == (300, 400)

    def test_great_toe_low_for_obese(self):
        verdicts = {v.key: v for v in evaluate({"greatToe": 280}, BmiCategory.OBESE)}
        assert not verdicts["greatToe"].is_normal
        assert verdicts["greatToe"].range == (300, 400)

    def test_range_depends_on_category(self):
        averaged = {"heel": 420}
        normal = {v.key: v for v in evaluate(averaged, BmiCategory.NORMAL)}
        obese = {v.key: v for v in evaluate(averaged, BmiCategory.OBESE)}
        assert not normal["heel"].is_normal
        assert obese["heel"].is_normal

    def test_missing_region_reads_zero(self):
        verdicts = evaluate({}, BmiCategory.NORMAL)
        assert len(verdicts) == len(REGIONS)
        assert all(v.value == 0 and not v.is_normal for v in verdicts)

    def test_idempotent(self):
        averaged = {"greatToe": 250, "firstMetatarsal": 500, "fifthMetatarsal": 150, "heel": 0}
        first = evaluate(averaged, BmiCategory.OVERWEIGHT)
        second = evaluate(averaged, BmiCategory.OVERWEIGHT)
        assert first == second

    def test_all_normal_and_abnormal(self):
        averaged = {"greatToe": 250, "firstMetatarsal": 300, "fifthMetatarsal": 200, "heel": 350}
        verdicts = evaluate(averaged, BmiCategory.NORMAL)
        assert all_normal(verdicts)
        assert abnormal(verdicts) == []

        averaged["heel"] = 100
        verdicts = evaluate(averaged, BmiCategory.NORMAL)
        assert not all_normal(verdicts)
        assert [v.key for v in abnormal(verdicts)] == ["heel"]
