# footpress/analysis/thresholds.py
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from footpress.analysis.bmi import BmiCategory
from footpress.reference.regions import REGIONS, Region


@dataclass(frozen=True)
class Verdict:
    key: str
    name: str
    value: float
    range: Tuple[int, int]
    is_normal: bool


def in_range(value: float, bounds: Tuple[int, int]) -> bool:
    lo, hi = bounds
    return lo <= value <= hi


def evaluate(averaged: Dict[str, float], category: BmiCategory,
             regions: Iterable[Region] = REGIONS) -> List[Verdict]:
    """
    Compare each region's averaged pressure with the range for the BMI category.

    Regions missing from `averaged` are treated as 0. Nothing is cached, so calling
    this repeatedly with the same inputs always yields the same verdicts.
    """
    verdicts = []
    for region in regions:
        value = averaged.get(region.key, 0)
        bounds = region.range_for(category)
        verdicts.append(Verdict(
            key=region.key,
            name=region.name,
            value=value,
            range=bounds,
            is_normal=in_range(value, bounds),
        ))
    return verdicts


def all_normal(verdicts: Iterable[Verdict]) -> bool:
    return all(v.is_normal for v in verdicts)


def abnormal(verdicts: Iterable[Verdict]) -> List[Verdict]:
    return [v for v in verdicts if not v.is_normal]
