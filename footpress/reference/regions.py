# footpress/reference/regions.py
from dataclasses import dataclass
from typing import Dict, List, Tuple

from footpress.analysis.bmi import BmiCategory

Range = Tuple[int, int]


@dataclass(frozen=True)
class Region:
    name: str
    key: str
    ranges: Dict[BmiCategory, Range]
    cause: str
    treatment: str
    top_px: int
    left_px: int

    def range_for(self, category: BmiCategory) -> Range:
        return self.ranges[BmiCategory(category)]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "key": self.key,
            "ranges": {c.value: list(r) for c, r in self.ranges.items()},
            "suggestion": {"cause": self.cause, "treatment": self.treatment},
            "topPx": self.top_px,
            "leftPx": self.left_px,
        }


# Order matters: it matches sensor1..sensor4 on the insole
REGIONS: List[Region] = [
    Region(
        name="Great Toe",
        key="greatToe",
        ranges={
            BmiCategory.NORMAL: (200, 300),
            BmiCategory.OVERWEIGHT: (250, 350),
            BmiCategory.OBESE: (300, 400),
        },
        cause="Insufficient push-off or neurological issue.",
        treatment="Strengthen toe flexors or consult a podiatrist.",
        top_px=40,
        left_px=165,
    ),
    Region(
        name="1st Metatarsal Head",
        key="firstMetatarsal",
        ranges={
            BmiCategory.NORMAL: (250, 350),
            BmiCategory.OVERWEIGHT: (300, 400),
            BmiCategory.OBESE: (350, 450),
        },
        cause="Excessive forefoot loading.",
        treatment="Use cushioned insoles or offloading techniques.",
        top_px=130,
        left_px=135,
    ),
    Region(
        name="5th Metatarsal Head",
        key="fifthMetatarsal",
        ranges={
            BmiCategory.NORMAL: (150, 250),
            BmiCategory.OVERWEIGHT: (200, 300),
            BmiCategory.OBESE: (250, 350),
        },
        cause="Instability during lateral push-off.",
        treatment="Wear stable footwear or try lateral strengthening.",
        top_px=230,
        left_px=160,
    ),
    Region(
        name="Heel",
        key="heel",
        ranges={
            BmiCategory.NORMAL: (300, 400),
            BmiCategory.OVERWEIGHT: (350, 450),
            BmiCategory.OBESE: (400, 500),
        },
        cause="Heel strike impact is low or shifted load.",
        treatment="Check gait, consider cushioned heel inserts.",
        top_px=370,
        left_px=180,
    ),
]

REGION_KEYS = [r.key for r in REGIONS]

# Sensor JSON field -> region key
SENSOR_FIELDS = {
    "sensor1_kPa": "greatToe",
    "sensor2_kPa": "firstMetatarsal",
    "sensor3_kPa": "fifthMetatarsal",
    "sensor4_kPa": "heel",
}


def region_by_key(key: str) -> Region:
    for r in REGIONS:
        if r.key == key:
            return r
    raise KeyError(key)
