import copy

import pytest

from paint_estimator.loader import configuration_from_dict
from paint_estimator.models import CoverageEntry, PricingEntry

BASE_RECORD = {
    "id": "wall-1",
    "areaType": "Wall",
    "label": "Wall Area",
    "area": 500,
    "perSqFtRate": 20,
    "paintTypeCategory": "Interior",
    "paintingSystem": "Fresh Painting",
    "selectedMaterials": {
        "putty": "AP TruCare Wall Putty",
        "primer": "AP TruCare Interior Wall Primer",
        "emulsion": "AP Royale Luxury Emulsion",
    },
    "coatConfiguration": {"putty": 0, "primer": 0, "emulsion": 0},
    "repaintingConfiguration": {"primer": 0, "emulsion": 0},
}


@pytest.fixture
def make_config():
    """Factory: make_config(id=..., area=..., coatConfiguration={...}) -> AreaConfiguration"""

    def _make(**overrides):
        record = copy.deepcopy(BASE_RECORD)
        record.update(overrides)
        return configuration_from_dict(record)

    return _make


@pytest.fixture
def make_enamel():
    def _make(id="enamel-1", area=100, label="Enamel Area", primer="", primer_coats=0,
              enamel="AP Apcolite Premium Gloss Enamel", enamel_coats=2, section=None, rate=30):
        return configuration_from_dict({
            "id": id,
            "areaType": "Door & Window",
            "label": label,
            "sectionName": section,
            "area": area,
            "perSqFtRate": rate,
            "paintTypeCategory": "Interior",
            "paintingSystem": "Fresh Painting",
            "enamelConfig": {
                "primerType": primer,
                "primerCoats": primer_coats,
                "enamelType": enamel,
                "enamelCoats": enamel_coats,
            },
        })

    return _make


@pytest.fixture
def coverage_entries():
    return [
        CoverageEntry("AP TruCare Wall Putty", "2 coats", 10.0, "kg"),
        CoverageEntry("AP TruCare Wall Putty", "1 coat", 20.0, "kg"),
        CoverageEntry("AP TruCare Interior Wall Primer", "1 coat", 100.0, "L"),
        CoverageEntry("AP Royale Luxury Emulsion", "2 coats", 120.0, "L"),
        CoverageEntry("AP Apcolite Premium Gloss Enamel", "2 coats", 100.0, "L"),
        CoverageEntry("AP Red Oxide Metal Primer", "1 coat", 120.0, "L"),
    ]


@pytest.fixture
def pricing_entries():
    return [
        PricingEntry("AP TruCare Wall Putty", {"20kg": 1000.0, "5kg": 300.0}, "kg"),
        PricingEntry("AP TruCare Interior Wall Primer", {"20L": 3000.0, "10L": 1600.0, "4L": 700.0, "1L": 190.0}),
        PricingEntry("AP Royale Luxury Emulsion", {"20L": 9000.0, "10L": 4700.0, "4L": 1950.0, "1L": 520.0}),
        PricingEntry("AP Apcolite Premium Gloss Enamel", {"4L": 900.0, "1L": 250.0}),
        PricingEntry("AP Red Oxide Metal Primer", {"4L": 800.0, "1L": 220.0}),
    ]
