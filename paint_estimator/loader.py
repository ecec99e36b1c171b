import json
import os
from typing import Any, Dict, List

from paint_estimator.models import (
    AreaConfiguration,
    AreaType,
    CoatConfiguration,
    CoverageEntry,
    EnamelConfig,
    MaterialCategory,
    PaintTypeCategory,
    PaintingSystem,
    PricingEntry,
    RepaintingConfiguration,
    SelectedMaterials,
)
from paint_estimator.processors.classifier import classify_configuration
from paint_estimator.processors.validator import validate_array
from paint_estimator.resolvers.pricing import infer_unit
from paint_estimator.utils.errors import InvalidConfiguration
from paint_estimator.utils.numbers import parse_coats, parse_coverage_range, safe_number


def _read_json(path):
    if not os.path.exists(path):
        raise InvalidConfiguration(f"Input file missing: {path}")
    with open(path, "r") as fh:
        try:
            return json.load(fh)
        except json.JSONDecodeError as e:
            raise InvalidConfiguration(f"Input file is not valid JSON: {path}", [str(e)])


def _rows(data, key):
    """Accept a bare list or {"<key>": [...]}."""
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise InvalidConfiguration(f"Expected a list of {key}")
    return data


def _check(records: List[Dict], schema_name: str):
    result = validate_array(records, schema_name)
    if not result.valid:
        raise InvalidConfiguration(f"{schema_name} rows failed schema validation", result.errors)


# ----------------------------------------------------------------------
# Coverage / pricing reference tables
# ----------------------------------------------------------------------
def coverage_entry_from_dict(row: Dict[str, Any]) -> CoverageEntry:
    coats = row.get("coats")
    label = f"{coats}" if isinstance(coats, int) else str(coats or "")
    return CoverageEntry(
        product_name=row["productName"],
        coats=label,
        min_coverage=parse_coverage_range(row.get("coverageRange")),
        unit=row.get("unit") or "",
    )


def pricing_entry_from_dict(row: Dict[str, Any]) -> PricingEntry:
    return PricingEntry(
        product_name=row["productName"],
        sizes={str(k): safe_number(v) for k, v in (row.get("sizes") or {}).items()},
        unit=infer_unit(row["productName"]),
    )


def load_coverage_table(path) -> List[CoverageEntry]:
    rows = _rows(_read_json(path), "coverage")
    _check(rows, "coverage_row")
    return [coverage_entry_from_dict(r) for r in rows]


def load_pricing_table(path) -> List[PricingEntry]:
    rows = _rows(_read_json(path), "pricing")
    _check(rows, "pricing_row")
    return [pricing_entry_from_dict(r) for r in rows]


# ----------------------------------------------------------------------
# Area configurations
# ----------------------------------------------------------------------
def configuration_from_dict(raw: Dict[str, Any]) -> AreaConfiguration:
    """
    Build an AreaConfiguration from the collaborator's camelCase record and
    stamp material categories onto it (explicit ones are kept).
    """
    sm = raw.get("selectedMaterials") or {}
    cc = raw.get("coatConfiguration") or {}
    rc = raw.get("repaintingConfiguration") or {}
    ec = raw.get("enamelConfig")

    label = raw.get("label") or str(raw.get("areaType") or "")
    area = safe_number(raw.get("area"), default=None)
    if area is None:
        # junk area text must not be priced as 0 sq.ft
        raise InvalidConfiguration("Invalid area configuration", [f"{label or raw['id']}: Invalid area value"])

    enamel = None
    if ec:
        enamel = EnamelConfig(
            primer_type=ec.get("primerType") or "",
            primer_coats=parse_coats(ec.get("primerCoats")),
            enamel_type=ec.get("enamelType") or "",
            enamel_coats=parse_coats(ec.get("enamelCoats")),
        )

    config = AreaConfiguration(
        id=str(raw["id"]),
        area_type=AreaType.parse(raw.get("areaType")),
        label=label,
        area=area,
        per_sqft_rate=safe_number(raw.get("perSqFtRate")),
        paint_type_category=PaintTypeCategory(raw.get("paintTypeCategory") or "Interior"),
        painting_system=PaintingSystem(raw.get("paintingSystem") or "Fresh Painting"),
        selected_materials=SelectedMaterials(
            putty=sm.get("putty") or "",
            primer=sm.get("primer") or "",
            emulsion=sm.get("emulsion") or "",
        ),
        coat_configuration=CoatConfiguration(
            putty=int(cc.get("putty", 0)),
            primer=int(cc.get("primer", 0)),
            emulsion=int(cc.get("emulsion", 0)),
        ),
        repainting_configuration=RepaintingConfiguration(
            primer=int(rc.get("primer", 0)),
            emulsion=int(rc.get("emulsion", 0)),
        ),
        enamel_config=enamel,
        section_name=raw.get("sectionName") or None,
        material_categories={
            layer: MaterialCategory(value)
            for layer, value in (raw.get("materialCategories") or {}).items()
        },
    )
    classify_configuration(config)
    return config


def parse_configurations(rows: List[Dict[str, Any]]) -> List[AreaConfiguration]:
    _check(rows, "area_configuration")
    return [configuration_from_dict(r) for r in rows]


def load_configurations(path) -> List[AreaConfiguration]:
    return parse_configurations(_rows(_read_json(path), "configurations"))
