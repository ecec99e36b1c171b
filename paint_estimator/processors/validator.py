# processors/validator.py
import json
import logging
from functools import lru_cache
from typing import List, Dict

from jsonschema import validate, ValidationError

from paint_estimator.config import Config
from paint_estimator.models import AreaConfiguration
from paint_estimator.utils.errors import InvalidConfiguration
from paint_estimator.utils.numbers import safe_number

logger = logging.getLogger(__name__)

MAX_SQFT_VALUE = 100000.0
MIN_SQFT_VALUE = 0.0

SCHEMAS = {
    "area_configuration": "area_configuration_v1.json",
    "coverage_row": "coverage_row_v1.json",
    "pricing_row": "pricing_row_v1.json",
}


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict:
    with open(Config.SCHEMA_DIR / SCHEMAS[name], "r") as f:
        return json.load(f)


class ValidationResult:
    def __init__(self, valid: bool, errors=None, sanitized_value=None):
        self.valid = valid
        self.errors = errors or []
        self.sanitized_value = sanitized_value


def validate_record(record: Dict, schema_name: str) -> ValidationResult:
    try:
        validate(instance=record, schema=load_schema(schema_name))
        return ValidationResult(valid=True)
    except ValidationError as e:
        return ValidationResult(valid=False, errors=[e.message])


def validate_array(records: List[Dict], schema_name: str) -> ValidationResult:
    errors = []
    for i, r in enumerate(records):
        res = validate_record(r, schema_name)
        if not res.valid:
            errors.append({"index": i, "errors": res.errors})
    if errors:
        return ValidationResult(valid=False, errors=errors)
    return ValidationResult(valid=True)


def validate_sqft_input(value, max_sqft: float = MAX_SQFT_VALUE) -> ValidationResult:
    """
    Sanitise a user-entered area. Negative values clamp to 0, oversized
    values clamp to the maximum, junk becomes 0. The error text is meant
    for the form that submitted the value.
    """
    if safe_number(value, default=None) is None:
        return ValidationResult(False, ["Invalid area value"], 0.0)

    num = safe_number(value)
    if num < MIN_SQFT_VALUE:
        return ValidationResult(False, ["Area cannot be negative"], 0.0)
    if num > max_sqft:
        return ValidationResult(
            False,
            [f"Area exceeds maximum allowed value ({max_sqft:,.0f} sq.ft)"],
            max_sqft,
        )
    return ValidationResult(True, sanitized_value=num)


def check_configuration(config: AreaConfiguration, max_sqft: float = MAX_SQFT_VALUE) -> List[str]:
    errors = []
    label = config.label or config.id

    area_check = validate_sqft_input(config.area, max_sqft)
    if not area_check.valid:
        errors.extend(f"{label}: {e}" for e in area_check.errors)

    coats = {
        "putty": config.coat_configuration.putty,
        "primer": config.coat_configuration.primer,
        "emulsion": config.coat_configuration.emulsion,
        "repaint primer": config.repainting_configuration.primer,
        "repaint emulsion": config.repainting_configuration.emulsion,
    }
    if config.enamel_config is not None:
        coats["enamel primer"] = config.enamel_config.primer_coats
        coats["enamel"] = config.enamel_config.enamel_coats
    for layer, count in coats.items():
        if count < 0:
            errors.append(f"{label}: {layer} coats cannot be negative")

    if safe_number(config.per_sqft_rate) < 0:
        errors.append(f"{label}: per sq.ft rate cannot be negative")
    return errors


def validate_configurations(configs: List[AreaConfiguration], max_sqft: float = MAX_SQFT_VALUE):
    """Raise InvalidConfiguration listing every problem found."""
    errors = []
    seen = set()
    for config in configs:
        errors.extend(check_configuration(config, max_sqft))
        if config.id in seen:
            errors.append(f"{config.label or config.id}: duplicate configuration id '{config.id}'")
        seen.add(config.id)
    if errors:
        logger.warning("Rejected %d configuration problem(s)", len(errors))
        raise InvalidConfiguration("Invalid area configuration", errors)


def validate_margin_percentage(value) -> float:
    pct = safe_number(value, default=None)
    if pct is None or pct < 0 or pct > 100:
        raise InvalidConfiguration("Margin must be between 0 and 100", [f"margin={value!r}"])
    return pct
