import math
import re

_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")


def safe_number(value, default=0.0):
    """
    Coerce user/collaborator supplied values to float.
    None, '', non-numeric strings, NaN and infinities all map to `default`.
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return default
    try:
        num = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(num) or math.isinf(num):
        return default
    return num


def parse_coverage_range(coverage_range) -> float:
    """
    "140-160" -> 140.0, "120" -> 120.0, "" -> 0.0
    The leading number is the usable minimum coverage.
    """
    if coverage_range is None:
        return 0.0
    if isinstance(coverage_range, (int, float)) and not isinstance(coverage_range, bool):
        return safe_number(coverage_range)
    m = _NUMBER_RE.search(str(coverage_range))
    return float(m.group(1)) if m else 0.0


def parse_pack_size(label) -> float:
    """'20L' -> 20.0, '0.9 L' -> 0.9, 'Small' -> 0.0"""
    if label is None:
        return 0.0
    m = _NUMBER_RE.search(str(label))
    return float(m.group(1)) if m else 0.0


def parse_coats(value) -> int:
    """2 -> 2, '2 coats' -> 2, '1 Coat' -> 1, junk -> 0"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    m = re.search(r"\d+", str(value or ""))
    return int(m.group(0)) if m else 0
