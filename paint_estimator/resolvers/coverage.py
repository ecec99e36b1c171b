"""
Coverage lookup.

The coverage table is keyed by (normalised product name, coat label). The
stored figure already accounts for the coat count, so callers divide area by
it directly and never multiply by coats again.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from paint_estimator.config import CoverageDefaults
from paint_estimator.models import CoverageEntry, MaterialCategory
from paint_estimator.utils.errors import MissingCoverageData
from paint_estimator.utils.numbers import parse_coats

logger = logging.getLogger(__name__)

PACK_TOKEN_RE = re.compile(r"\(?\b\d+(?:\.\d+)?\s*(?:l|lt|ltr|ltrs|litre|litres|liter|liters|kg|kgs|ml|g|gm)\b\)?")
QUALIFIERS = {"base": "base coat", "top": "top coat"}


def normalize_product_name(name: str) -> str:
    """'AP Ace Emulsion 20L' -> 'ap ace emulsion'"""
    text = (name or "").lower()
    text = PACK_TOKEN_RE.sub(" ", text)
    text = re.sub(r"[()\[\]]", " ", text)
    return re.sub(r"\s+", " ", text).strip(" -")


def _strip_qualifier(name: str, qualifier: str) -> str:
    return re.sub(r"\s+", " ", name.replace(qualifier, " ")).strip(" -")


def coat_label(coats: int) -> str:
    return "1 coat" if coats == 1 else f"{coats} coats"


def coat_label_variants(coats: int) -> List[str]:
    primary = coat_label(coats)
    variants = [f"{coats} coats", f"{coats} coat", f"{coats}coats", f"{coats}coat", str(coats)]
    return [primary] + [v for v in variants if v != primary]


class CoverageResolver:
    def __init__(self, entries: Iterable[CoverageEntry], defaults: CoverageDefaults = None):
        self.defaults = defaults or CoverageDefaults()
        self._table: Dict[Tuple[str, str], CoverageEntry] = {}
        for entry in entries:
            key = (normalize_product_name(entry.product_name), self._normalize_label(entry.coats))
            # first row wins, the table is read-only reference data
            self._table.setdefault(key, entry)
        logger.debug("Coverage table loaded with %d keys", len(self._table))

    @staticmethod
    def _normalize_label(label) -> str:
        text = re.sub(r"\s+", " ", str(label or "").strip().lower())
        if re.fullmatch(r"\d+", text):
            return coat_label(int(text))
        return text

    def _candidate_names(self, product: str, category: Optional[MaterialCategory]) -> List[str]:
        name = normalize_product_name(product)
        names = [name]
        if category is not None:
            qualifier = QUALIFIERS["base"] if category.is_primer else QUALIFIERS["top"]
            stripped = _strip_qualifier(name, qualifier)
            if stripped and stripped != name:
                names.append(stripped)
        return names

    def find(self, product: str, coats: int, category: Optional[MaterialCategory] = None) -> Optional[CoverageEntry]:
        coats = parse_coats(coats)
        for name in self._candidate_names(product, category):
            for label in coat_label_variants(coats):
                entry = self._table.get((name, label))
                if entry is not None:
                    return entry
        return None

    def default_for(self, category: Optional[MaterialCategory]) -> float:
        if category == MaterialCategory.PUTTY:
            return self.defaults.putty
        if category is not None and category.is_primer:
            return self.defaults.primer
        return self.defaults.other

    def lookup(self, product: str, coats: int, category: Optional[MaterialCategory] = None,
               strict: bool = False) -> Tuple[float, bool]:
        """
        Returns (coverage_rate, fallback_used). With strict=True a miss raises
        MissingCoverageData instead of falling back to the category default.
        """
        entry = self.find(product, coats, category)
        if entry is not None and entry.min_coverage > 0:
            return entry.min_coverage, False

        if strict:
            raise MissingCoverageData(f"No coverage for '{product}' at {coat_label(parse_coats(coats))}")

        rate = self.default_for(category)
        logger.warning(
            "Coverage missing for '%s' (%s); using %s default %.1f",
            product, coat_label(parse_coats(coats)),
            category.value if category else "other", rate,
        )
        return rate, True

    def resolve(self, product: str, coats: int, category: Optional[MaterialCategory] = None) -> float:
        return self.lookup(product, coats, category)[0]
