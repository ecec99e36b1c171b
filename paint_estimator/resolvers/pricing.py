import logging
from typing import Dict, Iterable, Optional

from paint_estimator.models import PricingEntry
from paint_estimator.resolvers.coverage import normalize_product_name
from paint_estimator.utils.errors import MissingPricingData

logger = logging.getLogger(__name__)

MASS_MARKERS = ("putty", "polymer")


def infer_unit(product_name: str) -> str:
    name = (product_name or "").lower()
    return "kg" if any(m in name for m in MASS_MARKERS) else "L"


class PricingResolver:
    """
    Dealer pricing lookup: exact normalised name first, then a substring
    match in either direction. Missing products resolve to None so the
    caller can flag the line rather than price it at zero.
    """

    def __init__(self, entries: Iterable[PricingEntry]):
        self._table: Dict[str, PricingEntry] = {}
        for entry in entries:
            self._table.setdefault(normalize_product_name(entry.product_name), entry)

    def _partial_match(self, name: str) -> Optional[str]:
        candidates = [key for key in self._table if key and (key in name or name in key)]
        if not candidates:
            return None
        # longest key first, then alphabetical
        candidates.sort(key=lambda k: (-len(k), k))
        return candidates[0]

    def resolve(self, product_name: str) -> Optional[PricingEntry]:
        name = normalize_product_name(product_name)
        if not name:
            return None

        entry = self._table.get(name)
        if entry is None:
            key = self._partial_match(name)
            if key is None:
                logger.warning("No pricing entry for '%s'", product_name)
                return None
            logger.debug("Pricing for '%s' matched partially on '%s'", product_name, key)
            entry = self._table[key]

        return PricingEntry(
            product_name=entry.product_name,
            sizes=dict(entry.sizes),
            unit=infer_unit(product_name),
        )

    def require(self, product_name: str) -> PricingEntry:
        entry = self.resolve(product_name)
        if entry is None:
            raise MissingPricingData(product_name)
        return entry
