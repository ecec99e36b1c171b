"""
Display ordering for area configurations.

1 Wall, 2 Ceiling, 3 Floor, 4 other separate/custom areas,
5 Enamel (main), 6 Enamel separate / varnish. Ties keep input order.

The ordering of a configuration set is memoised under a content
fingerprint, so once a set has been shown in some order every later pass
over the same set (partial data, reordered input, repeated runs) gets that
same order back. Only the most recently used sets are kept.
"""

import hashlib
import logging
from collections import OrderedDict
from typing import Dict, List, Sequence, Tuple

from paint_estimator.models import AreaConfiguration, AreaType

logger = logging.getLogger(__name__)

PRIORITY_WALL = 1
PRIORITY_CEILING = 2
PRIORITY_FLOOR = 3
PRIORITY_SEPARATE = 4
PRIORITY_ENAMEL_MAIN = 5
PRIORITY_ENAMEL_SEPARATE = 6

DEFAULT_MEMO_SIZE = 64

_TYPE_PRIORITY = {
    AreaType.WALL: PRIORITY_WALL,
    AreaType.CEILING: PRIORITY_CEILING,
    AreaType.FLOOR: PRIORITY_FLOOR,
}


def display_priority(config: AreaConfiguration) -> int:
    if config.is_enamel:
        if config.enamel_bucket == "separate":
            return PRIORITY_ENAMEL_SEPARATE
        return PRIORITY_ENAMEL_MAIN
    if config.is_separate_section:
        return PRIORITY_SEPARATE
    return _TYPE_PRIORITY.get(config.area_type, PRIORITY_SEPARATE)


def _content_key(config: AreaConfiguration) -> str:
    return "|".join([
        str(config.id),
        config.area_type.value,
        repr(float(config.area)),
        config.label or "",
        config.section_name or "",
    ])


def fingerprint(configs: Sequence[AreaConfiguration]) -> str:
    """Order-insensitive hash of the configuration set."""
    lines = sorted(_content_key(c) for c in configs)
    return hashlib.sha256("\n".join(lines).encode("utf-8")).hexdigest()


class DisplayOrderingEngine:
    """
    Holds the orders of the most recently seen configuration sets, at most
    max_entries of them; the least recently used set is dropped first.
    """

    def __init__(self, max_entries: int = DEFAULT_MEMO_SIZE):
        self.max_entries = max(int(max_entries), 1)
        self._memo: "OrderedDict[str, Tuple[str, ...]]" = OrderedDict()

    @staticmethod
    def priority(config: AreaConfiguration) -> int:
        return display_priority(config)

    def fingerprint(self, configs: Sequence[AreaConfiguration]) -> str:
        return fingerprint(configs)

    def order(self, configs: Sequence[AreaConfiguration]) -> List[AreaConfiguration]:
        key = fingerprint(configs)
        content_order = self._memo.get(key)

        if content_order is None:
            ranked = sorted(enumerate(configs), key=lambda pair: (display_priority(pair[1]), pair[0]))
            content_order = tuple(_content_key(c) for _, c in ranked)
            self._memo[key] = content_order
            logger.debug("Ordering computed for fingerprint %s", key[:12])
            while len(self._memo) > self.max_entries:
                self._memo.popitem(last=False)
        else:
            self._memo.move_to_end(key)

        # same content key may appear twice; hand them out in input order
        buckets: Dict[str, List[AreaConfiguration]] = {}
        for config in configs:
            buckets.setdefault(_content_key(config), []).append(config)
        return [buckets[k].pop(0) for k in content_order]

    def cache_clear(self):
        self._memo.clear()

    def __len__(self):
        return len(self._memo)
