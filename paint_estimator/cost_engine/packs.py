"""
Pack combination strategies.

GreedyPackOptimizer reproduces the historical quotation behaviour and is the
default. MinCostPackOptimizer is an exact minimum-cost cover that can be
swapped in through settings; it never under-provisions either.
"""

import logging
import math
from functools import reduce
from typing import Dict, List, Tuple

from paint_estimator.models import PackCombination, PackLine
from paint_estimator.utils.errors import PackCombinationUnsatisfiable
from paint_estimator.utils.numbers import parse_pack_size, safe_number

logger = logging.getLogger(__name__)

# (label, size, price)
PackOption = Tuple[str, float, float]


def pack_options(sizes: Dict[str, float]) -> List[PackOption]:
    """Turn a pricing entry's {label: price} map into usable options."""
    options = []
    for label, price in sizes.items():
        size = parse_pack_size(label)
        if size <= 0:
            logger.warning("Ignoring pack label without a size: %r", label)
            continue
        options.append((str(label), size, safe_number(price)))
    return options


class PackOptimizer:
    name = "base"

    def combine(self, required_quantity: float, options: List[PackOption]) -> PackCombination:
        if required_quantity <= 0:
            return PackCombination()
        if not options:
            raise PackCombinationUnsatisfiable(required_quantity)
        return self._combine(required_quantity, options)

    def _combine(self, required_quantity: float, options: List[PackOption]) -> PackCombination:
        raise NotImplementedError


class GreedyPackOptimizer(PackOptimizer):
    name = "greedy"

    def __init__(self, remainder_tolerance: float = 0.01):
        self.remainder_tolerance = remainder_tolerance

    def _combine(self, required_quantity, options):
        # largest pack first; label breaks size ties so the order is stable
        ordered = sorted(options, key=lambda o: (-o[1], o[0]))

        remaining = float(required_quantity)
        counts: Dict[str, List] = {}
        for label, size, price in ordered:
            count = math.floor(remaining / size)
            if count > 0:
                counts[label] = [label, size, count, price]
                remaining -= count * size

        if remaining > self.remainder_tolerance:
            label, size, price = min(ordered, key=lambda o: (o[1], o[0]))
            if label in counts:
                counts[label][2] += 1
            else:
                counts[label] = [label, size, 1, price]

        lines = tuple(PackLine(label, size, count, price) for label, size, count, price in counts.values())
        total = sum(line.count * line.unit_price for line in lines)
        return PackCombination(lines=lines, total_cost=total)


class MinCostPackOptimizer(PackOptimizer):
    """
    Exact minimum-cost cover of required_quantity by unbounded pack counts.
    Sizes are scaled to integer milli-units and reduced by their gcd so the
    table stays small for typical catalogues (0.9/1/4/10/20).
    """

    name = "min_cost"
    SCALE = 1000

    def _combine(self, required_quantity, options):
        scaled = [(label, size, price, round(size * self.SCALE)) for label, size, price in options]
        step = reduce(math.gcd, (s[3] for s in scaled))
        units = [(label, size, price, s // step) for label, size, price, s in scaled]

        target = math.ceil(round(required_quantity * self.SCALE) / step)
        limit = target + max(u[3] for u in units)

        INF = float("inf")
        best = [INF] * (limit + 1)
        choice = [-1] * (limit + 1)
        best[0] = 0.0
        for q in range(1, limit + 1):
            for idx, (_, _, price, u) in enumerate(units):
                if u <= q and best[q - u] + price < best[q]:
                    best[q] = best[q - u] + price
                    choice[q] = idx

        q_best = min(range(target, limit + 1), key=lambda q: (best[q], q))
        counts: Dict[int, int] = {}
        q = q_best
        while q > 0:
            idx = choice[q]
            counts[idx] = counts.get(idx, 0) + 1
            q -= units[idx][3]

        lines = tuple(
            PackLine(units[idx][0], units[idx][1], counts[idx], units[idx][2])
            for idx in sorted(counts, key=lambda i: (-units[i][1], units[i][0]))
        )
        total = sum(line.count * line.unit_price for line in lines)
        return PackCombination(lines=lines, total_cost=total)


STRATEGIES = {
    GreedyPackOptimizer.name: GreedyPackOptimizer,
    MinCostPackOptimizer.name: MinCostPackOptimizer,
}


def build_optimizer(strategy: str = "greedy", remainder_tolerance: float = 0.01) -> PackOptimizer:
    if strategy not in STRATEGIES:
        logger.warning("Unknown pack strategy %r; using greedy", strategy)
        strategy = GreedyPackOptimizer.name
    if strategy == GreedyPackOptimizer.name:
        return GreedyPackOptimizer(remainder_tolerance)
    return STRATEGIES[strategy]()
