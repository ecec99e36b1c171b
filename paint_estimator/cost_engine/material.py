import logging
import math
from typing import Dict, List, Tuple

from paint_estimator.models import (
    AreaConfiguration,
    MaterialCategory,
    MaterialRequirement,
    PackCombination,
)
from paint_estimator.cost_engine.packs import GreedyPackOptimizer, PackOptimizer, pack_options
from paint_estimator.resolvers.coverage import CoverageResolver, normalize_product_name
from paint_estimator.resolvers.pricing import PricingResolver, infer_unit
from paint_estimator.utils.errors import PackCombinationUnsatisfiable

logger = logging.getLogger(__name__)

PRICE_UNAVAILABLE = "Price data unavailable"
PACK_UNAVAILABLE = "Pack combination not found for full quantity"


def required_quantity(area: float, coverage_rate: float) -> Tuple[float, int]:
    """(raw, rounded-up) quantity. Coverage already includes the coat count."""
    if area <= 0 or coverage_rate <= 0:
        return 0.0, 0
    raw = area / coverage_rate
    return raw, math.ceil(raw)


class MaterialRequirementCalculator:
    def __init__(self, coverage: CoverageResolver, pricing: PricingResolver,
                 optimizer: PackOptimizer = None):
        self.coverage = coverage
        self.pricing = pricing
        self.optimizer = optimizer or GreedyPackOptimizer()

    def requirement(self, product: str, category: MaterialCategory, area: float, coats: int) -> MaterialRequirement:
        rate, fallback = self.coverage.lookup(product, coats, category)
        raw, required = required_quantity(area, rate)

        def build(combination, cost, unit, error=None):
            return MaterialRequirement(
                product_name=product,
                category=category,
                area=area,
                coats=coats,
                coverage_rate=rate,
                raw_quantity=raw,
                required_quantity=required,
                pack_combination=combination,
                total_cost=cost,
                unit=unit,
                coverage_fallback=fallback,
                error=error,
            )

        pricing = self.pricing.resolve(product)
        if pricing is None:
            return build(PackCombination(), 0.0, infer_unit(product), PRICE_UNAVAILABLE)

        try:
            combination = self.optimizer.combine(required, pack_options(pricing.sizes))
        except PackCombinationUnsatisfiable as e:
            logger.warning("%s: %s", product, e)
            return build(PackCombination(), 0.0, pricing.unit, PACK_UNAVAILABLE)

        return build(combination, combination.total_cost, pricing.unit)

    def for_configuration(self, config: AreaConfiguration) -> List[MaterialRequirement]:
        if config.is_enamel:
            return self.for_enamel_bucket([config])
        return [
            self.requirement(layer.product, layer.category, config.area, layer.coats)
            for layer in config.active_layers()
        ]

    def for_enamel_bucket(self, configs: List[AreaConfiguration]) -> List[MaterialRequirement]:
        """
        Enamel areas of one bucket are summed per (layer, product, coats)
        before quantities are computed, so large packs are priced once over
        the combined area instead of per door/window entry.
        """
        merged: Dict[tuple, List] = {}
        for config in configs:
            for layer in config.active_layers():
                key = (layer.name, normalize_product_name(layer.product), layer.coats, layer.category)
                if key in merged:
                    merged[key][1] += config.area
                else:
                    merged[key] = [layer, config.area]

        return [
            self.requirement(layer.product, layer.category, area, layer.coats)
            for layer, area in merged.values()
        ]

    def calculate(self, configs: List[AreaConfiguration]) -> Dict[str, List[MaterialRequirement]]:
        """{group key: requirements}; enamel areas are keyed 'enamel:main' / 'enamel:separate'."""
        out: Dict[str, List[MaterialRequirement]] = {}
        buckets: Dict[str, List[AreaConfiguration]] = {}
        for config in configs:
            if config.is_enamel:
                buckets.setdefault(f"enamel:{config.enamel_bucket}", []).append(config)
            else:
                out[config.id] = self.for_configuration(config)
        for key, members in buckets.items():
            out[key] = self.for_enamel_bucket(members)
        return out
