"""
One estimation pass: configurations + coverage/pricing snapshot -> EstimationResult.

The pass is synchronous and rebuilds every derived value from its inputs.
The only thing kept between passes is the display-order memo, which is keyed
by configuration content.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from paint_estimator.config import EstimatorSettings
from paint_estimator.cost_engine.labour import LabourDayEstimator
from paint_estimator.cost_engine.material import MaterialRequirementCalculator
from paint_estimator.cost_engine.ordering import DisplayOrderingEngine, display_priority
from paint_estimator.cost_engine.packs import PackOptimizer, build_optimizer
from paint_estimator.cost_engine.summary import CostAggregator
from paint_estimator.models import (
    AreaConfiguration,
    ConfigurationGroup,
    CoverageEntry,
    EstimationResult,
    LabourMode,
    PricingEntry,
)
from paint_estimator.processors.validator import validate_configurations, validate_margin_percentage
from paint_estimator.resolvers.coverage import CoverageResolver
from paint_estimator.resolvers.pricing import PricingResolver

logger = logging.getLogger(__name__)

ENAMEL_GROUP_LABELS = {
    "main": "Enamel",
    "separate": "Varnish (Separate)",
}


def build_groups(ordered: Sequence[AreaConfiguration]) -> List[Tuple[str, str, int, List[AreaConfiguration]]]:
    """
    (key, label, priority, members) in display order. Each non-enamel area is
    its own group; enamel areas collapse into their main/separate bucket.
    """
    groups = []
    index: Dict[str, int] = {}
    for config in ordered:
        if config.is_enamel:
            key = f"enamel:{config.enamel_bucket}"
            if key in index:
                groups[index[key]][3].append(config)
                continue
            index[key] = len(groups)
            groups.append((key, ENAMEL_GROUP_LABELS[config.enamel_bucket], display_priority(config), [config]))
        else:
            groups.append((config.id, config.label, display_priority(config), [config]))
    return groups


class EstimationPipeline:
    def __init__(self, coverage_entries: Iterable[CoverageEntry], pricing_entries: Iterable[PricingEntry],
                 settings: EstimatorSettings = None, optimizer: PackOptimizer = None,
                 ordering: DisplayOrderingEngine = None):
        self.settings = settings or EstimatorSettings()
        self.coverage = CoverageResolver(coverage_entries, self.settings.coverage_defaults)
        self.pricing = PricingResolver(pricing_entries)
        self.optimizer = optimizer or build_optimizer(
            self.settings.packs.strategy, self.settings.packs.remainder_tolerance
        )
        if ordering is None:
            ordering = DisplayOrderingEngine(self.settings.ordering_memo_size)
        self.ordering = ordering
        self.materials = MaterialRequirementCalculator(self.coverage, self.pricing, self.optimizer)
        self.labour = LabourDayEstimator(self.settings.labour)
        self.aggregator = CostAggregator(self.settings.margin)

    def run(self, configs: Sequence[AreaConfiguration], labour_mode: Optional[LabourMode] = None,
            laborers_per_day: Optional[int] = None, desired_completion_days: Optional[int] = None,
            dealer_margin_percentage: Optional[float] = None) -> EstimationResult:
        validate_configurations(configs, self.settings.max_sqft)
        if dealer_margin_percentage is not None:
            dealer_margin_percentage = validate_margin_percentage(dealer_margin_percentage)

        logger.info("Estimating %d area configuration(s)", len(configs))

        ordered = self.ordering.order(configs)
        raw_groups = build_groups(ordered)

        tasks_by_group, labour = self.labour.estimate(
            [(key, members) for key, _, _, members in raw_groups],
            mode=labour_mode,
            laborers_per_day=laborers_per_day,
            desired_completion_days=desired_completion_days,
        )

        groups = []
        warnings = []
        for key, label, priority, members in raw_groups:
            if members[0].is_enamel:
                materials = self.materials.for_enamel_bucket(members)
            else:
                materials = self.materials.for_configuration(members[0])
            warnings.extend(f"{label}: {m.product_name}: {m.error}" for m in materials if m.error)
            groups.append(ConfigurationGroup(
                key=key,
                label=label,
                priority=priority,
                configuration_ids=tuple(c.id for c in members),
                area=sum(c.area for c in members),
                materials=tuple(materials),
                labour_tasks=tuple(tasks_by_group[key]),
            ))

        totals = self.aggregator.totals(
            ordered, [m for g in groups for m in g.materials], labour
        )
        dealer = self.aggregator.dealer_margin(
            totals["material_cost"], totals["labour_cost"], dealer_margin_percentage
        )

        result = EstimationResult(
            material_cost=totals["material_cost"],
            labour_cost=totals["labour_cost"],
            margin_cost=totals["margin_cost"],
            total_cost=totals["total_cost"],
            quoted_project_cost=totals["quoted_project_cost"],
            groups=tuple(groups),
            labour=labour,
            dealer_margin=dealer,
            quoted_by_category=self.aggregator.quoted_by_category(ordered),
            warnings=tuple(warnings),
        )
        logger.info(
            "Estimate done: material=%.2f labour=%.2f margin=%.2f total=%.2f (%d warning(s))",
            result.material_cost, result.labour_cost, result.margin_cost, result.total_cost, len(warnings),
        )
        return result
