"""
Project cost roll-up.

Two margin figures live side by side and are not reconciled:
  - margin_cost: quoted_margin_rate (10%) of the contractor's quoted project
    cost, used for the estimate total;
  - dealer margin: the dealer's own percentage of material cost, shown on
    the Project Summary view.
"""

from typing import Dict, Iterable, Sequence

from paint_estimator.config import MarginSettings
from paint_estimator.models import (
    AreaConfiguration,
    DealerMarginSummary,
    LabourSummary,
    MaterialRequirement,
)
from paint_estimator.utils.numbers import safe_number


def compute_labour_cost(laborers: int, days: int, per_day_rate: float) -> float:
    return laborers * days * per_day_rate


class CostAggregator:
    def __init__(self, settings: MarginSettings = None):
        self.settings = settings or MarginSettings()

    @staticmethod
    def material_cost(requirements: Iterable[MaterialRequirement]) -> float:
        return sum(r.total_cost for r in requirements)

    @staticmethod
    def labour_cost(labour: LabourSummary) -> float:
        return compute_labour_cost(labour.laborers, labour.total_days, labour.per_day_rate)

    @staticmethod
    def quoted_project_cost(configs: Iterable[AreaConfiguration]) -> float:
        return sum(max(c.area, 0.0) * safe_number(c.per_sqft_rate) for c in configs)

    def margin_cost(self, quoted_project_cost: float) -> float:
        return self.settings.quoted_margin_rate * quoted_project_cost

    @staticmethod
    def quoted_by_category(configs: Iterable[AreaConfiguration]) -> Dict[str, Dict[str, float]]:
        out: Dict[str, Dict[str, float]] = {}
        for c in configs:
            bucket = out.setdefault(c.paint_type_category.value, {"area": 0.0, "cost": 0.0})
            bucket["area"] += c.area
            bucket["cost"] += c.area * safe_number(c.per_sqft_rate)
        return out

    def dealer_margin(self, material_cost: float, labour_cost: float,
                      margin_percentage: float = None) -> DealerMarginSummary:
        pct = self.settings.dealer_margin_percentage if margin_percentage is None else margin_percentage
        margin = material_cost * pct / 100
        return DealerMarginSummary(
            margin_percentage=pct,
            base_amount=material_cost,
            margin_cost=margin,
            total_cost=material_cost + labour_cost + margin,
        )

    def totals(self, configs: Sequence[AreaConfiguration], requirements: Iterable[MaterialRequirement],
               labour: LabourSummary) -> Dict[str, float]:
        material = self.material_cost(requirements)
        labour_total = self.labour_cost(labour)
        quoted = self.quoted_project_cost(configs)
        margin = self.margin_cost(quoted)
        return {
            "material_cost": material,
            "labour_cost": labour_total,
            "quoted_project_cost": quoted,
            "margin_cost": margin,
            "total_cost": material + labour_total + margin,
        }
