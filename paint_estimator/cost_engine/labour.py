import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from paint_estimator.config import LabourSettings
from paint_estimator.models import (
    AreaConfiguration,
    LabourMode,
    LabourSummary,
    LabourTask,
    Layer,
    MaterialCategory,
    PaintTypeCategory,
)
from paint_estimator.cost_engine.summary import compute_labour_cost
from paint_estimator.resolvers.coverage import normalize_product_name

logger = logging.getLogger(__name__)


class LabourDayEstimator:
    """
    Turns painted area into labour days using fixed daily output rates
    (sq.ft per laborer per standard 8h day), scaled to the actual working
    hours. Days are rounded up per task, summed per group, then summed
    across groups; the grand total is never rounded on its own.
    """

    def __init__(self, settings: LabourSettings = None):
        self.settings = settings or LabourSettings()

    def base_rate(self, layer: Layer, paint_type: PaintTypeCategory) -> float:
        rates = self.settings.base_rates
        exterior = paint_type == PaintTypeCategory.EXTERIOR

        if layer.category == MaterialCategory.PUTTY:
            return rates["putty"]
        if layer.category == MaterialCategory.PRIMER:
            return rates["exterior_primer"] if exterior else rates["interior_primer"]
        if layer.category == MaterialCategory.EMULSION:
            return rates["exterior_emulsion"] if exterior else rates["interior_emulsion"]
        if layer.category == MaterialCategory.ENAMEL_PRIMER:
            return rates["enamel_red_oxide_primer"] if layer.red_oxide else rates["enamel_base_primer"]
        return rates["enamel_topcoat"]

    def task(self, layer: Layer, area: float, paint_type: PaintTypeCategory, laborers: int = 1) -> LabourTask:
        base = self.base_rate(layer, paint_type)
        adjusted = base * self.settings.hours_factor
        total_work = area * layer.coats
        laborers = max(int(laborers), 1)
        days = math.ceil(total_work / (adjusted * laborers)) if total_work > 0 and adjusted > 0 else 0
        return LabourTask(
            product_name=layer.product,
            category=layer.category,
            area=area,
            coats=layer.coats,
            total_work=total_work,
            base_rate=base,
            coverage_rate=adjusted,
            days_required=days,
        )

    def tasks_for_configuration(self, config: AreaConfiguration, laborers: int = 1) -> List[LabourTask]:
        if config.area <= 0:
            return []
        return [
            self.task(layer, config.area, config.paint_type_category, laborers)
            for layer in config.active_layers()
        ]

    def tasks_for_enamel_bucket(self, configs: Sequence[AreaConfiguration], laborers: int = 1) -> List[LabourTask]:
        """Areas of one enamel bucket are summed per layer before days are computed."""
        merged: Dict[tuple, List] = {}
        for config in configs:
            for layer in config.active_layers():
                key = (layer.name, normalize_product_name(layer.product), layer.coats,
                       layer.category, layer.red_oxide)
                if key in merged:
                    merged[key][1] += config.area
                else:
                    merged[key] = [layer, config.area, config.paint_type_category]
        return [
            self.task(layer, area, paint_type, laborers)
            for layer, area, paint_type in merged.values()
            if area > 0
        ]

    def tasks_for_group(self, configs: Sequence[AreaConfiguration], laborers: int = 1) -> List[LabourTask]:
        if len(configs) == 1 and not configs[0].is_enamel:
            return self.tasks_for_configuration(configs[0], laborers)
        return self.tasks_for_enamel_bucket(configs, laborers)

    def laborers_needed(self, tasks: Sequence[LabourTask], desired_days: int) -> int:
        """
        Manual mode back-solve. Uses the plain mean of the task rates, not a
        work-weighted one.
        """
        if not tasks or desired_days <= 0:
            return 0
        total_work = sum(t.total_work for t in tasks)
        average = sum(t.coverage_rate for t in tasks) / len(tasks)
        if total_work <= 0 or average <= 0:
            return 0
        return math.ceil(total_work / (average * desired_days))

    def estimate(self, groups: Sequence[Tuple[str, Sequence[AreaConfiguration]]],
                 mode: LabourMode = None, laborers_per_day: Optional[int] = None,
                 desired_completion_days: Optional[int] = None):
        """
        Returns ({group key: tasks}, LabourSummary).
        """
        mode = LabourMode(mode or self.settings.mode)
        laborers = self.settings.laborers_per_day if laborers_per_day is None else laborers_per_day
        desired = (self.settings.desired_completion_days
                   if desired_completion_days is None else desired_completion_days)

        if mode == LabourMode.MANUAL:
            single = [t for _, configs in groups for t in self.tasks_for_group(configs, 1)]
            laborers = self.laborers_needed(single, desired)
            total_days = desired if laborers > 0 else 0
        else:
            laborers = max(int(laborers), 1)

        tasks = {key: self.tasks_for_group(configs, max(laborers, 1)) for key, configs in groups}
        total_work = sum(t.total_work for group in tasks.values() for t in group)

        if mode == LabourMode.AUTO:
            total_days = sum(sum(t.days_required for t in group) for group in tasks.values())

        logger.info("Labour (%s): %d laborer(s) x %d day(s)", mode.value, laborers, total_days)
        summary = LabourSummary(
            mode=mode,
            laborers=laborers,
            total_days=total_days,
            per_day_rate=self.settings.per_day_rate,
            labour_cost=compute_labour_cost(laborers, total_days, self.settings.per_day_rate),
            total_work=total_work,
        )
        return tasks, summary
