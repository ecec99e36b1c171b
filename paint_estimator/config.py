import os
import pathlib
from dataclasses import dataclass, field
from typing import Dict, Any

import yaml

ROOT = pathlib.Path(__file__).resolve().parents[1]
PACKAGE_DIR = pathlib.Path(__file__).resolve().parent
DEFAULT_SETTINGS_PATH = ROOT / "config/estimator.yaml"


class Config:
    OUTPUT_DIR = "outputs"
    LOG_DIR = "logs"
    SCHEMA_DIR = PACKAGE_DIR / "schemas"


def _read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name, {})
    return value if isinstance(value, dict) else {}


DEFAULT_BASE_RATES = {
    "putty": 400.0,
    "interior_primer": 700.0,
    "exterior_primer": 550.0,
    "interior_emulsion": 700.0,
    "exterior_emulsion": 550.0,
    "enamel_red_oxide_primer": 300.0,
    "enamel_base_primer": 250.0,
    "enamel_topcoat": 280.0,
}


@dataclass
class LabourSettings:
    mode: str = "auto"
    working_hours_per_day: float = 7.0
    standard_hours: float = 8.0
    laborers_per_day: int = 1
    desired_completion_days: int = 5
    per_day_rate: float = 1100.0
    base_rates: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_BASE_RATES))

    @property
    def hours_factor(self) -> float:
        return self.working_hours_per_day / self.standard_hours


@dataclass
class MarginSettings:
    quoted_margin_rate: float = 0.10
    dealer_margin_percentage: float = 0.0


@dataclass
class CoverageDefaults:
    putty: float = 10.0
    primer: float = 100.0
    other: float = 120.0


@dataclass
class PackSettings:
    strategy: str = "greedy"
    remainder_tolerance: float = 0.01


@dataclass
class EstimatorSettings:
    labour: LabourSettings = field(default_factory=LabourSettings)
    margin: MarginSettings = field(default_factory=MarginSettings)
    coverage_defaults: CoverageDefaults = field(default_factory=CoverageDefaults)
    packs: PackSettings = field(default_factory=PackSettings)
    max_sqft: float = 100000.0
    ordering_memo_size: int = 64


def load_settings(path: pathlib.Path = None) -> EstimatorSettings:
    if path is None:
        path = pathlib.Path(os.getenv("PAINT_ESTIMATOR_CONFIG", str(DEFAULT_SETTINGS_PATH)))
    cfg = _read_yaml(path)

    labour_cfg = _section(cfg, "labour")
    base_rates = dict(DEFAULT_BASE_RATES)
    base_rates.update({k: float(v) for k, v in _section(labour_cfg, "base_rates").items()})

    labour = LabourSettings(
        mode=labour_cfg.get("mode", "auto"),
        working_hours_per_day=float(labour_cfg.get("working_hours_per_day", 7)),
        standard_hours=float(labour_cfg.get("standard_hours", 8)),
        laborers_per_day=int(labour_cfg.get("laborers_per_day", 1)),
        desired_completion_days=int(labour_cfg.get("desired_completion_days", 5)),
        per_day_rate=float(labour_cfg.get("per_day_rate", 1100)),
        base_rates=base_rates,
    )

    margin_cfg = _section(cfg, "margin")
    margin = MarginSettings(
        quoted_margin_rate=float(margin_cfg.get("quoted_margin_rate", 0.10)),
        dealer_margin_percentage=float(margin_cfg.get("dealer_margin_percentage", 0)),
    )

    cov_cfg = _section(cfg, "coverage_defaults")
    coverage_defaults = CoverageDefaults(
        putty=float(cov_cfg.get("putty", 10)),
        primer=float(cov_cfg.get("primer", 100)),
        other=float(cov_cfg.get("other", 120)),
    )

    pack_cfg = _section(cfg, "packs")
    packs = PackSettings(
        strategy=pack_cfg.get("strategy", "greedy"),
        remainder_tolerance=float(pack_cfg.get("remainder_tolerance", 0.01)),
    )

    # env overrides
    if os.getenv("LABOUR_PER_DAY_RATE"):
        labour.per_day_rate = float(os.environ["LABOUR_PER_DAY_RATE"])
    if os.getenv("LABORERS_PER_DAY"):
        labour.laborers_per_day = int(os.environ["LABORERS_PER_DAY"])
    packs.strategy = os.getenv("PACK_STRATEGY", packs.strategy)

    return EstimatorSettings(
        labour=labour,
        margin=margin,
        coverage_defaults=coverage_defaults,
        packs=packs,
        max_sqft=float(_section(cfg, "validation").get("max_sqft", 100000)),
        ordering_memo_size=int(_section(cfg, "ordering").get("memo_size", 64)),
    )
