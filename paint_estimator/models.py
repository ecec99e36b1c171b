"""
Data model for the estimation engine.

AreaConfiguration is the only input entity the engine owns a view of; every
other dataclass here is derived inside one estimation pass and frozen.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional, Tuple


class AreaType(str, Enum):
    WALL = "Wall"
    CEILING = "Ceiling"
    FLOOR = "Floor"
    ENAMEL = "Enamel"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value) -> "AreaType":
        if isinstance(value, AreaType):
            return value
        text = str(value or "").strip().lower()
        if text in ("enamel", "door & window", "door&window", "door and window"):
            return cls.ENAMEL
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.CUSTOM


class PaintTypeCategory(str, Enum):
    INTERIOR = "Interior"
    EXTERIOR = "Exterior"
    WATERPROOFING = "Waterproofing"


class PaintingSystem(str, Enum):
    FRESH = "Fresh Painting"
    REPAINTING = "Repainting"


class MaterialCategory(str, Enum):
    PUTTY = "Putty"
    PRIMER = "Primer"
    EMULSION = "Emulsion"
    ENAMEL_PRIMER = "Enamel Primer"
    ENAMEL_TOPCOAT = "Enamel Topcoat"

    @property
    def is_primer(self) -> bool:
        return self in (MaterialCategory.PRIMER, MaterialCategory.ENAMEL_PRIMER)


class LabourMode(str, Enum):
    AUTO = "auto"
    MANUAL = "manual"


# ----------------------------------------------------------------------
# Input side
# ----------------------------------------------------------------------
@dataclass
class SelectedMaterials:
    putty: str = ""
    primer: str = ""
    emulsion: str = ""


@dataclass
class CoatConfiguration:
    putty: int = 0
    primer: int = 0
    emulsion: int = 0


@dataclass
class RepaintingConfiguration:
    primer: int = 0
    emulsion: int = 0


@dataclass
class EnamelConfig:
    primer_type: str = ""
    primer_coats: int = 0
    enamel_type: str = ""
    enamel_coats: int = 0


@dataclass(frozen=True)
class Layer:
    name: str
    product: str
    coats: int
    category: MaterialCategory
    red_oxide: bool = False


ENAMEL_SEPARATE_MARKERS = ("varnish", "separate")
GENERIC_PRIMER_NAMES = {"", "none", "primer", "default", "generic", "select", "not selected"}


def is_real_primer(name: str) -> bool:
    """False for empty, 'None' and placeholder primer names."""
    text = (name or "").strip().lower()
    if text in GENERIC_PRIMER_NAMES:
        return False
    return not (text.startswith("select") or text.startswith("default") or text.startswith("generic"))


@dataclass
class AreaConfiguration:
    id: str
    area_type: AreaType
    label: str
    area: float
    per_sqft_rate: float = 0.0
    paint_type_category: PaintTypeCategory = PaintTypeCategory.INTERIOR
    painting_system: PaintingSystem = PaintingSystem.FRESH
    selected_materials: SelectedMaterials = field(default_factory=SelectedMaterials)
    coat_configuration: CoatConfiguration = field(default_factory=CoatConfiguration)
    repainting_configuration: RepaintingConfiguration = field(default_factory=RepaintingConfiguration)
    enamel_config: Optional[EnamelConfig] = None
    section_name: Optional[str] = None
    # Assigned once at ingestion, keyed by layer name (putty/primer/emulsion/enamel_primer/enamel).
    material_categories: Dict[str, MaterialCategory] = field(default_factory=dict)
    red_oxide_primer: bool = False

    @property
    def is_enamel(self) -> bool:
        return self.area_type == AreaType.ENAMEL

    @property
    def is_separate_section(self) -> bool:
        return bool(self.section_name) or self.area_type == AreaType.CUSTOM

    @property
    def enamel_bucket(self) -> Optional[str]:
        if not self.is_enamel:
            return None
        text = f"{self.label or ''} {self.section_name or ''}".lower()
        if any(marker in text for marker in ENAMEL_SEPARATE_MARKERS):
            return "separate"
        return "main"

    def _category(self, layer: str, default: MaterialCategory) -> MaterialCategory:
        return self.material_categories.get(layer, default)

    def active_layers(self) -> List[Layer]:
        """
        Layers with coats > 0 for the treatment system this area uses. Enamel
        areas only get a primer layer when a real primer product was chosen,
        so material and labour both work from this one list.
        """
        layers = []

        if self.is_enamel and self.enamel_config is not None:
            ec = self.enamel_config
            if ec.primer_coats > 0 and is_real_primer(ec.primer_type):
                layers.append(Layer("enamel_primer", ec.primer_type, ec.primer_coats,
                                    self._category("enamel_primer", MaterialCategory.ENAMEL_PRIMER),
                                    self.red_oxide_primer))
            if ec.enamel_coats > 0 and ec.enamel_type:
                layers.append(Layer("enamel", ec.enamel_type, ec.enamel_coats,
                                    self._category("enamel", MaterialCategory.ENAMEL_TOPCOAT)))
            return layers

        sm = self.selected_materials
        if self.painting_system == PaintingSystem.FRESH:
            coats = [
                ("putty", sm.putty, self.coat_configuration.putty, MaterialCategory.PUTTY),
                ("primer", sm.primer, self.coat_configuration.primer, MaterialCategory.PRIMER),
                ("emulsion", sm.emulsion, self.coat_configuration.emulsion, MaterialCategory.EMULSION),
            ]
        else:
            coats = [
                ("primer", sm.primer, self.repainting_configuration.primer, MaterialCategory.PRIMER),
                ("emulsion", sm.emulsion, self.repainting_configuration.emulsion, MaterialCategory.EMULSION),
            ]

        for name, product, count, default in coats:
            if count > 0:
                category = self._category(name, default)
                red_oxide = self.red_oxide_primer and category == MaterialCategory.ENAMEL_PRIMER
                layers.append(Layer(name, product or name.title(), count, category, red_oxide))
        return layers


# ----------------------------------------------------------------------
# Reference data
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class CoverageEntry:
    product_name: str
    coats: str
    min_coverage: float
    unit: str = ""


@dataclass(frozen=True)
class PricingEntry:
    product_name: str
    sizes: Dict[str, float]
    unit: str = "L"


# ----------------------------------------------------------------------
# Derived, one pass only
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class PackLine:
    pack_size_label: str
    pack_size: float
    count: int
    unit_price: float


@dataclass(frozen=True)
class PackCombination:
    lines: Tuple[PackLine, ...] = ()
    total_cost: float = 0.0

    @property
    def total_quantity(self) -> float:
        return sum(line.count * line.pack_size for line in self.lines)

    def describe(self) -> str:
        return " + ".join(f"{line.count}x{line.pack_size_label}" for line in self.lines)


@dataclass(frozen=True)
class MaterialRequirement:
    product_name: str
    category: MaterialCategory
    area: float
    coats: int
    coverage_rate: float
    raw_quantity: float
    required_quantity: int
    pack_combination: PackCombination
    total_cost: float
    unit: str
    coverage_fallback: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class LabourTask:
    product_name: str
    category: MaterialCategory
    area: float
    coats: int
    total_work: float
    base_rate: float
    coverage_rate: float
    days_required: int


@dataclass(frozen=True)
class ConfigurationGroup:
    key: str
    label: str
    priority: int
    configuration_ids: Tuple[str, ...]
    area: float
    materials: Tuple[MaterialRequirement, ...] = ()
    labour_tasks: Tuple[LabourTask, ...] = ()

    @property
    def labour_days(self) -> int:
        return sum(task.days_required for task in self.labour_tasks)

    @property
    def material_cost(self) -> float:
        return sum(m.total_cost for m in self.materials)


@dataclass(frozen=True)
class LabourSummary:
    mode: LabourMode
    laborers: int
    total_days: int
    per_day_rate: float
    labour_cost: float
    total_work: float


@dataclass(frozen=True)
class DealerMarginSummary:
    margin_percentage: float
    base_amount: float
    margin_cost: float
    total_cost: float


@dataclass(frozen=True)
class EstimationResult:
    material_cost: float
    labour_cost: float
    margin_cost: float
    total_cost: float
    quoted_project_cost: float
    groups: Tuple[ConfigurationGroup, ...]
    labour: LabourSummary
    dealer_margin: DealerMarginSummary
    quoted_by_category: Dict[str, Dict[str, float]] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()

    @property
    def fully_priced(self) -> bool:
        return not any(m.error for g in self.groups for m in g.materials)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["fully_priced"] = self.fully_priced
        for group, raw in zip(self.groups, data["groups"]):
            raw["labour_days"] = group.labour_days
            raw["material_cost"] = group.material_cost
        return _plain(data)


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
