"""
Name based material classification.

Only used while ingesting configurations: the category is stamped onto the
AreaConfiguration once and the calculators never look at product names to
decide how a layer behaves.
"""

from typing import Dict

from paint_estimator.models import AreaConfiguration, MaterialCategory

OIL_MARKERS = ("enamel", "oil")
OXIDE_MARKERS = ("oxide",)


def is_red_oxide(name: str) -> bool:
    text = (name or "").lower()
    return any(m in text for m in OXIDE_MARKERS)


def classify_layer(layer: str, product: str, enamel_area: bool = False,
                   oxide_primer: bool = False) -> MaterialCategory:
    """
    oxide_primer: the area's primer is red oxide, which puts its topcoat on
    the oil-based system whatever the topcoat is called.
    """
    name = (product or "").lower()

    if layer == "putty":
        return MaterialCategory.PUTTY
    if layer == "enamel_primer":
        return MaterialCategory.ENAMEL_PRIMER
    if layer == "enamel":
        return MaterialCategory.ENAMEL_TOPCOAT

    oil_based = any(m in name for m in OIL_MARKERS) or is_red_oxide(name)
    if layer == "primer":
        if enamel_area or oil_based:
            return MaterialCategory.ENAMEL_PRIMER
        return MaterialCategory.PRIMER
    if enamel_area or oxide_primer or any(m in name for m in OIL_MARKERS):
        return MaterialCategory.ENAMEL_TOPCOAT
    return MaterialCategory.EMULSION


def classify_configuration(config: AreaConfiguration) -> Dict[str, MaterialCategory]:
    """
    Fill in categories the author did not set explicitly.
    Returns the full mapping; explicit categories always win.
    """
    sm = config.selected_materials
    names = {
        "putty": sm.putty,
        "primer": sm.primer,
        "emulsion": sm.emulsion,
    }
    if config.enamel_config is not None:
        names["enamel_primer"] = config.enamel_config.primer_type
        names["enamel"] = config.enamel_config.enamel_type

    oxide_primer = is_red_oxide(sm.primer)
    categories = {}
    for layer, product in names.items():
        categories[layer] = classify_layer(layer, product, enamel_area=config.is_enamel,
                                           oxide_primer=oxide_primer)
    categories.update(config.material_categories)

    config.material_categories = categories
    primer_name = config.enamel_config.primer_type if config.enamel_config else sm.primer
    config.red_oxide_primer = config.red_oxide_primer or is_red_oxide(primer_name)
    return categories
