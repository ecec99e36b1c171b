# processors/room_areas.py

"""
Room measurement -> paintable areas.

Dimensions are in feet; sub-areas (openings, extra surfaces, door/window
grills) are lists of dicts with an "area" key in sq.ft. Arithmetic runs in
integer hundredths so repeated recomputation never drifts.
"""

from typing import Dict, List, Optional

from paint_estimator.utils.numbers import safe_number


def _to_hundredths(value) -> int:
    return round(safe_number(value) * 100)


def _sum_sub_areas(items: Optional[List[Dict]]) -> int:
    # sq.ft -> sq.(1/100 ft)
    return sum(round(safe_number(item.get("area")) * 10000) for item in (items or []))


def calculate_room_areas(length, width, height, openings=None, extra_surfaces=None,
                         door_window_grills=None) -> Dict[str, float]:
    l = _to_hundredths(length)
    w = _to_hundredths(width)
    h = _to_hundredths(height)

    floor = l * w
    wall = 2 * (l + w) * h if h > 0 else floor

    opening_total = _sum_sub_areas(openings)
    extra_total = _sum_sub_areas(extra_surfaces)
    door_window_total = _sum_sub_areas(door_window_grills)

    adjusted_wall = wall - opening_total + extra_total

    return {
        "floor_area": floor / 10000,
        "wall_area": wall / 10000,
        "ceiling_area": floor / 10000,
        "adjusted_wall_area": adjusted_wall / 10000,
        "total_opening_area": opening_total / 10000,
        "total_extra_surface": extra_total / 10000,
        "total_door_window_grill_area": door_window_total / 10000,
    }
