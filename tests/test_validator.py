import pytest

from paint_estimator.processors.room_areas import calculate_room_areas
from paint_estimator.processors.validator import (
    MAX_SQFT_VALUE,
    check_configuration,
    validate_margin_percentage,
    validate_record,
    validate_sqft_input,
)
from paint_estimator.utils.errors import InvalidConfiguration


@pytest.mark.parametrize("value, valid, sanitized, message", [
    (250, True, 250.0, None),
    ("120.5", True, 120.5, None),
    (0, True, 0.0, None),
    ("abc", False, 0.0, "Invalid area value"),
    (None, False, 0.0, "Invalid area value"),
    (-10, False, 0.0, "Area cannot be negative"),
    (MAX_SQFT_VALUE + 1, False, MAX_SQFT_VALUE, "Area exceeds maximum allowed value (100,000 sq.ft)"),
])
def test_validate_sqft_input(value, valid, sanitized, message):
    result = validate_sqft_input(value)

    assert result.valid is valid
    assert result.sanitized_value == sanitized
    if message:
        assert result.errors == [message]


def test_check_configuration_collects_problems(make_config):
    config = make_config(area=-1, perSqFtRate=-5, coatConfiguration={"putty": -1, "primer": 0, "emulsion": 0})

    errors = check_configuration(config)

    assert errors == [
        "Wall Area: Area cannot be negative",
        "Wall Area: putty coats cannot be negative",
        "Wall Area: per sq.ft rate cannot be negative",
    ]


def test_valid_configuration(make_config):
    assert check_configuration(make_config()) == []


def test_validate_record_reports_schema_message():
    result = validate_record({"productName": "x"}, "pricing_row")

    assert not result.valid
    assert "'sizes' is a required property" in result.errors[0]


@pytest.mark.parametrize("value", [-1, 101, "ten", None])
def test_margin_out_of_range(value):
    with pytest.raises(InvalidConfiguration):
        validate_margin_percentage(value)


def test_margin_in_range():
    assert validate_margin_percentage("12.5") == 12.5


def test_room_areas():
    areas = calculate_room_areas(
        10, 12, 10,
        openings=[{"area": 21}],
        extra_surfaces=[{"area": 5}],
        door_window_grills=[{"area": 14.5}],
    )

    assert areas["floor_area"] == 120
    assert areas["ceiling_area"] == 120
    assert areas["wall_area"] == 440
    assert areas["adjusted_wall_area"] == 424
    assert areas["total_opening_area"] == 21
    assert areas["total_extra_surface"] == 5
    assert areas["total_door_window_grill_area"] == 14.5


def test_room_without_height_uses_floor_area():
    areas = calculate_room_areas(10.5, 4, 0)

    assert areas["wall_area"] == 42
    assert areas["adjusted_wall_area"] == 42


def test_room_areas_do_not_drift():
    areas = calculate_room_areas(0.1, 0.2, 0.3)

    assert areas["floor_area"] == 0.02
    assert areas["wall_area"] == 0.18
