import pytest

from paint_estimator.cost_engine.packs import (
    GreedyPackOptimizer,
    MinCostPackOptimizer,
    build_optimizer,
    pack_options,
)
from paint_estimator.utils.errors import PackCombinationUnsatisfiable


def _counts(combination):
    return {line.pack_size_label: line.count for line in combination.lines}


def test_greedy_takes_largest_packs_first():
    combo = GreedyPackOptimizer().combine(50, pack_options({"20kg": 1000, "5kg": 300}))

    assert _counts(combo) == {"20kg": 2, "5kg": 2}
    assert combo.total_cost == 2600
    assert combo.total_quantity == 50


def test_greedy_tops_up_with_smallest_pack():
    combo = GreedyPackOptimizer().combine(13, pack_options({"10L": 1000, "4L": 450}))

    assert _counts(combo) == {"10L": 1, "4L": 1}
    assert combo.total_cost == 1450
    assert combo.total_quantity >= 13


def test_greedy_top_up_merges_into_existing_line():
    combo = GreedyPackOptimizer().combine(4.5, pack_options({"2L": 100}))

    assert len(combo.lines) == 1
    assert _counts(combo) == {"2L": 3}
    assert combo.total_cost == 300


def test_greedy_ignores_remainder_within_tolerance():
    combo = GreedyPackOptimizer().combine(4.005, pack_options({"2L": 100}))

    assert _counts(combo) == {"2L": 2}


def test_zero_requirement_is_empty():
    combo = GreedyPackOptimizer().combine(0, pack_options({"2L": 100}))

    assert combo.lines == ()
    assert combo.total_cost == 0


def test_no_packs_is_an_explicit_error():
    with pytest.raises(PackCombinationUnsatisfiable):
        GreedyPackOptimizer().combine(5, [])


def test_greedy_never_under_provisions():
    options = pack_options({"20L": 3000, "10L": 1600, "4L": 700, "0.9L": 190})
    optimizer = GreedyPackOptimizer()
    for required in range(1, 80):
        assert optimizer.combine(required, options).total_quantity >= required


def test_pack_labels_without_size_are_skipped():
    options = pack_options({"Bulk": 10, "4L": 700})

    assert options == [("4L", 4.0, 700.0)]


def test_min_cost_can_beat_greedy():
    options = pack_options({"10L": 1000, "4L": 300})

    greedy = GreedyPackOptimizer().combine(12, options)
    exact = MinCostPackOptimizer().combine(12, options)

    assert greedy.total_cost == 1300
    assert exact.total_cost == 900
    assert _counts(exact) == {"4L": 3}


def test_min_cost_covers_requirement():
    options = pack_options({"20L": 3000, "10L": 1600, "4L": 700, "1L": 190})
    optimizer = MinCostPackOptimizer()
    for required in (1, 3, 7, 19, 33):
        combo = optimizer.combine(required, options)
        assert combo.total_quantity >= required
        assert combo.total_cost <= GreedyPackOptimizer().combine(required, options).total_cost


def test_build_optimizer_by_name():
    assert isinstance(build_optimizer("min_cost"), MinCostPackOptimizer)
    assert isinstance(build_optimizer("greedy"), GreedyPackOptimizer)
    assert isinstance(build_optimizer("bogus"), GreedyPackOptimizer)
