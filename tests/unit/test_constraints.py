"""
Unit tests for the constraint evaluator.

These run against hand-built catalog snapshots; no database is involved.
"""

from decimal import Decimal

import pytest

from configurator.schemas.violation import ViolationKind
from configurator.services import constraints
from configurator.services.async_error_handler import OrderValidationError
from tests.async_test_utils import make_snapshot

MOZZARELLA = (1, "Mozzarella", "1.00", 3)
TOMATOES = (2, "Tomatoes", "0.50", None)
MUSHROOMS = (3, "Mushrooms", "0.80", 3)
EGGS = (7, "Eggs", "1.00", None)
OLIVES = (5, "Olives", "0.70", None)
CARROTS = (10, "Carrots", "0.40", None)
POTATOES = (11, "Potatoes", "0.30", None)


def pizza_snapshot(size=("Medium", "7.00", 5)):
    return make_snapshot(
        [MOZZARELLA, TOMATOES, MUSHROOMS, EGGS, OLIVES, CARROTS, POTATOES],
        size=size,
        dependencies={1: [2]},
        incompatibilities=[(7, 3)],
    )


def test_mozzarella_with_tomatoes_is_accepted():
    """Mozzarella with its required Tomatoes passes every rule."""
    snapshot = pizza_snapshot()
    assert constraints.evaluate([1, 2], snapshot) is None
    assert constraints.quote_total([1, 2], snapshot) == Decimal("8.50")


def test_missing_dependency_names_both_ingredients():
    """Mozzarella alone is rejected because Tomatoes were not selected."""
    violation = constraints.evaluate([1], pizza_snapshot())

    assert violation.kind == ViolationKind.MISSING_DEPENDENCY
    assert violation.ingredient_id == 1
    assert violation.message == "Mozzarella requires Tomatoes"


@pytest.mark.parametrize("ingredient_ids", [[7, 3], [3, 7]])
def test_incompatible_pair_rejected_in_either_order(ingredient_ids):
    """Eggs and Mushrooms are never accepted together, whatever the selection order."""
    violation = constraints.evaluate(ingredient_ids, pizza_snapshot())

    assert violation.kind == ViolationKind.INCOMPATIBLE
    assert {violation.ingredient_name, violation.related_name} == {"Eggs", "Mushrooms"}


def test_incompatibility_reports_first_selected_ingredient():
    violation = constraints.evaluate([3, 7], pizza_snapshot())
    assert violation.message == "Mushrooms is incompatible with Eggs"


def test_size_limit_exceeded_for_small():
    """Four compatible, available ingredients do not fit on a Small dish."""
    violation = constraints.evaluate([10, 11, 7, 5], pizza_snapshot(size=("Small", "5.00", 3)))

    assert violation.kind == ViolationKind.SIZE_LIMIT_EXCEEDED
    assert violation.limit == 3
    assert violation.message == "Small dishes can only have up to 3 ingredients"


def test_size_limit_allows_exactly_max():
    assert constraints.evaluate([10, 11, 7], pizza_snapshot(size=("Small", "5.00", 3))) is None


def test_empty_selection_is_valid():
    snapshot = pizza_snapshot()
    assert constraints.evaluate([], snapshot) is None
    assert constraints.quote_total([], snapshot) == Decimal("7.00")


def test_empty_selection_valid_when_size_allows_none():
    snapshot = pizza_snapshot(size=("Plain", "4.00", 0))
    assert constraints.evaluate([], snapshot) is None

    violation = constraints.evaluate([2], snapshot)
    assert violation.kind == ViolationKind.SIZE_LIMIT_EXCEEDED


def test_unknown_dish_checked_first():
    snapshot = make_snapshot([MOZZARELLA], dish=False, size=None)
    violation = constraints.evaluate([99], snapshot)

    assert violation.kind == ViolationKind.UNKNOWN_DISH
    assert violation.message == "Invalid dish selected"


def test_unknown_size_checked_before_ingredients():
    snapshot = make_snapshot([MOZZARELLA], size=None)
    violation = constraints.evaluate([99], snapshot)

    assert violation.kind == ViolationKind.UNKNOWN_SIZE
    assert violation.message == "Invalid size selected"


def test_unknown_ingredient():
    violation = constraints.evaluate([2, 42], pizza_snapshot())

    assert violation.kind == ViolationKind.UNKNOWN_INGREDIENT
    assert violation.ingredient_id == 42
    assert violation.message == "Ingredient with id 42 not found"


def test_tracked_ingredient_at_zero_is_out_of_stock():
    snapshot = make_snapshot([(8, "Anchovies", "1.50", 0), TOMATOES])
    violation = constraints.evaluate([2, 8], snapshot)

    assert violation.kind == ViolationKind.OUT_OF_STOCK
    assert violation.message == "Anchovies is not available"


def test_unlimited_ingredient_is_always_available():
    snapshot = make_snapshot([TOMATOES])
    assert snapshot.ingredients[2].is_tracked is False
    assert constraints.evaluate([2], snapshot) is None


def test_availability_checked_before_size_limit():
    """An out-of-stock ingredient wins over an oversized selection."""
    snapshot = make_snapshot(
        [(8, "Anchovies", "1.50", 0), TOMATOES, CARROTS, POTATOES],
        size=("Small", "5.00", 3),
    )
    violation = constraints.evaluate([2, 10, 11, 8], snapshot)
    assert violation.kind == ViolationKind.OUT_OF_STOCK


def test_size_limit_checked_before_dependencies():
    snapshot = pizza_snapshot(size=("Small", "5.00", 3))
    violation = constraints.evaluate([1, 10, 11, 5], snapshot)
    assert violation.kind == ViolationKind.SIZE_LIMIT_EXCEEDED


def test_dependencies_checked_before_incompatibilities():
    violation = constraints.evaluate([7, 3, 1], pizza_snapshot())
    assert violation.kind == ViolationKind.MISSING_DEPENDENCY


def test_first_missing_dependency_in_selection_order():
    snapshot = make_snapshot(
        [MOZZARELLA, TOMATOES, (9, "Parmesan", "1.20", None), OLIVES],
        dependencies={9: [1], 1: [2], 2: [5]},
    )
    violation = constraints.evaluate([9, 1], snapshot)
    assert violation.message == "Mozzarella requires Tomatoes"


def test_dependency_on_unselected_unnamed_ingredient():
    """A dependency target missing from the snapshot is still reported by id."""
    snapshot = make_snapshot([MOZZARELLA], dependencies={1: [77]})
    violation = constraints.evaluate([1], snapshot)
    assert violation.message == "Mozzarella requires ingredient ID 77"


def test_dependency_cycle_satisfied_when_both_selected():
    snapshot = make_snapshot([MOZZARELLA, TOMATOES], dependencies={1: [2], 2: [1]})

    assert constraints.evaluate([1, 2], snapshot) is None
    assert constraints.evaluate([2], snapshot).kind == ViolationKind.MISSING_DEPENDENCY


def test_validate_raises_order_validation_error():
    with pytest.raises(OrderValidationError) as exc_info:
        constraints.validate([1], pizza_snapshot())

    assert exc_info.value.kind == ViolationKind.MISSING_DEPENDENCY
    assert str(exc_info.value) == "Mozzarella requires Tomatoes"


def test_validate_accepts_valid_selection():
    assert constraints.validate([1, 2, 5], pizza_snapshot()) is None


def test_quote_total_rounds_to_cents():
    snapshot = make_snapshot([(1, "Saffron", "0.333", None)], size=("Medium", "7.005", 5))
    assert constraints.quote_total([1], snapshot) == Decimal("7.34")
