"""
Rules deciding whether a proposed dish configuration is legal.

The evaluator is pure: it reads a CatalogSnapshot and never touches the
database. Checks run in a fixed order and the first failure is reported:

    dish -> size -> existence -> availability -> size limit
         -> dependencies -> incompatibilities

Dependencies are checked one level deep for every candidate. Because every
candidate is checked, an accepted set is closed under the dependency
relation, and cycles need no special handling.
"""

from decimal import Decimal
from typing import Optional, Sequence

from configurator.schemas.catalog import CatalogSnapshot
from configurator.schemas.violation import OrderViolation
from configurator.services.async_error_handler import OrderValidationError

CENTS = Decimal("0.01")


def check_existence(ingredient_ids: Sequence[int], snapshot: CatalogSnapshot) -> Optional[OrderViolation]:
    for ingredient_id in ingredient_ids:
        if ingredient_id not in snapshot.ingredients:
            return OrderViolation.unknown_ingredient(ingredient_id)
    return None


def check_availability(ingredient_ids: Sequence[int], snapshot: CatalogSnapshot) -> Optional[OrderViolation]:
    for ingredient_id in ingredient_ids:
        ingredient = snapshot.ingredients[ingredient_id]
        if ingredient.is_tracked and ingredient.availability <= 0:
            return OrderViolation.out_of_stock(ingredient.id, ingredient.name)
    return None


def check_size_limit(ingredient_ids: Sequence[int], snapshot: CatalogSnapshot) -> Optional[OrderViolation]:
    size = snapshot.size
    if len(ingredient_ids) > size.max_ingredients:
        return OrderViolation.size_limit_exceeded(size.name, size.max_ingredients)
    return None


def check_dependencies(ingredient_ids: Sequence[int], snapshot: CatalogSnapshot) -> Optional[OrderViolation]:
    selected = set(ingredient_ids)
    for ingredient_id in ingredient_ids:
        for required_id in snapshot.dependencies.get(ingredient_id, ()):
            if required_id not in selected:
                return OrderViolation.missing_dependency(
                    ingredient_id,
                    snapshot.ingredient_name(ingredient_id),
                    snapshot.ingredient_name(required_id),
                )
    return None


def check_incompatibilities(ingredient_ids: Sequence[int], snapshot: CatalogSnapshot) -> Optional[OrderViolation]:
    selected = set(ingredient_ids)
    for ingredient_id in ingredient_ids:
        for conflicting_id in snapshot.incompatibilities.get(ingredient_id, ()):
            if conflicting_id in selected:
                return OrderViolation.incompatible(
                    ingredient_id,
                    snapshot.ingredient_name(ingredient_id),
                    snapshot.ingredient_name(conflicting_id),
                )
    return None


INGREDIENT_CHECKS = (
    check_existence,
    check_availability,
    check_size_limit,
    check_dependencies,
    check_incompatibilities,
)


def evaluate(ingredient_ids: Sequence[int], snapshot: CatalogSnapshot) -> Optional[OrderViolation]:
    """
    Evaluate a candidate ingredient set against the catalog.

    Args:
        ingredient_ids: Candidate ingredient ids in selection order
        snapshot: Catalog state loaded for this dish, size and candidates

    Returns:
        None when the order is acceptable, otherwise the first violation found
    """
    if snapshot.dish is None:
        return OrderViolation.unknown_dish()
    if snapshot.size is None:
        return OrderViolation.unknown_size()

    # An empty selection is valid for any size, including max_ingredients=0
    if not ingredient_ids:
        return None

    for check in INGREDIENT_CHECKS:
        violation = check(ingredient_ids, snapshot)
        if violation is not None:
            return violation
    return None


def validate(ingredient_ids: Sequence[int], snapshot: CatalogSnapshot) -> None:
    """Like evaluate(), but raises OrderValidationError on the first violation."""
    violation = evaluate(ingredient_ids, snapshot)
    if violation is not None:
        raise OrderValidationError(violation)


def quote_total(ingredient_ids: Sequence[int], snapshot: CatalogSnapshot) -> Decimal:
    """Size price plus the price of every selected ingredient, to the cent."""
    total = Decimal(snapshot.size.price)
    for ingredient_id in ingredient_ids:
        total += Decimal(snapshot.ingredients[ingredient_id].price)
    return total.quantize(CENTS)
