"""
Matching of selected attribute values against a family of variants.

Resolution is always two-step: an exact match wins whenever one exists, and
only then does the looser best-match scoring run. Color is the asymmetric
axis: exact matching compares the variant's own color, loose matching also
accepts any color listed in the variant's `colors`.
"""

import logging
from typing import Dict, Mapping, Optional, Sequence

from apps.catalog.exceptions import EmptyVariantFamily
from .variant_options import VariantKind, VariantSnapshot

logger = logging.getLogger(__name__)


def variant_supports_option(variant: VariantSnapshot, group_key, value) -> bool:
    """Loose match: does the variant support this option value at all?"""
    kind = VariantKind.from_key(group_key)
    if kind is None:
        return False
    if kind is VariantKind.COLOR:
        return variant.color == value or value in variant.colors
    return value in variant.values_for(kind)


def variant_has_exact_option(variant: VariantSnapshot, group_key, value) -> bool:
    """Strict match: for color the variant's own color must equal the value."""
    kind = VariantKind.from_key(group_key)
    if kind is None:
        return False
    if kind is VariantKind.COLOR:
        return variant.color == value
    return value in variant.values_for(kind)


def variant_option_value(variant: VariantSnapshot, group_key) -> Optional[str]:
    """The value used to auto-fill a group from a resolved variant."""
    kind = VariantKind.from_key(group_key)
    if kind is None:
        return None
    values = variant.values_for(kind)
    return values[0] if values else None


def match_score(variant: VariantSnapshot, selected_values: Mapping[str, str]) -> int:
    return sum(
        1 for group_key, value in selected_values.items()
        if variant_supports_option(variant, group_key, value)
    )


def _prefer_in_stock(candidates):
    for variant in candidates:
        if variant.in_stock:
            return variant
    return candidates[0]


def find_exact_match(
    variants: Sequence[VariantSnapshot],
    selected_values: Mapping[str, str],
) -> Optional[VariantSnapshot]:
    """
    Find the variant matching ALL selected values exactly.

    An empty selection never matches. Among matches an in-stock variant is
    preferred, otherwise the first one in catalog order.
    """
    if not selected_values:
        return None

    matches = [
        variant for variant in variants
        if all(
            variant_has_exact_option(variant, group_key, value)
            for group_key, value in selected_values.items()
        )
    ]
    if not matches:
        return None
    return _prefer_in_stock(matches)


def find_best_match(
    variants: Sequence[VariantSnapshot],
    selected_values: Mapping[str, str],
) -> VariantSnapshot:
    """
    Fallback match, only meaningful when no exact match exists.

    Variants loosely matching every selected value come first (in-stock
    preferred). Otherwise the variant matching the most values wins, ties
    going to catalog order.
    """
    if not variants:
        raise EmptyVariantFamily("Cannot pick a best match from an empty variant list")

    loose_matches = [
        variant for variant in variants
        if all(
            variant_supports_option(variant, group_key, value)
            for group_key, value in selected_values.items()
        )
    ]
    if loose_matches:
        return _prefer_in_stock(loose_matches)

    best_variant = variants[0]
    best_score = 0
    for variant in variants:
        score = match_score(variant, selected_values)
        if score > best_score:
            best_score = score
            best_variant = variant
    return best_variant


def resolve_variant(
    variants: Sequence[VariantSnapshot],
    selected_values: Mapping[str, str],
    base_variant: Optional[VariantSnapshot] = None,
) -> VariantSnapshot:
    """Exact match if there is one, best match otherwise."""
    family = list(variants)
    if not family and base_variant is not None:
        family = [base_variant]

    exact = find_exact_match(family, selected_values)
    if exact is not None:
        logger.debug("Exact match %s for %s", exact.id, dict(selected_values))
        return exact

    best = find_best_match(family, selected_values)
    logger.debug("No exact match for %s, falling back to %s", dict(selected_values), best.id)
    return best


def is_exact_match(variant: VariantSnapshot, selected_values: Dict[str, str]) -> bool:
    return bool(selected_values) and all(
        variant_has_exact_option(variant, group_key, value)
        for group_key, value in selected_values.items()
    )
