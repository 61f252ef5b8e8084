"""
Variant resolution services.

The modules re-exported here are pure Python and never touch the database;
`variant_navigation` bridges them to the catalog models.
"""

from .variant_options import (
    GROUP_ORDER,
    VariantGroup,
    VariantKind,
    VariantOption,
    VariantSnapshot,
    build_variant_groups,
    normalize_option_value,
)
from .variant_matching import (
    find_best_match,
    find_exact_match,
    resolve_variant,
    variant_has_exact_option,
    variant_supports_option,
)
from .variant_selection import SelectionState, SelectionStore, VariantSelector
from .variant_url import QuerySync, parse_selection_hints, selection_query

__all__ = [
    'GROUP_ORDER',
    'VariantGroup',
    'VariantKind',
    'VariantOption',
    'VariantSnapshot',
    'build_variant_groups',
    'normalize_option_value',
    'find_best_match',
    'find_exact_match',
    'resolve_variant',
    'variant_has_exact_option',
    'variant_supports_option',
    'SelectionState',
    'SelectionStore',
    'VariantSelector',
    'QuerySync',
    'parse_selection_hints',
    'selection_query',
]
