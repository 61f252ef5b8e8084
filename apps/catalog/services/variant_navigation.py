"""
Service for driving variant selection on a product page.
Loads a product's variant family from the catalog and runs the selection
state machine over it; the state itself is held by the client.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from django.conf import settings

from apps.catalog.exceptions import EmptyVariantFamily
from apps.catalog.models import Product, Variant
from .variant_matching import is_exact_match
from .variant_selection import SelectionState, SelectionStore, VariantSelector
from .variant_url import QuerySync, parse_selection_hints

logger = logging.getLogger(__name__)


class VariantNavigationService:
    """
    Service to handle navigation between the variants of one product.
    Selectors are built from actual variant data, not configured manually.
    """

    @staticmethod
    def get_variant_family(product: Product) -> Tuple[Dict[str, Variant], Optional[Variant]]:
        """
        Return the active variants of a product keyed by SKU, plus the base
        variant used when none are active.
        """
        variants = {variant.sku: variant for variant in product.active_variants()}
        base = product.base_variant
        if not variants and base is None:
            raise EmptyVariantFamily(f"Product '{product.slug}' has no variants")
        if not variants:
            variants = {base.sku: base}
        return variants, base

    @staticmethod
    def build_selector(product: Product) -> Tuple[VariantSelector, Dict[str, Variant]]:
        variants, base = VariantNavigationService.get_variant_family(product)
        selector = VariantSelector(
            [variant.to_snapshot() for variant in variants.values()],
            base_variant=base.to_snapshot() if base is not None else None,
        )
        return selector, variants

    @staticmethod
    def get_initial_selection(product: Product, query=None) -> Dict[str, Any]:
        """
        Selection for a freshly loaded page.

        Query parameters named after a group (`?size=M&color=Black`) seed the
        selection; every other group gets its first in-stock option.
        """
        selector, variants = VariantNavigationService.build_selector(product)
        hints = parse_selection_hints(query)

        store = SelectionStore(selector)
        sync = QuerySync(selector, query)
        store.initialize(hints)
        sync.attach(store)

        logger.debug("Initial selection for %s from hints %s: %s", product.slug, hints, store.state)
        return VariantNavigationService._selection_data(product, selector, variants, store, sync)

    @staticmethod
    def apply_selection(
        product: Product,
        selection: Optional[Mapping[str, str]],
        group_key: str,
        option_id: str,
        query=None,
    ) -> Dict[str, Any]:
        """
        Apply one option choice to a client-held selection.

        `query` is only the base the new query string is written onto; it is
        never read for hints here.
        """
        selector, variants = VariantNavigationService.build_selector(product)
        state = selector.clean_state(selection)

        store = SelectionStore(selector, state)
        sync = QuerySync(selector, query)
        sync.attach(store)
        store.select_option(group_key, option_id)

        logger.debug(
            "Selected %s=%s on %s: %s -> %s",
            group_key, option_id, product.slug, state, store.state,
        )
        return VariantNavigationService._selection_data(product, selector, variants, store, sync)

    @staticmethod
    def _selection_data(
        product: Product,
        selector: VariantSelector,
        variants: Dict[str, Variant],
        store: SelectionStore,
        sync: QuerySync,
    ) -> Dict[str, Any]:
        state: SelectionState = store.state
        resolved = store.variant
        selected_values = selector.selected_values(state)

        groups = []
        for group in selector.groups:
            groups.append({
                'key': group.key,
                'label': group.label,
                'selected_option_id': state.get(group.key),
                'selected_value': selector.selected_value(state, group.key),
                'options': [
                    {
                        'id': option.id,
                        'value': option.value,
                        'is_selected': selector.is_option_selected(state, group.key, option.id),
                        'is_available': selector.is_option_available(group, option),
                    }
                    for option in group.options
                ],
            })

        return {
            'product': {
                'id': product.id,
                'name': product.name,
                'slug': product.slug,
            },
            'groups': groups,
            'selection': state.to_dict(),
            'selected_values': selected_values,
            'variant': variants[resolved.id],
            'is_exact_match': is_exact_match(resolved, selected_values),
            'query_string': sync.query_string,
            'url': sync.url(settings.CATALOG_PRODUCT_PAGE_URL.format(slug=product.slug)),
        }
