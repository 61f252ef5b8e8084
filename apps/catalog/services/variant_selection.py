"""
Selection state for a product page.

The shopper's choices are held as `group key -> option id`. Transitions are
pure: `VariantSelector.select_option` returns a new `SelectionState` and
never touches the one it was given. `SelectionStore` wraps a selector with
the current state and notifies subscribers (such as the URL sync) after
every change.

Auto-fill rule: when a choice is made, groups that have no selection yet are
filled from the resolved variant. A group that already has a selection is
never overwritten, whichever match path was taken.
"""

import logging
import threading
from collections.abc import Mapping
from typing import Callable, Dict, List, Optional, Sequence

from apps.catalog.exceptions import UnknownVariantOption
from .variant_matching import (
    find_best_match,
    find_exact_match,
    resolve_variant,
    variant_option_value,
    variant_supports_option,
)
from .variant_options import VariantGroup, VariantOption, VariantSnapshot, build_variant_groups

logger = logging.getLogger(__name__)


class SelectionState(Mapping):
    """Immutable mapping of group key to selected option id."""

    def __init__(self, selections=None):
        self._selections = dict(selections or {})

    def __getitem__(self, key):
        return self._selections[key]

    def __iter__(self):
        return iter(self._selections)

    def __len__(self):
        return len(self._selections)

    def __repr__(self):
        return f"SelectionState({self._selections!r})"

    def with_option(self, group_key, option_id) -> 'SelectionState':
        selections = dict(self._selections)
        selections[group_key] = option_id
        return SelectionState(selections)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._selections)


class VariantSelector:
    """
    A product family together with its groups, and the transitions over it.

    The selector itself holds no selection; every method takes the state it
    works on, so one selector can serve any number of pages.
    """

    def __init__(
        self,
        variants: Sequence[VariantSnapshot],
        base_variant: Optional[VariantSnapshot] = None,
        groups: Optional[Sequence[VariantGroup]] = None,
    ):
        family = list(variants)
        if not family and base_variant is not None:
            family = [base_variant]
        self.variants = tuple(family)
        self.base_variant = base_variant
        if groups is None:
            groups = build_variant_groups(self.variants, base_variant)
        self.groups = tuple(groups)
        self._groups_by_key = {group.key: group for group in self.groups}

    def get_group(self, group_key) -> Optional[VariantGroup]:
        return self._groups_by_key.get(group_key)

    def get_option(self, group_key, option_id) -> Optional[VariantOption]:
        group = self.get_group(group_key)
        if group is None:
            return None
        return group.get_option(option_id)

    # -------------------------------------------------------------------------
    # State construction
    # -------------------------------------------------------------------------

    def initial_state(self, hints: Optional[Mapping] = None) -> SelectionState:
        """
        Seed a selection from deep-link hints, then give every remaining
        group its first option that some in-stock variant supports.
        """
        selections = {}
        for group_key, value in (hints or {}).items():
            group = self.get_group(group_key)
            if group is None:
                logger.debug("Ignoring hint for unknown group '%s'", group_key)
                continue
            option = group.match_option(value)
            if option is None:
                logger.debug("Ignoring hint %s=%r: no matching option", group_key, value)
                continue
            selections[group.key] = option.id

        for group in self.groups:
            if group.key in selections or not group.options:
                continue
            selections[group.key] = self.default_option(group).id

        return SelectionState(selections)

    def is_option_available(self, group: VariantGroup, option: VariantOption) -> bool:
        """True when some in-stock variant supports the option."""
        return any(
            variant.in_stock and variant_supports_option(variant, group.key, option.value)
            for variant in self.variants
        )

    def default_option(self, group: VariantGroup) -> VariantOption:
        for option in group.options:
            if self.is_option_available(group, option):
                return option
        return group.options[0]

    def clean_state(self, selections: Optional[Mapping]) -> SelectionState:
        """Drop entries referring to groups or options this family lacks."""
        cleaned = {}
        for group_key, option_id in (selections or {}).items():
            if self.get_option(group_key, option_id) is None:
                logger.debug("Dropping stale selection %s=%r", group_key, option_id)
                continue
            cleaned[group_key] = option_id
        return SelectionState(cleaned)

    # -------------------------------------------------------------------------
    # Transition
    # -------------------------------------------------------------------------

    def select_option(self, state: SelectionState, group_key, option_id) -> SelectionState:
        group = self.get_group(group_key)
        if group is None:
            raise UnknownVariantOption(group_key)
        if group.get_option(option_id) is None:
            raise UnknownVariantOption(group_key, option_id)

        updated = state.with_option(group_key, option_id)
        selected = self.selected_values(updated)

        matched = find_exact_match(self.variants, selected)
        if matched is None:
            matched = find_best_match(self.variants, selected)

        selections = updated.to_dict()
        for other in self.groups:
            if other.key in selections:
                continue
            value = variant_option_value(matched, other.key)
            if value is None:
                continue
            option = other.find_option_by_value(value)
            if option is not None:
                selections[other.key] = option.id

        return SelectionState(selections)

    # -------------------------------------------------------------------------
    # Derived reads
    # -------------------------------------------------------------------------

    def selected_values(self, state: Mapping) -> Dict[str, str]:
        values = {}
        for group_key, option_id in state.items():
            option = self.get_option(group_key, option_id)
            if option is not None:
                values[group_key] = option.value
        return values

    def selected_value(self, state: Mapping, group_key) -> Optional[str]:
        option = self.get_option(group_key, state.get(group_key))
        return option.value if option is not None else None

    def is_option_selected(self, state: Mapping, group_key, option_id) -> bool:
        return state.get(group_key) == option_id

    def resolve(self, state: Mapping) -> VariantSnapshot:
        return resolve_variant(self.variants, self.selected_values(state), self.base_variant)


class SelectionStore:
    """
    Holds the current selection for one page and publishes changes.

    Transitions are serialized, so a select call runs start to finish before
    the next one is applied.
    """

    def __init__(self, selector: VariantSelector, state: Optional[SelectionState] = None):
        self.selector = selector
        self._state = state if state is not None else SelectionState()
        self._lock = threading.RLock()
        self._subscribers: List[Callable[[SelectionState], None]] = []

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def variant(self) -> VariantSnapshot:
        return self.selector.resolve(self._state)

    def subscribe(self, callback: Callable[[SelectionState], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def initialize(self, hints: Optional[Mapping] = None) -> SelectionState:
        """Apply page-load hints; does nothing once a selection exists."""
        with self._lock:
            if self._state:
                return self._state
            self._set_state(self.selector.initial_state(hints))
            return self._state

    def select_option(self, group_key, option_id) -> SelectionState:
        with self._lock:
            self._set_state(self.selector.select_option(self._state, group_key, option_id))
            return self._state

    def is_option_selected(self, group_key, option_id) -> bool:
        return self.selector.is_option_selected(self._state, group_key, option_id)

    def selected_value(self, group_key) -> Optional[str]:
        return self.selector.selected_value(self._state, group_key)

    def _set_state(self, state):
        if state == self._state:
            return
        self._state = state
        for callback in list(self._subscribers):
            callback(state)
