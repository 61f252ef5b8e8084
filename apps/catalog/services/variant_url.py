"""
Keeps the product page query string in step with the variant selection.

Reading happens once, at page load, to seed the selection with deep-link
hints. Writing happens on every change: each selected group is written as
`?<group key>=<display value>`, so links stay readable and shareable.
"""

from typing import Dict, Mapping, Optional, Union

from django.http import QueryDict

from .variant_options import GROUP_ORDER
from .variant_selection import SelectionState, SelectionStore, VariantSelector

SELECTION_PARAMS = tuple(kind.value for kind in GROUP_ORDER)

QueryLike = Union[QueryDict, Mapping, str, None]


def _as_query_dict(query: QueryLike) -> QueryDict:
    if query is None:
        return QueryDict(mutable=True)
    if isinstance(query, str):
        return QueryDict(query.lstrip('?'), mutable=True)
    if isinstance(query, QueryDict):
        return query.copy()
    params = QueryDict(mutable=True)
    for key, value in query.items():
        params[key] = value
    return params


def parse_selection_hints(query: QueryLike) -> Dict[str, str]:
    """
    Extract deep-link hints from a query string.

    Only recognized group keys are read; blank values are ignored. Values are
    returned as given, matching against options happens in the selector.
    """
    params = _as_query_dict(query)
    hints = {}
    for key in SELECTION_PARAMS:
        value = params.get(key)
        if value is None:
            continue
        value = value.strip()
        if value:
            hints[key] = value
    return hints


def selection_query(selector: VariantSelector, state: Mapping, query: QueryLike = None) -> QueryDict:
    """
    Return a copy of `query` with one parameter per group of the family.

    Groups without a selection have their parameter removed. Parameters that
    are not group keys are left alone.
    """
    params = _as_query_dict(query)
    for group in selector.groups:
        value = selector.selected_value(state, group.key)
        if value is None:
            params.pop(group.key, None)
        else:
            params[group.key] = value
    return params


class QuerySync:
    """Store subscriber that rewrites its query dict after each change."""

    def __init__(self, selector: VariantSelector, query: QueryLike = None):
        self.selector = selector
        self.query = _as_query_dict(query)

    def __call__(self, state: SelectionState):
        self.query = selection_query(self.selector, state, self.query)

    def attach(self, store: SelectionStore):
        unsubscribe = store.subscribe(self)
        self(store.state)
        return unsubscribe

    @property
    def query_string(self) -> str:
        return self.query.urlencode()

    def url(self, path: Optional[str] = '') -> str:
        query_string = self.query_string
        if not query_string:
            return path
        return f"{path}?{query_string}"
