"""
Variant options: the attribute axes a shopper can pick from.

A family of variants is reduced to a list of groups (Size, Color, Capacity,
Scent), each holding the distinct values found across the family. Option ids
are derived from the normalized value so they stay stable between requests.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

_SEPARATORS_RE = re.compile(r'[\s_]+')
_HYPHENS_RE = re.compile(r'-+')


class VariantKind(str, Enum):
    """Attribute axes a variant can expose."""
    SIZE = 'size'
    COLOR = 'color'
    CAPACITY = 'capacity'
    SCENT = 'scent'

    @property
    def label(self):
        return _LABELS[self]

    @classmethod
    def from_key(cls, key) -> Optional['VariantKind']:
        try:
            return cls(key)
        except ValueError:
            return None


_LABELS = {
    VariantKind.SIZE: 'Size',
    VariantKind.COLOR: 'Color',
    VariantKind.CAPACITY: 'Capacity',
    VariantKind.SCENT: 'Scent',
}

# Order in which groups are shown on the product page.
GROUP_ORDER = (
    VariantKind.SIZE,
    VariantKind.COLOR,
    VariantKind.CAPACITY,
    VariantKind.SCENT,
)


@dataclass(frozen=True)
class VariantSnapshot:
    """
    Read-only view of one sellable variant, detached from the database.

    `colors` lists every color the variant claims to represent and is only
    consulted by loose matching; `color` is the variant's own color.
    """
    id: str
    in_stock: bool = True
    sizes: Tuple[str, ...] = ()
    color: Optional[str] = None
    colors: Tuple[str, ...] = ()
    capacities: Tuple[str, ...] = ()
    scents: Tuple[str, ...] = ()

    def values_for(self, kind: VariantKind) -> Tuple[str, ...]:
        """All values this variant exposes for the given axis."""
        if kind is VariantKind.SIZE:
            return self.sizes
        if kind is VariantKind.COLOR:
            return (self.color,) if self.color else ()
        if kind is VariantKind.CAPACITY:
            return self.capacities
        if kind is VariantKind.SCENT:
            return self.scents
        return ()

    def option_values_for(self, kind: VariantKind) -> Tuple[str, ...]:
        """
        Values this variant contributes to a group's options. For color this
        is the own color followed by every color in `colors`.
        """
        if kind is VariantKind.COLOR:
            return self.values_for(kind) + self.colors
        return self.values_for(kind)


@dataclass(frozen=True)
class VariantOption:
    id: str
    value: str


@dataclass(frozen=True)
class VariantGroup:
    key: str
    label: str
    options: Tuple[VariantOption, ...] = field(default_factory=tuple)

    def get_option(self, option_id) -> Optional[VariantOption]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def find_option_by_value(self, value) -> Optional[VariantOption]:
        """Exact raw value lookup, used when copying values off a variant."""
        for option in self.options:
            if option.value == value:
                return option
        return None

    def match_option(self, value) -> Optional[VariantOption]:
        """
        Lookup used for URL hints: the raw value first, so that options whose
        ids were suffixed after a collision stay reachable, then a
        case-insensitive comparison of normalized values.
        """
        exact = self.find_option_by_value(value)
        if exact is not None:
            return exact
        wanted = normalize_option_value(value)
        if not wanted:
            return None
        for option in self.options:
            if normalize_option_value(option.value) == wanted:
                return option
        return None


def normalize_option_value(value: str) -> str:
    """
    Normalize an option value for consistent matching.

    "Light Blue", "light_blue" and "  Light-Blue " all become "light-blue".
    """
    value = (value or '').strip().lower()
    value = _SEPARATORS_RE.sub('-', value)
    value = _HYPHENS_RE.sub('-', value)
    if value.startswith('-'):
        value = value[1:]
    if value.endswith('-'):
        value = value[:-1]
    return value


def option_id_for(group_key, value) -> str:
    return f"{group_key}-{normalize_option_value(value)}"


def collect_values(variants: Iterable[VariantSnapshot], kind: VariantKind) -> List[str]:
    """Distinct raw values for an axis, in first-seen order."""
    seen = {}
    for variant in variants:
        for value in variant.option_values_for(kind):
            if value and value not in seen:
                seen[value] = None
    return list(seen)


def build_variant_group(variants: Sequence[VariantSnapshot], kind: VariantKind) -> Optional[VariantGroup]:
    values = collect_values(variants, kind)
    if not values:
        return None

    options = []
    used_ids = {}
    for value in values:
        option_id = option_id_for(kind.value, value)
        if option_id in used_ids:
            original = used_ids[option_id]
            suffix = 2
            while f"{option_id}-{suffix}" in used_ids:
                suffix += 1
            unique_id = f"{option_id}-{suffix}"
            logger.warning(
                "Option id collision in group '%s': %r and %r both normalize to '%s'; "
                "using '%s' for %r",
                kind.value, original, value, option_id, unique_id, value,
            )
            option_id = unique_id
        used_ids[option_id] = value
        options.append(VariantOption(id=option_id, value=value))

    return VariantGroup(key=kind.value, label=kind.label, options=tuple(options))


def build_variant_groups(
    variants: Sequence[VariantSnapshot],
    base_variant: Optional[VariantSnapshot] = None,
    kinds: Iterable[VariantKind] = GROUP_ORDER,
) -> List[VariantGroup]:
    """
    Build the selectable groups for a family of variants.

    Falls back to the base variant alone when the family is empty. Groups
    with no values anywhere in the family are skipped.
    """
    family = list(variants)
    if not family and base_variant is not None:
        family = [base_variant]

    groups = []
    built = set()
    for kind in kinds:
        kind = VariantKind(kind)
        if kind in built:
            logger.warning("Variant group '%s' requested twice; ignoring duplicate", kind.value)
            continue
        built.add(kind)

        group = build_variant_group(family, kind)
        if group is not None:
            groups.append(group)
    return groups
