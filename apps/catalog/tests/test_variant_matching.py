import pytest

from apps.catalog.exceptions import EmptyVariantFamily
from apps.catalog.services.variant_matching import (
    find_best_match,
    find_exact_match,
    resolve_variant,
    variant_has_exact_option,
    variant_option_value,
    variant_supports_option,
)
from apps.catalog.services.variant_options import VariantSnapshot


@pytest.fixture
def cube():
    return VariantSnapshot(id='cube', color='Black', colors=('Black', 'Charcoal'))


class TestColorStrictness:

    def test_listed_color_is_not_an_exact_option(self, cube):
        assert variant_has_exact_option(cube, 'color', 'Black')
        assert not variant_has_exact_option(cube, 'color', 'Charcoal')

    def test_listed_color_is_supported_loosely(self, cube):
        assert variant_supports_option(cube, 'color', 'Black')
        assert variant_supports_option(cube, 'color', 'Charcoal')
        assert not variant_supports_option(cube, 'color', 'White')

    def test_exact_match_ignores_listed_colors(self, cube):
        assert find_exact_match([cube], {'color': 'Charcoal'}) is None

    def test_best_match_accepts_listed_colors(self, cube):
        assert find_best_match([cube], {'color': 'Charcoal'}) == cube


class TestAttributeChecks:

    def test_list_attributes_match_by_containment(self, tee_variants):
        white = tee_variants[0]
        assert variant_has_exact_option(white, 'size', 'M')
        assert variant_supports_option(white, 'size', 'S')
        assert not variant_supports_option(white, 'size', 'L')

    def test_unknown_group_never_matches(self, tee_variants):
        assert not variant_supports_option(tee_variants[0], 'material', 'Cotton')
        assert not variant_has_exact_option(tee_variants[0], 'material', 'Cotton')

    def test_option_value_is_first_list_entry_or_own_color(self, tee_variants, cube):
        assert variant_option_value(tee_variants[1], 'size') == 'M'
        assert variant_option_value(cube, 'color') == 'Black'
        assert variant_option_value(cube, 'scent') is None


class TestFindExactMatch:

    def test_empty_selection_never_matches(self, tee_variants):
        assert find_exact_match(tee_variants, {}) is None

    def test_all_selected_values_must_match(self, tee_variants):
        assert find_exact_match(tee_variants, {'color': 'Black', 'size': 'L'}).id == 'b'
        assert find_exact_match(tee_variants, {'color': 'Black', 'size': 'S'}) is None

    def test_prefers_in_stock_match(self):
        variants = [
            VariantSnapshot(id='sold-out', color='Black', sizes=('M',), in_stock=False),
            VariantSnapshot(id='available', color='Black', sizes=('M', 'L'), in_stock=True),
        ]
        assert find_exact_match(variants, {'color': 'Black', 'size': 'M'}).id == 'available'

    def test_falls_back_to_first_match_when_none_in_stock(self):
        variants = [
            VariantSnapshot(id='first', color='Black', in_stock=False),
            VariantSnapshot(id='second', color='Black', in_stock=False),
        ]
        assert find_exact_match(variants, {'color': 'Black'}).id == 'first'


class TestFindBestMatch:

    def test_empty_family_fails_loudly(self):
        with pytest.raises(EmptyVariantFamily):
            find_best_match([], {'color': 'Black'})

    def test_prefers_in_stock_among_loose_matches(self):
        variants = [
            VariantSnapshot(id='sold-out', color='Navy', colors=('Black',), in_stock=False),
            VariantSnapshot(id='available', color='Grey', colors=('Black',), in_stock=True),
        ]
        assert find_best_match(variants, {'color': 'Black'}).id == 'available'

    def test_highest_score_wins(self):
        variants = [
            VariantSnapshot(id='one', color='White', sizes=('S',)),
            VariantSnapshot(id='two', color='Black', sizes=('M',), scents=('Vanilla',)),
        ]
        selected = {'color': 'Black', 'size': 'L', 'scent': 'Vanilla'}
        assert find_best_match(variants, selected).id == 'two'

    def test_score_ties_go_to_catalog_order(self, tee_variants):
        # White has size S, Black has color Black: one point each.
        best = find_best_match(tee_variants, {'color': 'Black', 'size': 'S'})
        assert best.id == 'a'

    def test_nothing_matching_returns_first_variant(self, tee_variants):
        assert find_best_match(tee_variants, {'color': 'Green'}).id == 'a'


class TestResolveVariant:

    def test_exact_match_beats_loose_in_stock_candidate(self):
        stand_in = VariantSnapshot(id='stand-in', color='White', colors=('White', 'Black'), in_stock=True)
        black = VariantSnapshot(id='black', color='Black', in_stock=False)
        variants = [stand_in, black]

        # The loose scorer alone would choose the in-stock stand-in.
        assert find_best_match(variants, {'color': 'Black'}).id == 'stand-in'
        assert resolve_variant(variants, {'color': 'Black'}).id == 'black'

    def test_uses_fallback_when_no_exact_match(self, tee_variants):
        resolved = resolve_variant(tee_variants, {'color': 'Black', 'size': 'S'})
        assert resolved.id == 'a'

    def test_empty_family_resolves_to_base_variant(self):
        base = VariantSnapshot(id='base', color='Red')
        assert resolve_variant([], {'color': 'Blue'}, base_variant=base) == base

    def test_empty_family_without_base_fails_loudly(self):
        with pytest.raises(EmptyVariantFamily):
            resolve_variant([], {})
