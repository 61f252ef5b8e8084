import pytest
from rest_framework import status
from rest_framework.test import APIClient

from apps.catalog.models import Product, Variant

SELECTION_URL = '/api/products/{slug}/variant-selection/'


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def selection_url(tee_product):
    return SELECTION_URL.format(slug=tee_product.slug)


@pytest.mark.django_db
class TestInitialSelection:

    def test_defaults_without_hints(self, client, selection_url):
        response = client.get(selection_url)

        assert response.status_code == status.HTTP_200_OK
        data = response.data
        assert data['selection'] == {'size': 'size-s', 'color': 'color-white'}
        assert data['selected_values'] == {'size': 'S', 'color': 'White'}
        assert data['variant']['sku'] == 'TEE-WHITE'
        assert data['variant']['sell_price'] == '19.90'
        assert data['is_exact_match'] is True
        assert data['query_string'] == 'size=S&color=White'
        assert data['url'] == '/product/essential-tee/?size=S&color=White'

    def test_groups_describe_options(self, client, selection_url):
        data = client.get(selection_url).data

        assert [g['key'] for g in data['groups']] == ['size', 'color']
        size = data['groups'][0]
        assert size['label'] == 'Size'
        assert size['selected_option_id'] == 'size-s'
        assert [o['id'] for o in size['options']] == ['size-s', 'size-m', 'size-l']
        assert [o['is_selected'] for o in size['options']] == [True, False, False]
        assert all(o['is_available'] for o in size['options'])

    def test_hints_from_query_string(self, client, selection_url):
        response = client.get(selection_url, {'utm_source': 'mail', 'color': 'black', 'size': 'L'})

        data = response.data
        assert data['selection'] == {'size': 'size-l', 'color': 'color-black'}
        assert data['variant']['sku'] == 'TEE-BLACK'
        assert data['query_string'] == 'utm_source=mail&color=Black&size=L'

    def test_out_of_stock_options_are_skipped(self, client, tee_product, selection_url):
        Variant.objects.filter(sku='TEE-WHITE').update(stock_quantity=0)

        data = client.get(selection_url).data

        assert data['selection'] == {'size': 'size-m', 'color': 'color-black'}
        assert data['variant']['sku'] == 'TEE-BLACK'
        color = data['groups'][1]
        assert [o['is_available'] for o in color['options']] == [False, True]

    def test_inactive_variants_are_left_out(self, client, tee_product, selection_url):
        Variant.objects.filter(sku='TEE-BLACK').update(is_active=False)

        data = client.get(selection_url).data

        assert [o['value'] for o in data['groups'][0]['options']] == ['S', 'M']
        assert data['variant']['sku'] == 'TEE-WHITE'

    def test_page_url_setting(self, client, selection_url, settings):
        settings.CATALOG_PRODUCT_PAGE_URL = '/shop/{slug}'

        data = client.get(selection_url).data

        assert data['url'] == '/shop/essential-tee?size=S&color=White'


@pytest.mark.django_db
class TestSelectOption:

    def test_switching_color_resolves_exact_variant(self, client, selection_url):
        response = client.post(selection_url, {
            'selection': {'size': 'size-m', 'color': 'color-white'},
            'group_key': 'color',
            'option_id': 'color-black',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        data = response.data
        assert data['selection'] == {'size': 'size-m', 'color': 'color-black'}
        assert data['variant']['sku'] == 'TEE-BLACK'
        assert data['is_exact_match'] is True
        assert data['query_string'] == 'size=M&color=Black'

    def test_empty_selection_is_filled_from_variant(self, client, selection_url):
        response = client.post(selection_url, {
            'group_key': 'color',
            'option_id': 'color-black',
        }, format='json')

        assert response.data['selection'] == {'color': 'color-black', 'size': 'size-m'}

    def test_fallback_keeps_chosen_size(self, client, selection_url):
        data = client.post(selection_url, {
            'selection': {'size': 'size-s', 'color': 'color-white'},
            'group_key': 'color',
            'option_id': 'color-black',
        }, format='json').data

        assert data['selection'] == {'size': 'size-s', 'color': 'color-black'}
        assert data['variant']['sku'] == 'TEE-WHITE'
        assert data['is_exact_match'] is False

    def test_stale_entries_are_dropped(self, client, selection_url):
        data = client.post(selection_url, {
            'selection': {'size': 'size-xxl', 'scent': 'scent-vanilla'},
            'group_key': 'color',
            'option_id': 'color-white',
        }, format='json').data

        assert data['selection'] == {'color': 'color-white', 'size': 'size-s'}

    def test_query_string_is_preserved(self, client, selection_url):
        data = client.post(selection_url, {
            'selection': {'size': 'size-m', 'color': 'color-white'},
            'group_key': 'color',
            'option_id': 'color-black',
            'query_string': '?utm_source=mail&size=M&color=White',
        }, format='json').data

        assert data['query_string'] == 'utm_source=mail&size=M&color=Black'
        assert data['url'] == '/product/essential-tee/?utm_source=mail&size=M&color=Black'

    def test_unknown_option_is_rejected(self, client, selection_url):
        response = client.post(selection_url, {
            'group_key': 'color',
            'option_id': 'color-green',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'color-green' in response.data['error']

    def test_group_missing_from_family_is_rejected(self, client, selection_url):
        response = client.post(selection_url, {
            'group_key': 'scent',
            'option_id': 'scent-vanilla',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_invalid_group_key(self, client, selection_url):
        response = client.post(selection_url, {
            'group_key': 'material',
            'option_id': 'material-cotton',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'group_key' in response.data


@pytest.mark.django_db
class TestMissingProducts:

    def test_product_without_variants(self, client):
        Product.objects.create(name='Gift Card')

        response = client.get(SELECTION_URL.format(slug='gift-card'))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_unknown_product(self, client, db):
        response = client.get(SELECTION_URL.format(slug='does-not-exist'))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_all_variants_inactive_uses_base_variant(self, client, tee_product, selection_url):
        Variant.objects.filter(product=tee_product).update(is_active=False)
        Variant.objects.filter(sku='TEE-BLACK').update(is_default=True)

        data = client.get(selection_url).data

        assert data['variant']['sku'] == 'TEE-BLACK'
        assert [g['key'] for g in data['groups']] == ['size', 'color']


@pytest.mark.django_db
class TestVariantEndpoint:

    def _skus(self, client, params):
        response = client.get('/api/variants/', params)
        assert response.status_code == status.HTTP_200_OK
        return sorted(v['sku'] for v in response.data['results'])

    def test_filter_by_size(self, client, tee_product):
        assert self._skus(client, {'size': 'S'}) == ['TEE-WHITE']
        assert self._skus(client, {'size': 'M'}) == ['TEE-BLACK', 'TEE-WHITE']

    def test_filter_by_color_ignores_case(self, client, tee_product):
        assert self._skus(client, {'color': 'black'}) == ['TEE-BLACK']

    def test_filter_by_product_and_stock(self, client, tee_product):
        Variant.objects.filter(sku='TEE-BLACK').update(stock_quantity=0)

        assert self._skus(client, {'product': 'essential-tee', 'in_stock': 'true'}) == ['TEE-WHITE']
        assert self._skus(client, {'in_stock': 'false'}) == ['TEE-BLACK']

    def test_inactive_variants_are_never_in_stock(self, client, tee_product):
        Variant.objects.filter(sku='TEE-BLACK').update(is_active=False, stock_quantity=5)

        assert self._skus(client, {'in_stock': 'true'}) == ['TEE-WHITE']
        assert self._skus(client, {'in_stock': 'false'}) == ['TEE-BLACK']

        response = client.get('/api/variants/', {'in_stock': 'false'})
        assert response.data['results'][0]['is_in_stock'] is False

    def test_list_exposes_attributes(self, client, tee_product):
        response = client.get('/api/variants/', {'sku': 'TEE-WHITE'})

        variant = response.data['results'][0]
        assert variant['attributes'] == {'size': ['S', 'M'], 'color': ['White']}
