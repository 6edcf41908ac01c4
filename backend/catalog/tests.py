import pytest
from django.urls import reverse

from .models import Catalog

pytestmark = pytest.mark.django_db


NEW_DESIGN = {
    'name': 'Peacock Pendant',
    'images': ['https://img.example.com/peacock.jpg'],
    'size': '18 inch',
    'weight': '6.500',
    'description': 'Enamel pendant',
}


class TestCatalogBrowse:

    def test_salesman_can_browse(self, salesman_client, catalog):
        response = salesman_client.get(reverse('catalog:list'))

        assert response.status_code == 200
        assert response.data['results'][0]['name'] == 'Floral Ring'
        assert response.data['results'][0]['weight'] == '4.250'

    def test_search_by_name(self, salesman_client, catalog):
        Catalog.objects.create(name='Temple Bangle', images=['https://img.example.com/b.jpg'], weight='20')

        response = salesman_client.get(reverse('catalog:list'), {'q': 'bangle'})

        assert [row['name'] for row in response.data['results']] == ['Temple Bangle']

    def test_anonymous_is_rejected(self, api_client, catalog):
        response = api_client.get(reverse('catalog:list'))
        assert response.status_code == 401


class TestCatalogAdmin:

    def test_admin_creates_design(self, admin_client):
        response = admin_client.post(reverse('catalog:list'), NEW_DESIGN, format='json')

        assert response.status_code == 201
        assert Catalog.objects.get(id=response.data['id']).name == 'Peacock Pendant'

    def test_salesman_cannot_create(self, salesman_client):
        response = salesman_client.post(reverse('catalog:list'), NEW_DESIGN, format='json')
        assert response.status_code == 403

    def test_weight_must_be_positive(self, admin_client):
        response = admin_client.post(reverse('catalog:list'), dict(NEW_DESIGN, weight='0'), format='json')

        assert response.status_code == 400
        assert 'weight' in response.data['fields']

    def test_at_least_one_image(self, admin_client):
        response = admin_client.post(reverse('catalog:list'), dict(NEW_DESIGN, images=[]), format='json')
        assert response.status_code == 400

    def test_delete_hides_design_but_keeps_order_link(self, admin_client, catalog, make_order):
        order = make_order(catalog=catalog)

        response = admin_client.delete(reverse('catalog:detail', args=[catalog.id]))

        assert response.status_code == 204
        assert not Catalog.objects.filter(id=catalog.id).exists()
        assert Catalog.all_objects.get(id=catalog.id).is_deleted is True
        order.refresh_from_db()
        assert order.catalog_id == catalog.id
