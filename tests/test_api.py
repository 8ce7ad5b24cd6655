"""
HTTP tests for the order, coupon and points endpoints.
"""
from decimal import Decimal

import pytest

from apps.orders.models import Order
from apps.points.models import RewardLog
from tests.factories import AdminFactory, TenantFactory, UserFactory, give_points


pytestmark = pytest.mark.django_db


@pytest.fixture
def shop(catalog, save10, double_points_rule):
    return catalog


@pytest.fixture
def member_client(api_client, member):
    api_client.force_authenticate(user=member)
    return api_client


def checkout_payload(shop, **extra):
    payload = {
        'items': [
            {'product_id': shop['widget'].id, 'quantity': 2},
            {'product_id': shop['gadget'].id, 'quantity': 1},
        ],
    }
    payload.update(extra)
    return payload


class TestCheckoutAPI:

    def test_requires_authentication(self, api_client, shop):
        response = api_client.post('/api/orders/checkout', checkout_payload(shop), format='json')
        assert response.status_code == 401

    def test_checkout(self, member_client, shop):
        response = member_client.post(
            '/api/orders/checkout', checkout_payload(shop, coupon_code='SAVE10'), format='json'
        )

        assert response.status_code == 201
        data = response.data['data']
        assert data['points_earned'] == 80
        assert data['order']['total_amount'] == '40.00'
        assert data['order']['status'] == 'confirmed'
        assert len(data['order']['lines']) == 2

    def test_insufficient_stock(self, member_client, shop):
        payload = checkout_payload(shop)
        payload['items'][1]['quantity'] = 3

        response = member_client.post('/api/orders/checkout', payload, format='json')

        assert response.status_code == 409
        assert response.data['errors']['error'] == 'insufficient_stock'
        assert response.data['errors']['available'] == 2
        assert not Order.objects.exists()

    def test_missing_items(self, member_client, shop):
        response = member_client.post('/api/orders/checkout', {}, format='json')
        assert response.status_code == 400

    def test_non_positive_quantity(self, member_client, shop):
        payload = checkout_payload(shop)
        payload['items'][0]['quantity'] = 0
        response = member_client.post('/api/orders/checkout', payload, format='json')
        assert response.status_code == 400


class TestOrderStatusAPI:

    def place_order(self, client, shop):
        response = client.post('/api/orders/checkout', checkout_payload(shop), format='json')
        return response.data['data']['order']['id']

    def test_user_cancels_own_order(self, member_client, member, shop):
        order_id = self.place_order(member_client, shop)

        response = member_client.patch(
            f'/api/orders/{order_id}/status', {'status': 'cancelled', 'cancel_reason': 'Too slow'}, format='json'
        )

        assert response.status_code == 200
        assert response.data['data']['points_reversed'] == 100
        assert RewardLog.objects.filter(type='reversal', order_id=order_id).exists()

    def test_user_cannot_ship(self, member_client, shop):
        order_id = self.place_order(member_client, shop)
        response = member_client.patch(f'/api/orders/{order_id}/status', {'status': 'shipped'}, format='json')
        assert response.status_code == 403
        assert response.data['errors']['error'] == 'transition_not_permitted'

    def test_admin_ships(self, api_client, member, shop):
        api_client.force_authenticate(user=member)
        order_id = self.place_order(api_client, shop)

        api_client.force_authenticate(user=AdminFactory())
        response = api_client.patch(f'/api/orders/{order_id}/status', {'status': 'shipped'}, format='json')

        assert response.status_code == 200
        assert response.data['data']['order']['status'] == 'shipped'

    def test_unknown_order(self, member_client):
        response = member_client.patch('/api/orders/424242/status', {'status': 'cancelled'}, format='json')
        assert response.status_code == 404

    def test_invalid_status_value(self, member_client, shop):
        order_id = self.place_order(member_client, shop)
        response = member_client.patch(f'/api/orders/{order_id}/status', {'status': 'lost'}, format='json')
        assert response.status_code == 400


class TestOrderListAPI:

    def test_users_see_only_their_orders(self, api_client, shop):
        alice, bob = UserFactory(), UserFactory()
        for user in (alice, bob):
            api_client.force_authenticate(user=user)
            api_client.post('/api/orders/checkout', {
                'items': [{'product_id': shop['widget'].id, 'quantity': 1}]
            }, format='json')

        api_client.force_authenticate(user=alice)
        response = api_client.get('/api/orders/')

        assert response.status_code == 200
        assert response.data['data']['count'] == 1
        assert response.data['data']['results'][0]['user'] == alice.id

    def test_tenant_sees_orders_for_own_products(self, api_client, shop):
        api_client.force_authenticate(user=UserFactory())
        api_client.post('/api/orders/checkout', checkout_payload(shop), format='json')

        api_client.force_authenticate(user=shop['widget'].created_by)
        assert api_client.get('/api/orders/').data['data']['count'] == 1

        api_client.force_authenticate(user=TenantFactory())
        assert api_client.get('/api/orders/').data['data']['count'] == 0


class TestCouponAPI:

    def test_valid_coupon(self, member_client, save10):
        response = member_client.post('/api/coupons/validate', {'code': 'save10', 'cart_total': '50.00'},
                                      format='json')
        assert response.status_code == 200
        assert response.data['data']['discount'] == '10.00'

    def test_unknown_coupon(self, member_client):
        response = member_client.post('/api/coupons/validate', {'code': 'NOPE', 'cart_total': '50.00'},
                                      format='json')
        assert response.status_code == 404
        assert response.data['errors']['reason'] == 'not_found'

    def test_minimum_not_met(self, member_client, save10):
        save10.min_purchase_amount = Decimal('100.00')
        save10.save()
        response = member_client.post('/api/coupons/validate', {'code': 'SAVE10', 'cart_total': '50.00'},
                                      format='json')
        assert response.status_code == 400
        assert response.data['errors']['reason'] == 'min_purchase_not_met'


class TestPointsAPI:

    def test_balance(self, member_client, member):
        give_points(member, 42)
        response = member_client.get('/api/points/balance')
        assert response.status_code == 200
        assert response.data['data']['balance'] == 42

    def test_history(self, member_client, member):
        give_points(member, 42)
        response = member_client.get('/api/points/history', {'type': 'purchase'})
        assert response.data['data']['count'] == 1
        assert response.data['data']['results'][0]['points'] == 42

    def test_daily_login(self, member_client):
        first = member_client.post('/api/points/daily-login')
        second = member_client.post('/api/points/daily-login')

        assert first.status_code == 201
        assert first.data['data']['awarded'] == 10
        assert second.status_code == 200
        assert second.data['data'] == {'awarded': 0, 'balance': 10}

    def test_rules(self, member_client, double_points_rule):
        response = member_client.get('/api/points/rules')
        assert [rule['id'] for rule in response.data['data']] == [double_points_rule.id]


class TestAuthAPI:

    def test_token_grants_access(self, api_client):
        user = UserFactory()
        user.set_password('s3cret-pass')
        user.save()

        response = api_client.post('/api/auth/token', {'username': user.username, 'password': 's3cret-pass'},
                                   format='json')
        assert response.status_code == 200

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        assert api_client.get('/api/points/balance').status_code == 200

    def test_bad_credentials(self, api_client):
        response = api_client.post('/api/auth/token', {'username': 'nobody', 'password': 'x'}, format='json')
        assert response.status_code == 401
