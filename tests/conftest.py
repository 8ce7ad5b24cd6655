"""
Test configuration for the retail server.
"""
import pytest
from decimal import Decimal

from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def member(db):
    """A regular user account; the only role that earns and redeems points."""
    from tests.factories import UserFactory
    return UserFactory()


@pytest.fixture
def catalog(db):
    """Widget at 10.00 with 5 in stock and Gadget at 30.00 with 2 in stock."""
    from tests.factories import stocked_product
    return {
        'widget': stocked_product('Widget', Decimal('10.00'), 5),
        'gadget': stocked_product('Gadget', Decimal('30.00'), 2),
    }


@pytest.fixture
def save10(db):
    from tests.factories import CouponFactory
    return CouponFactory(code='SAVE10', discount_value=Decimal('10.00'))


@pytest.fixture
def double_points_rule(db):
    """Purchases of 40.00 or more earn 2 points per currency unit."""
    from tests.factories import RewardRuleFactory
    return RewardRuleFactory(min_purchase_amount=Decimal('40.00'), points_multiplier=Decimal('2'))
