"""
Tests for reward tier selection and point formulas.
"""
from decimal import Decimal

import pytest
from hypothesis import given, strategies as st

from apps.points.models import RewardRule
from apps.points.services import RewardRuleEngine


def rule(id, min_amount, max_amount=None, **overrides):
    values = {
        'id': id,
        'min_purchase_amount': Decimal(min_amount),
        'max_purchase_amount': Decimal(max_amount) if max_amount is not None else None,
        'reward_type': RewardRule.TYPE_MULTIPLIER,
        'points_multiplier': Decimal('1'),
        'is_active': True,
    }
    values.update(overrides)
    return RewardRule(**values)


class TestRuleSelection:

    def test_highest_qualifying_tier_wins(self):
        rules = [rule(1, '0'), rule(2, '40', points_multiplier=Decimal('2')), rule(3, '100')]
        assert RewardRuleEngine.select_rule(Decimal('40.00'), rules).id == 2

    def test_upper_bound_is_inclusive(self):
        rules = [rule(1, '0', '39.99'), rule(2, '40', '99.99')]
        assert RewardRuleEngine.select_rule(Decimal('99.99'), rules).id == 2
        assert RewardRuleEngine.select_rule(Decimal('39.99'), rules).id == 1

    def test_equal_minimums_resolve_to_lowest_id(self):
        rules = [rule(7, '40'), rule(3, '40'), rule(5, '40')]
        assert RewardRuleEngine.select_rule(Decimal('50'), rules).id == 3

    def test_inactive_rules_are_ignored(self):
        rules = [rule(1, '0'), rule(2, '40', is_active=False)]
        assert RewardRuleEngine.select_rule(Decimal('50'), rules).id == 1

    def test_no_rule_applies(self):
        assert RewardRuleEngine.select_rule(Decimal('10'), [rule(1, '40')]) is None


class TestPointFormulas:

    def test_multiplier_floors(self):
        assert RewardRuleEngine.compute_points(Decimal('40.75'), rule(1, '0', points_multiplier=Decimal('2'))) == 81

    def test_fixed(self):
        fixed = rule(1, '0', reward_type=RewardRule.TYPE_FIXED, fixed_points=25)
        assert RewardRuleEngine.compute_points(Decimal('999'), fixed) == 25

    def test_percentage(self):
        pct = rule(1, '0', reward_type=RewardRule.TYPE_PERCENTAGE, points_multiplier=Decimal('5'))
        assert RewardRuleEngine.compute_points(Decimal('250.00'), pct) == 12

    def test_step(self):
        step = rule(1, '0', reward_type=RewardRule.TYPE_STEP, fixed_points=10)
        assert RewardRuleEngine.compute_points(Decimal('350.00'), step) == 30

    def test_missing_parameters_fall_back_to_one_per_unit(self):
        broken = rule(1, '0', reward_type=RewardRule.TYPE_FIXED, fixed_points=None, points_multiplier=None)
        assert RewardRuleEngine.compute_points(Decimal('12.50'), broken) == 12

    def test_zero_multiplier_earns_nothing(self):
        zero = rule(1, '0', points_multiplier=Decimal('0'))
        assert RewardRuleEngine.compute_points(Decimal('80.00'), zero) == 0

    @given(amount=st.decimals(min_value=Decimal('0'), max_value=Decimal('100000'), places=2),
           multiplier=st.decimals(min_value=Decimal('0'), max_value=Decimal('10'), places=4))
    def test_points_are_non_negative_and_floored(self, amount, multiplier):
        points = RewardRuleEngine.compute_points(amount, rule(1, '0', points_multiplier=multiplier))
        assert 0 <= points <= amount * multiplier < points + 1


class TestPointsFor:

    def test_redeeming_checkout_earns_nothing(self):
        assert RewardRuleEngine.points_for(Decimal('40'), [rule(1, '0')], points_redeemed=1) == (0, None)

    @pytest.mark.parametrize('flags', [{'is_member': False}, {'rewards_enabled': False}])
    def test_ineligible_checkout_earns_nothing(self, flags):
        assert RewardRuleEngine.points_for(Decimal('40'), [rule(1, '0')], **flags) == (0, None)

    def test_returns_rule_used(self):
        chosen = rule(2, '40', points_multiplier=Decimal('2'))
        points, used = RewardRuleEngine.points_for(Decimal('40.00'), [rule(1, '0'), chosen])
        assert points == 80
        assert used is chosen


@pytest.mark.django_db
def test_setup_reward_rules_command_is_idempotent():
    from django.core.management import call_command
    from apps.points.models import RewardSetting

    call_command('setup_reward_rules')
    call_command('setup_reward_rules')

    assert RewardRule.objects.count() == 3
    assert RewardSetting.objects.get(setting_key=RewardSetting.DAILY_LOGIN_BONUS).setting_value == '10'
    assert RewardRuleEngine.points_for(Decimal('60.00'), RewardRule.active_for(Decimal('60.00')))[0] == 120
