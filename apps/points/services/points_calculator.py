"""
Reward rule engine: picks the tier for a purchase amount and computes the
points it earns. Pure functions over rule objects.
"""
from decimal import Decimal, ROUND_FLOOR
from typing import Iterable, Optional, Tuple

from ..models import RewardRule

HUNDRED = Decimal('100')


def _floor(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


class RewardRuleEngine:
    """Tier selection and point formulas"""

    @staticmethod
    def select_rule(amount: Decimal, rules: Iterable) -> Optional[RewardRule]:
        """Highest qualifying tier: the greatest ``min_purchase_amount`` among
        active rules covering ``amount``. Equal minimums resolve to the lowest id.
        """
        candidates = [rule for rule in rules if rule.is_active and rule.covers(amount)]
        if not candidates:
            return None
        return max(candidates, key=lambda rule: (rule.min_purchase_amount, -(rule.id or 0)))

    @staticmethod
    def compute_points(amount: Decimal, rule) -> int:
        amount = Decimal(amount)
        reward_type = rule.reward_type

        if reward_type == RewardRule.TYPE_FIXED and rule.fixed_points is not None:
            points = int(rule.fixed_points)
        elif reward_type == RewardRule.TYPE_PERCENTAGE and rule.points_multiplier is not None:
            points = _floor(amount * Decimal(rule.points_multiplier) / HUNDRED)
        elif reward_type == RewardRule.TYPE_STEP and rule.fixed_points is not None:
            points = _floor(amount / HUNDRED) * int(rule.fixed_points)
        else:
            multiplier = Decimal(1) if rule.points_multiplier is None else Decimal(rule.points_multiplier)
            points = _floor(amount * multiplier)

        return max(points, 0)

    @classmethod
    def points_for(cls, amount: Decimal, rules: Iterable, *, points_redeemed: int = 0,
                   is_member: bool = True, rewards_enabled: bool = True) -> Tuple[int, Optional[RewardRule]]:
        """Points earned on a net purchase amount and the rule that produced them.

        A checkout that redeems points earns nothing.
        """
        if points_redeemed > 0 or not is_member or not rewards_enabled:
            return 0, None

        rule = cls.select_rule(amount, rules)
        if rule is None:
            return 0, None
        return cls.compute_points(amount, rule), rule
