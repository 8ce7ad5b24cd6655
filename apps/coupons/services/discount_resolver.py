"""
Discount resolver: turns priced cart lines, a coupon and a points
redemption request into per-line discount allocations.

Nothing here touches the database; the caller supplies the coupon row (or
None) and the account balance it has already locked.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import List, Optional, Sequence

CENT = Decimal('0.01')
# Precision kept for the unrounded per-line share of the points discount
SHARE = Decimal('0.000001')


@dataclass
class LineAllocation:
    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    discount_amount: Decimal = Decimal('0.00')
    reward_discount_amount: Decimal = Decimal('0')
    reward_points_used: int = 0
    line_total: Decimal = Decimal('0.00')


@dataclass
class DiscountResult:
    cart_total: Decimal
    coupon: Optional[object] = None
    coupon_discount: Decimal = Decimal('0.00')
    coupon_rejection: Optional[str] = None
    points_to_redeem: int = 0
    lines: List[LineAllocation] = field(default_factory=list)

    @property
    def reward_discount(self) -> Decimal:
        # 1 point = 1 currency unit
        return Decimal(self.points_to_redeem)

    @property
    def total_discount(self) -> Decimal:
        return self.coupon_discount + self.reward_discount

    @property
    def final_amount(self) -> Decimal:
        """Net amount paid; accrual is computed on this"""
        return self.cart_total - self.coupon_discount - self.reward_discount


def _to_points(value) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _units(amount: Decimal, unit: Decimal) -> int:
    return int((amount / unit).to_integral_value(rounding=ROUND_DOWN))


def _largest_remainders(floors: List[int], remainders: List[int], leftover: int) -> List[int]:
    # Ties go to the later line
    order = sorted(range(len(floors)), key=lambda i: (-remainders[i], -i))
    for index in order[:leftover]:
        floors[index] += 1
    return floors


def _apportion(total: int, weights: List[int]) -> List[int]:
    """Split an integer total in proportion to integer weights, summing exactly"""
    base = sum(weights)
    if base <= 0:
        return [0] * (len(weights) - 1) + [total]

    floors = [total * weight // base for weight in weights]
    remainders = [total * weight % base for weight in weights]
    return _largest_remainders(floors, remainders, total - sum(floors))


def _round_to_step(values: List[int], step: int) -> List[int]:
    """Round integer amounts to multiples of ``step`` keeping their sum"""
    floors = [value // step for value in values]
    remainders = [value % step for value in values]
    target = sum(values) // step
    return _largest_remainders(floors, remainders, target - sum(floors))


class DiscountResolver:
    """Coupon validation, points redemption and proportional allocation"""

    @staticmethod
    def cart_total(lines: Sequence) -> Decimal:
        return sum((line.unit_price * line.quantity for line in lines), Decimal('0.00'))

    @staticmethod
    def coupon_discount(coupon, cart_total: Decimal, now=None):
        """Return ``(discount, rejection_reason)``; a bad coupon only costs the discount"""
        if coupon is None:
            return Decimal('0.00'), None

        reason = coupon.rejection_reason(cart_total, now=now)
        if reason:
            return Decimal('0.00'), reason

        discount = coupon.discount_for(cart_total).quantize(CENT, rounding=ROUND_HALF_UP)
        return min(discount, cart_total), None

    @staticmethod
    def points_to_redeem(requested, balance: int, cart_total: Decimal, *,
                         is_member: bool = True, rewards_enabled: bool = True,
                         min_redemption_points: int = 1,
                         coupon_discount: Decimal = Decimal('0.00'),
                         enforce_combined_floor: bool = False) -> int:
        """How many points this checkout redeems.

        Only loyalty members redeem, only while the program is enabled and
        only once the balance reaches the configured minimum. The result is
        capped by the request, the balance and the whole-unit cart total.
        """
        requested = _to_points(requested)
        balance = max(balance or 0, 0)
        if not requested or not is_member or not rewards_enabled:
            return 0
        if balance < min_redemption_points:
            return 0

        cap = int(cart_total.to_integral_value(rounding=ROUND_DOWN))
        if enforce_combined_floor:
            cap = int(max(cart_total - coupon_discount, Decimal('0')).to_integral_value(rounding=ROUND_DOWN))

        return max(min(requested, balance, cap), 0)

    @staticmethod
    def allocate(lines: Sequence, cart_total: Decimal, coupon_discount: Decimal,
                 reward_discount: Decimal) -> List[LineAllocation]:
        """Split both discounts across lines in proportion to line subtotals.

        Shares are floored to their unit (cents for the coupon, SHARE for
        points) and the leftover units go to the largest remainders, so each
        column sums to its total exactly and no share is negative or larger
        than its line.
        """
        if not lines:
            return []

        subtotals = [line.unit_price * line.quantity for line in lines]
        weights = [_units(subtotal, CENT) for subtotal in subtotals]
        coupon_shares = _apportion(_units(coupon_discount, CENT), weights)
        reward_shares = _apportion(_units(reward_discount, SHARE), weights)

        per_cent = _units(CENT, SHARE)
        net_shares = [
            (weight - coupon_share) * per_cent - reward_share
            for weight, coupon_share, reward_share in zip(weights, coupon_shares, reward_shares)
        ]
        line_totals = _round_to_step(net_shares, per_cent)

        allocations = []
        for index, line in enumerate(lines):
            allocation = LineAllocation(
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=subtotals[index],
                discount_amount=coupon_shares[index] * CENT,
                reward_discount_amount=reward_shares[index] * SHARE,
                line_total=line_totals[index] * CENT,
            )
            allocation.reward_points_used = int(
                allocation.reward_discount_amount.to_integral_value(rounding=ROUND_DOWN)
            )
            allocations.append(allocation)

        return allocations

    @classmethod
    def resolve(cls, lines: Sequence, coupon=None, requested_points=None, balance: int = 0, *,
                is_member: bool = True, rewards_enabled: bool = True,
                min_redemption_points: int = 1, enforce_combined_floor: bool = False,
                now=None) -> DiscountResult:
        """Resolve every discount for a priced cart"""
        cart_total = cls.cart_total(lines)
        coupon_discount, rejection = cls.coupon_discount(coupon, cart_total, now=now)

        points = cls.points_to_redeem(
            requested_points, balance, cart_total,
            is_member=is_member,
            rewards_enabled=rewards_enabled,
            min_redemption_points=min_redemption_points,
            coupon_discount=coupon_discount,
            enforce_combined_floor=enforce_combined_floor,
        )

        result = DiscountResult(
            cart_total=cart_total,
            coupon=coupon if coupon is not None and rejection is None else None,
            coupon_discount=coupon_discount,
            coupon_rejection=rejection,
            points_to_redeem=points,
        )
        result.lines = cls.allocate(lines, cart_total, coupon_discount, result.reward_discount)
        return result
