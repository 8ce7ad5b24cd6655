"""
Loyalty ledger: append-only point entries plus the cached balance on the
account, always moved together inside one transaction.
"""
import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from ..models import PointsAccount, RewardLog
from .reward_settings import RewardSettingsService

logger = logging.getLogger(__name__)


class LoyaltyLedger:
    """Accrual, redemption, refund and reversal of reward points"""

    @staticmethod
    def get_or_create_account(user):
        """Get or create points account for user"""
        account, _ = PointsAccount.objects.get_or_create(user=user)
        return account

    @staticmethod
    def lock_account(user):
        """Return the user's account row locked for the current transaction"""
        LoyaltyLedger.get_or_create_account(user)
        return PointsAccount.objects.select_for_update().get(user=user)

    @staticmethod
    def _append(account, points, entry_type, order=None, reference_id=None):
        if not transaction.get_connection().in_atomic_block:
            raise transaction.TransactionManagementError("Ledger entries must be written inside transaction.atomic")

        entry = RewardLog.objects.create(
            account=account,
            points=points,
            type=entry_type,
            order=order,
            reference_id=reference_id or (order.order_code if order is not None else None),
        )
        PointsAccount.objects.filter(pk=account.pk).update(reward_points=F('reward_points') + points)
        account.refresh_from_db(fields=['reward_points'])
        logger.info(f"Account {account.pk}: {entry_type} {points:+d} -> balance {account.reward_points}")
        return entry

    @staticmethod
    def redeem(account, points, order=None):
        """Debit points spent as a checkout discount"""
        if points <= 0:
            raise ValueError("Redemption amount must be positive")
        if points > account.reward_points:
            raise ValueError("Insufficient points for redemption")
        return LoyaltyLedger._append(account, -points, RewardLog.TYPE_REDEEM, order)

    @staticmethod
    def accrue(account, points, order=None):
        """Credit points earned on a purchase"""
        if points <= 0:
            raise ValueError("Points amount must be positive")
        return LoyaltyLedger._append(account, points, RewardLog.TYPE_PURCHASE, order)

    @staticmethod
    def refund(account, points, order=None):
        """Give back points a cancelled order had redeemed"""
        if points <= 0:
            return None
        return LoyaltyLedger._append(account, points, RewardLog.TYPE_REFUND, order)

    @staticmethod
    def reverse(account, points, order=None):
        """Take back points a cancelled order had earned.

        The debit stops at a zero balance; the entry records what was
        actually taken so the balance stays equal to the sum of entries.
        """
        if points <= 0:
            return None

        debit = min(points, max(account.reward_points, 0))
        if debit < points:
            logger.warning(
                f"Account {account.pk}: reversal of {points} clamped to {debit} "
                f"for order {order.order_code if order is not None else '-'}"
            )
        return LoyaltyLedger._append(account, -debit, RewardLog.TYPE_REVERSAL, order)

    @staticmethod
    @transaction.atomic
    def award_daily_login(user, today=None):
        """Credit the daily login bonus once per calendar day"""
        if not user.is_loyalty_member:
            return None

        program = RewardSettingsService.load()
        if not program.enabled or program.daily_login_bonus <= 0:
            return None

        today = today or timezone.localdate()
        account = LoyaltyLedger.lock_account(user)
        if account.last_login_reward_at == today:
            return None

        entry = LoyaltyLedger._append(account, program.daily_login_bonus, RewardLog.TYPE_LOGIN)
        PointsAccount.objects.filter(pk=account.pk).update(last_login_reward_at=today)
        account.last_login_reward_at = today
        return entry

    @staticmethod
    def balance(user):
        return LoyaltyLedger.get_or_create_account(user).reward_points

    @staticmethod
    def history(user, entry_type=None):
        queryset = RewardLog.objects.filter(account__user=user).select_related('order')
        if entry_type and entry_type != 'all':
            queryset = queryset.filter(type=entry_type)
        return queryset
