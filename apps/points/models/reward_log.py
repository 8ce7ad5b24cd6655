from django.db import models


class RewardLog(models.Model):
    """Append-only loyalty ledger entry; corrections are new entries"""
    TYPE_LOGIN = 'login'
    TYPE_PURCHASE = 'purchase'
    TYPE_REDEEM = 'redeem'
    TYPE_REFUND = 'refund'
    TYPE_REVERSAL = 'reversal'

    ENTRY_TYPES = [
        (TYPE_LOGIN, 'Daily login bonus'),
        (TYPE_PURCHASE, 'Earned on purchase'),
        (TYPE_REDEEM, 'Redeemed at checkout'),
        (TYPE_REFUND, 'Redemption refunded'),
        (TYPE_REVERSAL, 'Accrual reversed'),
    ]

    account = models.ForeignKey('PointsAccount', on_delete=models.CASCADE, related_name='entries')
    points = models.IntegerField(help_text="Positive credits, negative debits")
    type = models.CharField(max_length=20, choices=ENTRY_TYPES)
    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='reward_logs'
    )
    reference_id = models.CharField(max_length=100, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'reward_logs'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['account', 'created_at']),
            models.Index(fields=['type']),
        ]

    def __str__(self):
        return f"{self.account_id} {self.points:+d} ({self.type})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Reward log entries are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Reward log entries are immutable")
