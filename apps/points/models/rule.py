from django.conf import settings
from django.db import models
from django.db.models import Q


class RewardRule(models.Model):
    """A purchase-amount tier and the formula for points earned inside it"""
    TYPE_FIXED = 'fixed'
    TYPE_MULTIPLIER = 'multiplier'
    TYPE_PERCENTAGE = 'percentage'
    TYPE_STEP = 'step'

    REWARD_TYPES = [
        (TYPE_FIXED, 'Fixed points'),
        (TYPE_MULTIPLIER, 'Points per currency unit'),
        (TYPE_PERCENTAGE, 'Percentage of amount'),
        (TYPE_STEP, 'Points per 100 spent'),
    ]

    min_purchase_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    max_purchase_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True,
                                              help_text="Empty means no upper bound")
    reward_type = models.CharField(max_length=20, choices=REWARD_TYPES, default=TYPE_MULTIPLIER)
    points_multiplier = models.DecimalField(max_digits=10, decimal_places=4, null=True, blank=True, default=1)
    fixed_points = models.IntegerField(null=True, blank=True)
    description = models.CharField(max_length=255, blank=True, default='')
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reward_rules'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reward_point_rules'
        ordering = ['min_purchase_amount', 'id']

    def __str__(self):
        upper = self.max_purchase_amount if self.max_purchase_amount is not None else '∞'
        return f"{self.get_reward_type_display()} [{self.min_purchase_amount}, {upper}]"

    def covers(self, amount):
        if amount < self.min_purchase_amount:
            return False
        return self.max_purchase_amount is None or amount <= self.max_purchase_amount

    @classmethod
    def active_for(cls, amount):
        """Active rules whose range contains ``amount``"""
        return cls.objects.filter(
            Q(max_purchase_amount__isnull=True) | Q(max_purchase_amount__gte=amount),
            is_active=True,
            min_purchase_amount__lte=amount,
        )
