from django.conf import settings
from django.db import models


class RewardSetting(models.Model):
    """Admin-editable reward program switch or threshold"""
    ENABLE_REWARDS = 'enable_rewards'
    MIN_REDEMPTION_POINTS = 'min_redemption_points'
    DAILY_LOGIN_BONUS = 'daily_login_bonus'

    KEY_CHOICES = [
        (ENABLE_REWARDS, 'Enable rewards'),
        (MIN_REDEMPTION_POINTS, 'Minimum balance before redeeming'),
        (DAILY_LOGIN_BONUS, 'Daily login bonus'),
    ]

    setting_key = models.CharField(max_length=50, choices=KEY_CHOICES, unique=True)
    setting_value = models.CharField(max_length=100)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reward_settings'
        ordering = ['setting_key']

    def __str__(self):
        return f"{self.setting_key}: {self.setting_value}"

    @classmethod
    def set_value(cls, key, value, user=None):
        row, _ = cls.objects.update_or_create(
            setting_key=key,
            defaults={'setting_value': str(value), 'updated_by': user}
        )
        return row
