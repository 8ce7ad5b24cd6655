from django.db import models
from django.conf import settings


class PointsAccount(models.Model):
    """Cached reward point balance for one user.

    ``reward_points`` is the running sum of the account's RewardLog entries
    and is only moved together with the insert of such an entry.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='points_account')
    reward_points = models.IntegerField(default=0)
    last_login_reward_at = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'points_accounts'
        verbose_name = 'Points Account'
        verbose_name_plural = 'Points Accounts'

    def __str__(self):
        return f"{self.user.username} - {self.reward_points} points"
