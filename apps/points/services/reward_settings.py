"""
Reward program configuration: RewardSetting rows override Django settings.
"""
from dataclasses import dataclass

from django.conf import settings

from ..models import RewardSetting


@dataclass(frozen=True)
class RewardProgramSettings:
    enabled: bool
    min_redemption_points: int
    daily_login_bonus: int


def _as_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class RewardSettingsService:
    """Resolve the effective reward program settings"""

    @staticmethod
    def load() -> RewardProgramSettings:
        defaults = settings.REWARDS
        rows = dict(RewardSetting.objects.values_list('setting_key', 'setting_value'))

        enabled = defaults['ENABLED']
        if RewardSetting.ENABLE_REWARDS in rows:
            enabled = rows[RewardSetting.ENABLE_REWARDS] == '1'

        return RewardProgramSettings(
            enabled=enabled,
            min_redemption_points=_as_int(
                rows.get(RewardSetting.MIN_REDEMPTION_POINTS), defaults['MIN_REDEMPTION_POINTS']
            ),
            daily_login_bonus=_as_int(
                rows.get(RewardSetting.DAILY_LOGIN_BONUS), defaults['DAILY_LOGIN_BONUS']
            ),
        )
