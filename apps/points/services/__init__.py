"""
Points services module.
"""
from .points_service import LoyaltyLedger
from .points_calculator import RewardRuleEngine
from .reward_settings import RewardProgramSettings, RewardSettingsService

__all__ = [
    'LoyaltyLedger',
    'RewardRuleEngine',
    'RewardProgramSettings',
    'RewardSettingsService',
]
