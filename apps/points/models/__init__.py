"""
Points models module.
"""
from .account import PointsAccount
from .rule import RewardRule
from .setting import RewardSetting
from .reward_log import RewardLog

__all__ = [
    'PointsAccount',
    'RewardRule',
    'RewardSetting',
    'RewardLog',
]
