"""
Points serializers module.
"""
from .account_serializers import PointsBalanceSerializer, RewardLogSerializer
from .rule_serializers import RewardRuleSerializer

__all__ = [
    'PointsBalanceSerializer',
    'RewardLogSerializer',
    'RewardRuleSerializer',
]
