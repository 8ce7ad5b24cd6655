"""
Points views module.
"""
from .points_account_views import get_points_balance, get_points_history, claim_daily_login
from .points_rules_views import get_reward_rules

__all__ = [
    'get_points_balance',
    'get_points_history',
    'claim_daily_login',
    'get_reward_rules',
]
