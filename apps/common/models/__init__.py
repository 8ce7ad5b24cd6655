"""
Common models module.
"""
from .activity import ActivityLog

__all__ = [
    'ActivityLog',
]
