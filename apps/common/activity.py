"""
Best-effort activity log sink.

Entries are written only once the surrounding transaction commits, and a
failure to write one is logged and swallowed so it can never undo a
checkout or a status change.
"""
import logging
from functools import partial

from django.db import transaction

logger = logging.getLogger('audit')


def log_activity(user_id, action, entity_type=None, entity_id=None, details=None):
    """Insert an activity log row, never raising"""
    from .models import ActivityLog

    try:
        ActivityLog.objects.create(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            details=details,
        )
        logger.info(f"user={user_id} action='{action}' {entity_type}={entity_id} details={details}")
    except Exception:
        logger.exception(f"Failed to log activity '{action}' for user {user_id}")


def log_activity_on_commit(user_id, action, entity_type=None, entity_id=None, details=None):
    """Schedule log_activity to run after the current atomic block commits"""
    transaction.on_commit(partial(log_activity, user_id, action, entity_type, entity_id, details))
