"""
Test settings for retail_server project.
"""

from .base import *

# File-backed SQLite so threaded tests share one database. IMMEDIATE
# transactions take the write lock at BEGIN, which serializes concurrent
# checkouts the way SELECT ... FOR UPDATE does on MySQL.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
        'OPTIONS': {
            'transaction_mode': 'IMMEDIATE',
            'timeout': 20,
        },
        'TEST': {
            'NAME': BASE_DIR / 'test_db.sqlite3',
        },
    }
}


# Disable migrations for faster testing
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

# Use faster password hasher for testing
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Disable logging during tests
LOGGING_CONFIG = None

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

CHECKOUT = {
    'RESTOCK_ON_CANCEL': False,
    'ENFORCE_COMBINED_DISCOUNT_FLOOR': False,
    'LOCK_TIMEOUT_SECONDS': 0,
}

REWARDS = {
    'ENABLED': True,
    'MIN_REDEMPTION_POINTS': 1,
    'DAILY_LOGIN_BONUS': 10,
}

PAYMENT_GATEWAY = {
    'BASE_URL': 'http://gateway.test/api',
    'API_KEY': 'test-key',
    'TIMEOUT': 1,
}
