"""
Production settings for retail_server project.
"""

from decouple import config
from .base import *

DEBUG = False

SECRET_KEY = config('SECRET_KEY')

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True

SIMPLE_JWT['SIGNING_KEY'] = SECRET_KEY

LOGGING['handlers']['console']['level'] = 'INFO'
