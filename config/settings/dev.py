"""Development settings for the Tripnest project.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts, relaxing the
auth cookie flags for plain-HTTP localhost and using the console email
backend. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Cookies must survive plain-HTTP localhost
AUTH_COOKIE_SECURE = False

# Use console email backend during development
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Run Celery tasks inline when no broker is around
CELERY_TASK_ALWAYS_EAGER = get_env('CELERY_TASK_ALWAYS_EAGER', 'true').lower() == 'true'
