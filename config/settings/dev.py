"""Development settings for the apartment booking project.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and using
human readable log output. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Use console email backend during development
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

# Readable log lines instead of JSON
LOGGING["handlers"]["console"]["formatter"] = "console"  # noqa: F405

STORAGES["staticfiles"] = {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"}  # noqa: F405
