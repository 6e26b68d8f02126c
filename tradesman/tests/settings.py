"""
Minimal Django settings for running the Tradesman test suite.
"""

SECRET_KEY = 'tradesman-tests'

DEBUG = False

USE_TZ = True
TIME_ZONE = 'America/Sao_Paulo'

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'tradesman',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

TRADESMAN = {
    'PERMISSION_GATE': 'tradesman.adapters.noop.AllowAllGate',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {'class': 'logging.NullHandler'},
    },
    'loggers': {
        'tradesman': {'handlers': ['null'], 'level': 'DEBUG'},
    },
}
