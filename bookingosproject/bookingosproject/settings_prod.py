from .settings import *
from .settings import _env_bool

# Production-like defaults (safe for local testing)
DEBUG = False

ALLOWED_HOSTS = [h.strip() for h in os.getenv('DJANGO_ALLOWED_HOSTS', 'app.bookingos.io,127.0.0.1,localhost').split(',') if h.strip()]
CSRF_TRUSTED_ORIGINS = [o.strip() for o in os.getenv('CSRF_TRUSTED_ORIGINS', 'https://app.bookingos.io').split(',') if o.strip()]

# Secure cookies (effective when served over HTTPS)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# Redirect HTTP to HTTPS (toggle off locally if needed)
SECURE_SSL_REDIRECT = _env_bool('SECURE_SSL_REDIRECT', False)

# HSTS (enable only behind HTTPS in real prod)
SECURE_HSTS_SECONDS = int(os.getenv('SECURE_HSTS_SECONDS', '0'))
SECURE_HSTS_INCLUDE_SUBDOMAINS = False
SECURE_HSTS_PRELOAD = False

SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = 'same-origin'

# Browsable API is a development convenience only.
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
}

LOGGING['root']['level'] = 'WARNING'
LOGGING['loggers']['django.security'] = {
    'handlers': ['console'],
    'level': 'WARNING',
    'propagate': True,
}

import logging
if SECRET_KEY.startswith('django-insecure-'):
    logging.getLogger(__name__).warning('settings_prod: DJANGO_SECRET_KEY is not set; using the development key.')
