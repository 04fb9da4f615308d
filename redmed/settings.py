"""
Django settings for the medication exchange network backend.

Values are read from the environment, optionally populated from a
`.env` file at the project root so that the project can be configured
without modifying source code. In production you should set
environment variables rather than relying on the `.env` file.
"""
from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv  # type: ignore

# -----------------------------------------------------------------------------
# Base & .env loading
# -----------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent
env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

# -----------------------------------------------------------------------------
# Core flags & security baseline
# -----------------------------------------------------------------------------
ENV = os.getenv("ENV", "dev")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}

ALLOWED_HOSTS: list[str] = [
    h.strip() for h in os.getenv("ALLOWED_HOSTS", "127.0.0.1,localhost,testserver").split(",") if h.strip()
]

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv("SECRET_KEY") or "replace-me-with-a-secure-secret-key"

if ENV == "prod":
    if DEBUG:
        raise RuntimeError("DEBUG must be 0 in prod")
    if "*" in ALLOWED_HOSTS:
        raise RuntimeError("ALLOWED_HOSTS cannot contain * in prod")
    if SECRET_KEY == "replace-me-with-a-secure-secret-key":
        raise RuntimeError("SECRET_KEY must be set securely in prod")

# -----------------------------------------------------------------------------
# Applications
# -----------------------------------------------------------------------------
INSTALLED_APPS = [
    "django_prometheus",
    "rest_framework_simplejwt.token_blacklist",
    "corsheaders",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Third-party apps
    "rest_framework",
    "drf_yasg",
    "channels",
    # Local apps
    "intercambio",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django_prometheus.middleware.PrometheusBeforeMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django_prometheus.middleware.PrometheusAfterMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "intercambio.middleware.SessionGateMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "redmed.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "redmed.wsgi.application"

# -----------------------------------------------------------------------------
# Database
# Priority:
#   1) DATABASE_URL (parsed by dj_database_url), e.g. postgres://...
#   2) SQLite fallback
# -----------------------------------------------------------------------------
DB_CONN_MAX_AGE = int(os.getenv("DB_CONN_MAX_AGE", "120"))

database_url = os.getenv("DATABASE_URL", "").strip()
if database_url:
    import dj_database_url  # type: ignore

    DATABASES = {
        "default": dj_database_url.parse(
            database_url,
            conn_max_age=DB_CONN_MAX_AGE,
        )
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": (BASE_DIR / "db.sqlite3").as_posix(),
        }
    }

# -----------------------------------------------------------------------------
# Password validation
# -----------------------------------------------------------------------------
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator", "OPTIONS": {"min_length": 8}},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# -----------------------------------------------------------------------------
# Internationalization & static/media
# -----------------------------------------------------------------------------
LANGUAGE_CODE = "es-co"
TIME_ZONE = os.getenv("TIME_ZONE", "America/Bogota")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------------------------------------------
# Auth / DRF
# -----------------------------------------------------------------------------
AUTH_USER_MODEL = "intercambio.Usuario"

REST_FRAMEWORK = {
    "DEFAULT_THROTTLE_CLASSES": (
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
        "rest_framework.throttling.ScopedRateThrottle",
    ),
    "DEFAULT_THROTTLE_RATES": {
        "anon": os.getenv("THROTTLE_ANON", "60/min"),
        "user": os.getenv("THROTTLE_USER", "240/min"),
        "login": os.getenv("THROTTLE_LOGIN", "10/min"),
    },
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "intercambio.authentication.SesionAuthentication",
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "UNAUTHENTICATED_USER": None,
    # Unified error envelope for every API failure
    "EXCEPTION_HANDLER": "intercambio.exceptions.api_exception_handler",
}

# Server-issued session lifetime (cookie ``sesion_usuario``)
SESION_COOKIE_NOMBRE = "sesion_usuario"
SESION_DURACION_HORAS = int(os.getenv("SESION_DURACION_HORAS", "24"))
SESION_RECORDAR_DIAS = int(os.getenv("SESION_RECORDAR_DIAS", "30"))

# JWT pair handed out next to the session cookie for non-browser clients
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=int(os.getenv("JWT_ACCESS_MINUTES", "30"))),
    "REFRESH_TOKEN_LIFETIME": timedelta(hours=SESION_DURACION_HORAS),
    "ROTATE_REFRESH_TOKENS": True,
    "BLACKLIST_AFTER_ROTATION": True,
    "AUTH_HEADER_TYPES": ("Bearer",),
}

# Prefixes reachable without a session
SESION_RUTAS_PUBLICAS = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/auth/logout",
    "/api/auth/verificar-sesion",
    "/api/auth/refresh",
    "/api/health",
)

APPEND_SLASH = False

# -----------------------------------------------------------------------------
# Swagger / OpenAPI
# -----------------------------------------------------------------------------
SWAGGER_SETTINGS = {
    "DEFAULT_INFO": "redmed.urls.api_info",
}

# -----------------------------------------------------------------------------
# CORS (safe-by-default: none)
# -----------------------------------------------------------------------------
CORS_ALLOWED_ORIGINS = [
    h.strip() for h in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if h.strip()
]
CORS_ALLOW_CREDENTIALS = True

# -----------------------------------------------------------------------------
# Cache (locmem by default; Redis if REDIS_URL present)
# -----------------------------------------------------------------------------
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "redmed-locmem",
    }
}

REDIS_URL = os.getenv("REDIS_URL", "")
if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": REDIS_URL,
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
                "CONNECTION_POOL_KWARGS": {"max_connections": int(os.getenv("REDIS_MAX_CONN", "50"))},
                "SOCKET_CONNECT_TIMEOUT": 3,
                "SOCKET_TIMEOUT": 3,
            },
        }
    }

# -----------------------------------------------------------------------------
# Security & proxy headers (enable in prod behind TLS)
# -----------------------------------------------------------------------------
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True
SESION_COOKIE_SECURE = ENV == "prod"
if ENV == "prod":
    SECURE_HSTS_SECONDS = int(os.getenv("SECURE_HSTS_SECONDS", "3600"))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = False
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_SSL_REDIRECT = os.getenv("SECURE_SSL_REDIRECT", "1").lower() in {"1", "true", "yes"}

# -----------------------------------------------------------------------------
# Channels / WebSocket (live notifications)
# -----------------------------------------------------------------------------
ASGI_APPLICATION = "redmed.asgi.application"
CHANNEL_LAYERS = {
    "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}
}
if REDIS_URL:
    CHANNEL_LAYERS = {
        "default": {
            "BACKEND": "channels_redis.core.RedisChannelLayer",
            "CONFIG": {"hosts": [REDIS_URL]},
        }
    }

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "file": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "console"},
    },
    "loggers": {
        "intercambio": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django.request": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}
if LOG_FILE:
    Path(LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
    LOGGING["handlers"]["file"] = {
        "class": "logging.FileHandler",
        "filename": LOG_FILE,
        "encoding": "utf-8",
        "formatter": "file",
    }
    LOGGING["loggers"]["intercambio"]["handlers"].append("file")
