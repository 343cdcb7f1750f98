"""
Django settings for gestao_igreja project.
Configuração lida de variáveis de ambiente (local e produção).
"""
import os
from pathlib import Path

import dj_database_url

BASE_DIR = Path(__file__).resolve().parent.parent

# =============================================================================
# SEGURANÇA - CREDENCIAIS EM VARIÁVEIS DE AMBIENTE
# =============================================================================

SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-trocar-em-producao")

# DEBUG automático: "0" em produção, "1" local
DEBUG = os.environ.get("DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    h.strip()
    for h in os.environ.get("ALLOWED_HOSTS", "127.0.0.1,localhost,testserver").split(",")
    if h.strip()
]

CSRF_TRUSTED_ORIGINS = [
    o.strip()
    for o in os.environ.get("CSRF_TRUSTED_ORIGINS", "").split(",")
    if o.strip()
]

# =============================================================================
# APLICAÇÕES
# =============================================================================

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'core',
    'membros_app',
    'eventos_app',
    'cultos_app',
    'contas_app',
    'caixa_app',
    'painel_app',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',  # WhiteNoise ANTES dos outros
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'core.middleware.SessaoIdadeMaximaMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'gestao_igreja.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'gestao_igreja.wsgi.application'

# =============================================================================
# BANCO DE DADOS
# =============================================================================

DATABASES = {
    "default": dj_database_url.config(
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=600,
    )
}

if os.environ.get("DATABASE_SSL") == "1":
    DATABASES["default"]["OPTIONS"] = {"sslmode": "require"}

# =============================================================================
# VALIDAÇÃO DE SENHAS
# =============================================================================

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
     'OPTIONS': {'min_length': 6}},
]

# =============================================================================
# INTERNACIONALIZAÇÃO
# =============================================================================

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

# =============================================================================
# SESSÃO
# =============================================================================

# Sessão de 7 dias renovada a cada requisição; idade máxima absoluta de 30 dias
SESSAO_DURACAO_SEGUNDOS = 7 * 24 * 60 * 60
SESSAO_IDADE_MAXIMA_SEGUNDOS = 30 * 24 * 60 * 60

SESSION_COOKIE_AGE = SESSAO_DURACAO_SEGUNDOS
SESSION_SAVE_EVERY_REQUEST = True

# =============================================================================
# CONFIGURAÇÃO ESPECÍFICA DA APLICAÇÃO
# =============================================================================

ADMIN_PADRAO_EMAIL = os.environ.get("ADMIN_PADRAO_EMAIL", "admin@livresouemcristo.com.br")
ADMIN_PADRAO_SENHA = os.environ.get("ADMIN_PADRAO_SENHA", "admin123")
ADMIN_PADRAO_NOME = os.environ.get("ADMIN_PADRAO_NOME", "Administrador")

USUARIO_SISTEMA_EMAIL = "sistema@igreja.local"

CULTOS_SEMANAS_PADRAO = 4
CONTAS_RECORRENTES_PADRAO = 12
ALERTA_ENTRADAS_DIAS = 7
IMPORTACAO_TAMANHO_MAXIMO = 5 * 1024 * 1024

# =============================================================================
# ARQUIVOS ESTÁTICOS
# =============================================================================

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedStaticFilesStorage",
    },
}

# =============================================================================
# E-MAIL (SMTP)
# =============================================================================

EMAIL_BACKEND = os.environ.get("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.environ.get("EMAIL_HOST", "smtp.gmail.com")
EMAIL_PORT = int(os.environ.get("EMAIL_PORT", "587"))
EMAIL_USE_TLS = True
EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD", "")
DEFAULT_FROM_EMAIL = EMAIL_HOST_USER or "nao-responda@igreja.local"

# =============================================================================
# AUTENTICAÇÃO
# =============================================================================

LOGIN_URL = '/api/auth/login/'

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simples": {
            "format": "[{asctime}] {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simples",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        app: {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False}
        for app in (
            "core",
            "membros_app",
            "eventos_app",
            "cultos_app",
            "contas_app",
            "caixa_app",
            "painel_app",
        )
    },
}

# =============================================================================
# CONFIGURAÇÃO ADICIONAL
# =============================================================================

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

if not DEBUG:
    SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
    SECURE_SSL_REDIRECT = os.environ.get("SECURE_SSL_REDIRECT", "1") == "1"
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
