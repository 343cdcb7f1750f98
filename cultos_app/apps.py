from django.apps import AppConfig


class CultosAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cultos_app'
    verbose_name = "Cultos"
