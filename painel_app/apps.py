from django.apps import AppConfig


class PainelAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'painel_app'
    verbose_name = "Painel"
