from django.apps import AppConfig


class CaixaAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'caixa_app'
    verbose_name = "Caixa"
