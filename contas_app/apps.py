from django.apps import AppConfig


class ContasAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'contas_app'
    verbose_name = "Contas a pagar"
