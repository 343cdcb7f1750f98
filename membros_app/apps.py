from django.apps import AppConfig


class MembrosAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'membros_app'
    verbose_name = "Membros"
