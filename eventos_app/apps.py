from django.apps import AppConfig


class EventosAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'eventos_app'
    verbose_name = "Eventos"
