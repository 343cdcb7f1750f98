from django.contrib import admin
from .models import Evento


@admin.register(Evento)
class EventoAdmin(admin.ModelAdmin):
    list_display = ("nome", "data_inicio", "data_fim", "status", "total_entradas", "total_saidas")
    list_filter = ("status",)
    search_fields = ("nome", "descricao")
    date_hierarchy = "data_inicio"
    readonly_fields = ("total_entradas", "total_saidas")
