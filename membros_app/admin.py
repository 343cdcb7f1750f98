from django.contrib import admin
from .models import Membro


@admin.register(Membro)
class MembroAdmin(admin.ModelAdmin):
    list_display = ("nome", "telefone", "email", "status", "data_entrada")
    list_filter = ("status",)
    search_fields = ("nome", "email", "telefone")
    date_hierarchy = "data_entrada"
