from django.contrib import admin
from .models import PerfilUsuario


@admin.register(PerfilUsuario)
class PerfilUsuarioAdmin(admin.ModelAdmin):
    list_display = ("usuario", "papel", "criado_em")
    list_filter = ("papel",)
    search_fields = ("usuario__first_name", "usuario__username", "usuario__email")
