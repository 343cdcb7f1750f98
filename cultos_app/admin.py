from django.contrib import admin
from .models import ModeloCulto, Culto, EntradaCulto


@admin.register(ModeloCulto)
class ModeloCultoAdmin(admin.ModelAdmin):
    list_display = ("nome", "tipo", "dia_semana", "horario", "recorrente", "ativo")
    list_filter = ("tipo", "ativo", "recorrente")
    search_fields = ("nome",)


class EntradaCultoInline(admin.TabularInline):
    model = EntradaCulto
    extra = 0
    readonly_fields = ("criado_em",)


@admin.register(Culto)
class CultoAdmin(admin.ModelAdmin):
    list_display = ("nome", "data", "horario", "tipo", "status", "total_entradas")
    list_filter = ("status", "tipo")
    search_fields = ("nome", "observacoes")
    date_hierarchy = "data"
    inlines = [EntradaCultoInline]
