from django.contrib import admin
from .models import Fornecedor, CategoriaConta, ContaPagar


@admin.register(Fornecedor)
class FornecedorAdmin(admin.ModelAdmin):
    list_display = ("nome", "contato", "telefone", "email", "categoria")
    search_fields = ("nome", "contato", "email")


@admin.register(CategoriaConta)
class CategoriaContaAdmin(admin.ModelAdmin):
    list_display = ("nome", "descricao", "ativa")
    list_filter = ("ativa",)
    search_fields = ("nome",)


@admin.register(ContaPagar)
class ContaPagarAdmin(admin.ModelAdmin):
    list_display = (
        "descricao",
        "vencimento",
        "valor",
        "categoria",
        "status",
        "recorrencia",
        "centro_custo",
    )
    list_filter = ("status", "categoria", "recorrencia", "centro_custo")
    search_fields = ("descricao", "fornecedor_nome", "fornecedor__nome")
    date_hierarchy = "vencimento"
