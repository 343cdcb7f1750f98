from django.contrib import admin
from .models import Caixa, Movimentacao


@admin.register(Caixa)
class CaixaAdmin(admin.ModelAdmin):
    list_display = ("nome", "tipo", "evento", "saldo_inicial", "saldo")
    list_filter = ("tipo",)
    search_fields = ("nome",)
    readonly_fields = ("saldo",)


@admin.register(Movimentacao)
class MovimentacaoAdmin(admin.ModelAdmin):
    list_display = (
        "data",
        "tipo",
        "caixa",
        "categoria",
        "valor",
        "responsavel_nome",
    )
    list_filter = ("tipo", "caixa", "forma_pagamento", "data")
    search_fields = ("descricao", "categoria", "observacoes")
    date_hierarchy = "data"
