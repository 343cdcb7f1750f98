from django.urls import path
from . import views

app_name = "caixa_app"

urlpatterns = [
    # Caixas
    path("caixas/", views.caixas_listado, name="caixas_listado"),
    path("caixas/novo/", views.caixa_criar, name="caixa_criar"),
    path("caixas/<int:pk>/editar/", views.caixa_editar, name="caixa_editar"),
    path("caixas/<int:pk>/recalcular/", views.caixa_recalcular, name="caixa_recalcular"),

    # Movimentações
    path("movimentacoes/", views.movimentacoes_listado, name="movimentacoes_listado"),
    path("movimentacoes/nova/", views.movimentacao_criar, name="movimentacao_criar"),
    path("movimentacoes/<int:pk>/", views.movimentacao_detalhe, name="movimentacao_detalhe"),
    path("movimentacoes/<int:pk>/editar/", views.movimentacao_editar, name="movimentacao_editar"),
    path("movimentacoes/<int:pk>/excluir/", views.movimentacao_excluir, name="movimentacao_excluir"),
    path("movimentacoes/<int:pk>/classificar/", views.entrada_classificar, name="entrada_classificar"),

    # Transferências
    path("transferencias/", views.transferencias_listado, name="transferencias_listado"),
    path("transferencias/nova/", views.transferencia_criar, name="transferencia_criar"),

    # Livro caixa
    path("livro/", views.livro, name="livro"),
    path("livro/pdf/", views.livro_pdf, name="livro_pdf"),

    # Alertas
    path("alertas/", views.alertas_entradas, name="alertas_entradas"),
]
