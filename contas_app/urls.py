from django.urls import path
from . import views

app_name = "contas_app"

urlpatterns = [
    # Contas a pagar
    path("", views.contas_listado, name="contas_listado"),
    path("nova/", views.conta_criar, name="conta_criar"),
    path("calendario/", views.calendario, name="calendario"),
    path("<int:pk>/", views.conta_detalhe, name="conta_detalhe"),
    path("<int:pk>/editar/", views.conta_editar, name="conta_editar"),
    path("<int:pk>/excluir/", views.conta_excluir, name="conta_excluir"),
    path("<int:pk>/pagar/", views.conta_pagar, name="conta_pagar"),
    path("<int:pk>/estornar/", views.conta_estornar, name="conta_estornar"),
    path("<int:pk>/cancelar/", views.conta_cancelar, name="conta_cancelar"),
    path("<int:pk>/gerar-recorrentes/", views.conta_gerar_recorrentes, name="conta_gerar_recorrentes"),

    # Categorias
    path("categorias/", views.categorias_listado, name="categorias_listado"),
    path("categorias/nova/", views.categoria_criar, name="categoria_criar"),
    path("categorias/<int:pk>/editar/", views.categoria_editar, name="categoria_editar"),
    path("categorias/<int:pk>/excluir/", views.categoria_excluir, name="categoria_excluir"),

    # Fornecedores
    path("fornecedores/", views.fornecedores_listado, name="fornecedores_listado"),
    path("fornecedores/novo/", views.fornecedor_criar, name="fornecedor_criar"),
    path("fornecedores/<int:pk>/editar/", views.fornecedor_editar, name="fornecedor_editar"),
    path("fornecedores/<int:pk>/excluir/", views.fornecedor_excluir, name="fornecedor_excluir"),
]
