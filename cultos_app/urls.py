from django.urls import path
from . import views

app_name = "cultos_app"

urlpatterns = [
    # Cultos
    path("", views.cultos_listado, name="cultos_listado"),
    path("novo/", views.culto_criar, name="culto_criar"),
    path("pendentes/", views.pendentes, name="pendentes"),
    path("proximos/", views.proximos, name="proximos"),
    path("gerar-semanais/", views.gerar_semanais, name="gerar_semanais"),
    path("<int:pk>/", views.culto_detalhe, name="culto_detalhe"),
    path("<int:pk>/editar/", views.culto_editar, name="culto_editar"),
    path("<int:pk>/excluir/", views.culto_excluir, name="culto_excluir"),
    path("<int:pk>/fechamento/", views.culto_fechar, name="culto_fechar"),
    path("<int:pk>/entradas/nova/", views.entrada_registrar, name="entrada_registrar"),
    path("entradas/<int:pk>/remover/", views.entrada_remover, name="entrada_remover"),

    # Configuração dos cultos recorrentes
    path("modelos/", views.modelos_listado, name="modelos_listado"),
    path("modelos/novo/", views.modelo_criar, name="modelo_criar"),
    path("modelos/<int:pk>/editar/", views.modelo_editar, name="modelo_editar"),
    path("modelos/<int:pk>/excluir/", views.modelo_excluir, name="modelo_excluir"),
]
