from django.urls import path
from . import views

app_name = "membros_app"

urlpatterns = [
    path("", views.membros_listado, name="membros_listado"),
    path("novo/", views.membro_criar, name="membro_criar"),
    path("<int:pk>/", views.membro_detalhe, name="membro_detalhe"),
    path("<int:pk>/editar/", views.membro_editar, name="membro_editar"),
    path("<int:pk>/excluir/", views.membro_excluir, name="membro_excluir"),

    # Excel / CSV
    path("exportar/", views.exportar_excel, name="exportar_excel"),
    path("importar/previa/", views.importar_previa, name="importar_previa"),
    path("importar/", views.importar, name="importar"),
]
