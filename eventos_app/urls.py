from django.urls import path
from . import views

app_name = "eventos_app"

urlpatterns = [
    path("", views.eventos_listado, name="eventos_listado"),
    path("novo/", views.evento_criar, name="evento_criar"),
    path("<int:pk>/", views.evento_detalhe, name="evento_detalhe"),
    path("<int:pk>/editar/", views.evento_editar, name="evento_editar"),
    path("<int:pk>/excluir/", views.evento_excluir, name="evento_excluir"),
]
