from django.urls import path
from . import views

app_name = "core"

urlpatterns = [
    # Sessão
    path("auth/login/", views.login_view, name="login"),
    path("auth/logout/", views.logout_view, name="logout"),
    path("auth/sessao/", views.sessao, name="sessao"),
    path("auth/recuperar-senha/", views.recuperar_senha, name="recuperar_senha"),
    path("auth/redefinir-senha/<str:uidb64>/<str:token>/", views.redefinir_senha, name="redefinir_senha"),

    # Usuários
    path("usuarios/", views.usuarios_listado, name="usuarios_listado"),
    path("usuarios/novo/", views.usuario_criar, name="usuario_criar"),
    path("usuarios/<int:pk>/editar/", views.usuario_editar, name="usuario_editar"),
    path("usuarios/<int:pk>/senha/", views.usuario_senha, name="usuario_senha"),
    path("usuarios/<int:pk>/excluir/", views.usuario_excluir, name="usuario_excluir"),
]
