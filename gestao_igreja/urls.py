from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path("admin/", admin.site.urls),

    # Autenticação, sessão e usuários
    path("api/", include("core.urls")),

    path("api/membros/", include("membros_app.urls")),
    path("api/cultos/", include("cultos_app.urls")),
    path("api/caixa/", include("caixa_app.urls")),
    path("api/contas/", include("contas_app.urls")),
    path("api/eventos/", include("eventos_app.urls")),
    path("api/painel/", include("painel_app.urls")),
]
