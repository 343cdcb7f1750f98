from django.urls import path
from . import views

app_name = "painel_app"

urlpatterns = [
    path("", views.painel, name="painel"),
    path("grafico/", views.grafico, name="grafico"),
]
