import time
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core import mail
from django.core.exceptions import ValidationError
from django.test import Client

from core import services
from core.middleware import CHAVE_SESSAO_CRIADA_EM
from core.utils import formatar_moeda, parse_data, parse_decimal

User = get_user_model()


@pytest.mark.django_db
def test_criar_usuario_normaliza_email():
    usuario = services.criar_usuario("Maria", "  Maria@Igreja.COM ", "secretaria", senha="abc123")

    assert usuario.username == "maria@igreja.com"
    assert usuario.perfil.papel == "secretaria"
    assert usuario.check_password("abc123")


@pytest.mark.django_db
def test_criar_usuario_email_duplicado():
    services.criar_usuario("Maria", "maria@igreja.com", "secretaria")

    with pytest.raises(ValidationError):
        services.criar_usuario("Outra", "MARIA@igreja.com", "pastor")


@pytest.mark.django_db
def test_criar_usuario_papel_invalido():
    with pytest.raises(ValidationError):
        services.criar_usuario("João", "joao@igreja.com", "diacono")


@pytest.mark.django_db
def test_usuario_sistema_prefere_admin(criar_usuario):
    criar_usuario("secretaria")
    admin = criar_usuario("admin")

    assert services.usuario_sistema() == admin


@pytest.mark.django_db
def test_usuario_sistema_usa_qualquer_usuario(criar_usuario):
    pastor = criar_usuario("pastor")

    assert services.usuario_sistema() == pastor


@pytest.mark.django_db
def test_usuario_sistema_criado_quando_nao_ha_usuarios(settings):
    usuario = services.usuario_sistema()

    assert usuario.username == settings.USUARIO_SISTEMA_EMAIL
    assert usuario.first_name == "Sistema"
    assert usuario.perfil.papel == "admin"
    assert services.usuario_sistema() == usuario
    assert User.objects.count() == 1


@pytest.mark.django_db
def test_garantir_admin_padrao_idempotente(settings):
    usuario, criado = services.garantir_admin_padrao()
    assert criado
    assert usuario.check_password(settings.ADMIN_PADRAO_SENHA)

    services.alterar_senha(usuario, "nova-senha")
    mesmo, criado = services.garantir_admin_padrao()
    assert not criado
    mesmo.refresh_from_db()
    assert mesmo.check_password("nova-senha")


@pytest.mark.django_db
def test_login_com_admin_padrao(client, settings):
    resp = client.post("/api/auth/login/", {
        "email": settings.ADMIN_PADRAO_EMAIL.upper(),
        "senha": settings.ADMIN_PADRAO_SENHA,
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["usuario"]["papel"] == "admin"
    assert User.objects.get(username=settings.ADMIN_PADRAO_EMAIL).last_login is not None
    assert CHAVE_SESSAO_CRIADA_EM in client.session


@pytest.mark.django_db
def test_login_com_csrf_obtido_na_sessao(settings):
    navegador = Client(enforce_csrf_checks=True)

    resp = navegador.get("/api/auth/sessao/")
    token = resp.json()["csrf_token"]
    assert "csrftoken" in resp.cookies

    sem_token = navegador.post("/api/auth/login/", {
        "email": settings.ADMIN_PADRAO_EMAIL,
        "senha": settings.ADMIN_PADRAO_SENHA,
    })
    assert sem_token.status_code == 403

    resp = navegador.post(
        "/api/auth/login/",
        {"email": settings.ADMIN_PADRAO_EMAIL, "senha": settings.ADMIN_PADRAO_SENHA},
        HTTP_X_CSRFTOKEN=token,
    )
    assert resp.status_code == 200
    assert resp.json()["usuario"]["papel"] == "admin"


@pytest.mark.django_db
def test_login_senha_errada(client, criar_usuario):
    criar_usuario("tesouraria", email="tes@igreja.test")

    resp = client.post("/api/auth/login/", {"email": "tes@igreja.test", "senha": "errada"})

    assert resp.status_code == 401
    assert resp.json()["ok"] is False


@pytest.mark.django_db
def test_sessao_expira_pela_idade_maxima(client, admin, settings):
    client.force_login(admin)
    sessao = client.session
    sessao[CHAVE_SESSAO_CRIADA_EM] = int(time.time()) - settings.SESSAO_IDADE_MAXIMA_SEGUNDOS - 10
    sessao.save()

    resp = client.get("/api/auth/sessao/")

    assert resp.json()["autenticado"] is False


@pytest.mark.django_db
def test_recuperacao_e_redefinicao_de_senha(client, criar_usuario):
    usuario = criar_usuario("pastor", email="pastor@igreja.test")

    resp = client.post("/api/auth/recuperar-senha/", {"email": "pastor@igreja.test"})
    assert resp.status_code == 200
    assert len(mail.outbox) == 1

    link = [parte for parte in mail.outbox[0].body.split('"') if "redefinir-senha" in parte][0]
    uid, token = link.rstrip("/").split("/")[-2:]

    resp = client.post(f"/api/auth/redefinir-senha/{uid}/{token}/", {"nova_senha": "outra123"})
    assert resp.status_code == 200
    usuario.refresh_from_db()
    assert usuario.check_password("outra123")


@pytest.mark.django_db
def test_recuperacao_email_desconhecido_nao_revela(client):
    resp = client.post("/api/auth/recuperar-senha/", {"email": "ninguem@igreja.test"})

    assert resp.status_code == 200
    assert len(mail.outbox) == 0


@pytest.mark.django_db
def test_recuperacao_falha_de_envio_nao_revela(client, criar_usuario, monkeypatch):
    criar_usuario("pastor", email="pastor@igreja.test")

    def _falha(*args, **kwargs):
        raise ConnectionRefusedError("smtp fora do ar")

    monkeypatch.setattr(services, "enviar_correio_simples", _falha)

    cadastrado = client.post("/api/auth/recuperar-senha/", {"email": "pastor@igreja.test"})
    desconhecido = client.post("/api/auth/recuperar-senha/", {"email": "ninguem@igreja.test"})

    assert cadastrado.status_code == desconhecido.status_code == 200
    assert cadastrado.json() == desconhecido.json()


@pytest.mark.django_db
def test_gestao_de_usuarios_so_admin(cliente_secretaria):
    resp = cliente_secretaria.post("/api/usuarios/novo/", {
        "nome": "Novo", "email": "novo@igreja.test", "papel": "auditor",
    })

    assert resp.status_code == 403


@pytest.mark.django_db
def test_admin_cria_edita_e_exclui_usuario(cliente_admin):
    resp = cliente_admin.post("/api/usuarios/novo/", {
        "nome": "Ana", "email": "ana@igreja.test", "papel": "tesouraria", "senha": "ana12345",
    })
    assert resp.status_code == 201
    pk = resp.json()["usuario"]["id"]

    resp = cliente_admin.post(f"/api/usuarios/{pk}/editar/", {"papel": "pastor"})
    assert resp.json()["usuario"]["papel"] == "pastor"
    assert resp.json()["usuario"]["nome"] == "Ana"

    resp = cliente_admin.post(f"/api/usuarios/{pk}/excluir/")
    assert resp.status_code == 200
    assert not User.objects.filter(pk=pk).exists()


@pytest.mark.django_db
def test_listagem_exige_login(client):
    resp = client.get("/api/usuarios/")

    assert resp.status_code == 302


def test_formatar_moeda():
    assert formatar_moeda(Decimal("1234.5")) == "R$ 1.234,50"
    assert formatar_moeda(Decimal("-10")) == "-R$ 10,00"


def test_parse_data_e_decimal():
    assert parse_data("25/12/2024").isoformat() == "2024-12-25"
    assert parse_data("2024-12-25").isoformat() == "2024-12-25"
    assert parse_decimal("1.234,56") == Decimal("1234.56")
    assert parse_decimal("1.234") == Decimal("1234")
    assert parse_decimal("1.234.567") == Decimal("1234567")
    assert parse_decimal("12.5") == Decimal("12.5")
    assert parse_decimal("0.125") == Decimal("0.125")
    with pytest.raises(ValueError):
        parse_data("31-31-2024")
