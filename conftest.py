import pytest


@pytest.fixture(autouse=True)
def _hasher_rapido(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture
def criar_usuario(db):
    from core.services import criar_usuario as _criar

    def _factory(papel="admin", email=None, nome=None, senha="senha123"):
        email = email or f"{papel}@igreja.test"
        return _criar(nome=nome or papel.title(), email=email, papel=papel, senha=senha)

    return _factory


@pytest.fixture
def admin(criar_usuario):
    return criar_usuario("admin")


@pytest.fixture
def cliente_admin(client, admin):
    client.force_login(admin)
    return client


@pytest.fixture
def cliente_tesouraria(client, criar_usuario):
    client.force_login(criar_usuario("tesouraria"))
    return client


@pytest.fixture
def cliente_secretaria(client, criar_usuario):
    client.force_login(criar_usuario("secretaria"))
    return client


@pytest.fixture
def cliente_auditor(client, criar_usuario):
    client.force_login(criar_usuario("auditor"))
    return client
