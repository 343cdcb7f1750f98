# core/services.py

import logging

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.tokens import default_token_generator
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode

from .models import PerfilUsuario
from .utils_email import enviar_correio_simples

logger = logging.getLogger(__name__)

User = get_user_model()

PAPEIS_VALIDOS = {valor for valor, _ in PerfilUsuario.PAPEL_CHOICES}


def normalizar_email(email):
    return (email or "").strip().lower()


def papel_do_usuario(usuario):
    """
    Papel efetivo do usuário. Superusuários do Django contam como admin.
    """
    if usuario is None or not usuario.is_authenticated:
        return None
    if usuario.is_superuser:
        return "admin"
    perfil = getattr(usuario, "perfil", None)
    if perfil is None:
        return "auditor"
    return perfil.papel


def nome_exibicao(usuario):
    if usuario is None:
        return "Sistema"
    return usuario.first_name or usuario.username


# ============================================
# CONSULTAS
# ============================================

def listar_usuarios():
    return User.objects.select_related("perfil").order_by("first_name", "username")


def obter_usuario(pk):
    return User.objects.select_related("perfil").filter(pk=pk).first()


def obter_usuario_por_email(email):
    return User.objects.select_related("perfil").filter(username=normalizar_email(email)).first()


# ============================================
# CRUD
# ============================================

def _validar_papel(papel):
    if papel not in PAPEIS_VALIDOS:
        raise ValidationError(f"Papel inválido: {papel}")


@transaction.atomic
def criar_usuario(nome, email, papel, senha=None, avatar=""):
    email = normalizar_email(email)
    try:
        validate_email(email)
    except ValidationError:
        raise ValidationError("E-mail inválido.")
    _validar_papel(papel)

    if User.objects.filter(username=email).exists():
        raise ValidationError("Já existe um usuário com este e-mail.")

    usuario = User(username=email, email=email, first_name=(nome or "").strip())
    if senha:
        usuario.set_password(senha)
    else:
        usuario.set_unusable_password()
    usuario.save()

    PerfilUsuario.objects.create(usuario=usuario, papel=papel, avatar=avatar or "")
    logger.info(f"Usuário criado: {email} ({papel})")
    return usuario


@transaction.atomic
def atualizar_usuario(usuario, nome=None, email=None, papel=None, avatar=None):
    if email is not None:
        email = normalizar_email(email)
        if User.objects.filter(username=email).exclude(pk=usuario.pk).exists():
            raise ValidationError("Já existe um usuário com este e-mail.")
        usuario.username = email
        usuario.email = email
    if nome is not None:
        usuario.first_name = nome.strip()
    usuario.save()

    perfil, _ = PerfilUsuario.objects.get_or_create(usuario=usuario)
    if papel is not None:
        _validar_papel(papel)
        perfil.papel = papel
    if avatar is not None:
        perfil.avatar = avatar
    perfil.save()
    return usuario


def alterar_senha(usuario, nova_senha):
    if not nova_senha or len(nova_senha) < 6:
        raise ValidationError("A senha deve ter pelo menos 6 caracteres.")
    usuario.set_password(nova_senha)
    usuario.save(update_fields=["password"])


def excluir_usuario(usuario):
    logger.info(f"Usuário excluído: {usuario.username}")
    usuario.delete()


# ============================================
# AUTENTICAÇÃO
# ============================================

def garantir_admin_padrao():
    """
    Garante que o administrador padrão exista. A senha padrão só é definida na criação.
    """
    email = normalizar_email(settings.ADMIN_PADRAO_EMAIL)
    usuario = User.objects.filter(username=email).first()
    if usuario is not None:
        return usuario, False

    usuario = criar_usuario(
        nome=settings.ADMIN_PADRAO_NOME,
        email=email,
        papel="admin",
        senha=settings.ADMIN_PADRAO_SENHA,
    )
    logger.warning(f"Administrador padrão criado: {email}. Troque a senha padrão.")
    return usuario, True


def autenticar(request, email, senha):
    garantir_admin_padrao()
    return authenticate(request, username=normalizar_email(email), password=senha)


def usuario_sistema():
    """
    Usuário responsável pelos lançamentos automáticos (entradas de culto, etc.).
    Ordem: primeiro admin, usuário do sistema já existente, qualquer usuário,
    e por fim cria o usuário "Sistema".
    """
    admin = (
        User.objects.filter(perfil__papel="admin").order_by("id").first()
        or User.objects.filter(is_superuser=True).order_by("id").first()
    )
    if admin:
        return admin

    email_sistema = settings.USUARIO_SISTEMA_EMAIL
    existente = User.objects.filter(username=email_sistema).first()
    if existente:
        return existente

    qualquer = User.objects.order_by("id").first()
    if qualquer:
        return qualquer

    logger.info("Nenhum usuário encontrado; criando usuário do sistema")
    return criar_usuario(nome="Sistema", email=email_sistema, papel="admin")


# ============================================
# RECUPERAÇÃO DE SENHA
# ============================================

def enviar_recuperacao_senha(email, base_url):
    """
    Envia o link de redefinição. Não informa ao chamador se o e-mail existe.
    """
    usuario = obter_usuario_por_email(email)
    if usuario is None or not usuario.is_active:
        logger.info(f"Recuperação de senha solicitada para e-mail desconhecido: {normalizar_email(email)}")
        return

    uid = urlsafe_base64_encode(force_bytes(usuario.pk))
    token = default_token_generator.make_token(usuario)
    link = f"{base_url.rstrip('/')}/redefinir-senha/{uid}/{token}/"

    corpo = (
        f"<p>Olá, {nome_exibicao(usuario)}.</p>"
        f"<p>Para redefinir sua senha, acesse: <a href=\"{link}\">{link}</a></p>"
        "<p>Se você não solicitou a redefinição, ignore este e-mail.</p>"
    )
    # Falha de envio não altera a resposta
    try:
        enviar_correio_simples("Redefinição de senha", corpo, usuario.email or usuario.username)
    except Exception:
        logger.exception(f"Não foi possível enviar o e-mail de redefinição para o usuário {usuario.pk}")


def redefinir_senha(uidb64, token, nova_senha):
    try:
        pk = force_str(urlsafe_base64_decode(uidb64))
        usuario = User.objects.get(pk=pk)
    except (TypeError, ValueError, OverflowError, User.DoesNotExist):
        usuario = None

    if usuario is None or not default_token_generator.check_token(usuario, token):
        raise ValidationError("Link de redefinição inválido ou expirado.")

    alterar_senha(usuario, nova_senha)
    return usuario
