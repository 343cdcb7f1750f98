import logging

from django.contrib.auth import login, logout
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from . import services
from .decorators import papel_requerido
from .forms import LoginForm, SenhaForm, UsuarioEdicaoForm, UsuarioForm
from .middleware import marcar_inicio_sessao
from .utils import resposta_erro, resposta_erros_form

logger = logging.getLogger(__name__)


def serializar_usuario(usuario):
    perfil = getattr(usuario, "perfil", None)
    return {
        "id": usuario.id,
        "nome": services.nome_exibicao(usuario),
        "email": usuario.username,
        "papel": services.papel_do_usuario(usuario),
        "avatar": perfil.avatar if perfil else "",
        "ultimo_acesso": usuario.last_login,
        "criado_em": usuario.date_joined,
    }


# ============================================
# SESSÃO
# ============================================

@require_POST
def login_view(request):
    form = LoginForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)

    usuario = services.autenticar(
        request,
        form.cleaned_data["email"],
        form.cleaned_data["senha"],
    )
    if usuario is None:
        logger.info(f"Falha de login para {form.cleaned_data['email']}")
        return resposta_erro("E-mail ou senha inválidos.", status=401)

    # login() atualiza last_login e troca a chave da sessão
    login(request, usuario)
    marcar_inicio_sessao(request)
    return JsonResponse({"ok": True, "usuario": serializar_usuario(usuario)})


@require_POST
def logout_view(request):
    logout(request)
    return JsonResponse({"ok": True})


@ensure_csrf_cookie
@require_GET
def sessao(request):
    """
    Estado da sessão. Também entrega o token CSRF exigido pelos POSTs da API.
    """
    csrf = get_token(request)
    if not request.user.is_authenticated:
        return JsonResponse({"ok": True, "autenticado": False, "csrf_token": csrf})
    return JsonResponse({
        "ok": True,
        "autenticado": True,
        "csrf_token": csrf,
        "usuario": serializar_usuario(request.user),
        "expira_em": request.session.get_expiry_date(),
    })


@require_POST
def recuperar_senha(request):
    email = request.POST.get("email", "")
    if not email.strip():
        return resposta_erro("Informe o e-mail.")

    services.enviar_recuperacao_senha(email, request.build_absolute_uri("/"))
    return JsonResponse({
        "ok": True,
        "mensagem": "Se o e-mail estiver cadastrado, enviaremos as instruções.",
    })


@require_POST
def redefinir_senha(request, uidb64, token):
    form = SenhaForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        services.redefinir_senha(uidb64, token, form.cleaned_data["nova_senha"])
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True})


# ============================================
# USUÁRIOS
# ============================================

@login_required
@require_GET
def usuarios_listado(request):
    data = [serializar_usuario(u) for u in services.listar_usuarios()]
    return JsonResponse({"ok": True, "usuarios": data})


@login_required
@papel_requerido("admin")
@require_POST
def usuario_criar(request):
    form = UsuarioForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        usuario = services.criar_usuario(**form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "usuario": serializar_usuario(usuario)}, status=201)


@login_required
@papel_requerido("admin")
@require_POST
def usuario_editar(request, pk):
    usuario = get_object_or_404(services.User, pk=pk)
    form = UsuarioEdicaoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)

    # Só altera o que veio no POST
    campos = {
        nome: valor
        for nome, valor in form.cleaned_data.items()
        if nome in request.POST
    }
    try:
        services.atualizar_usuario(usuario, **campos)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "usuario": serializar_usuario(services.obter_usuario(pk))})


@login_required
@require_POST
def usuario_senha(request, pk):
    usuario = get_object_or_404(services.User, pk=pk)
    if usuario.pk != request.user.pk and services.papel_do_usuario(request.user) != "admin":
        return resposta_erro("Você não tem permissão para esta operação.", status=403)

    form = SenhaForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    services.alterar_senha(usuario, form.cleaned_data["nova_senha"])
    return JsonResponse({"ok": True})


@login_required
@papel_requerido("admin")
@require_POST
def usuario_excluir(request, pk):
    usuario = get_object_or_404(services.User, pk=pk)
    if usuario.pk == request.user.pk:
        return resposta_erro("Você não pode excluir o próprio usuário.")
    services.excluir_usuario(usuario)
    return JsonResponse({"ok": True})
