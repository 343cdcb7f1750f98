import logging

from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from core.decorators import papel_requerido
from core.utils import resposta_erro, resposta_erros_form

from . import services
from .forms import ImportacaoForm, MembroForm
from .models import Membro
from .planilhas import exportar_membros_xlsx, ler_planilha

logger = logging.getLogger(__name__)


def serializar_membro(m):
    return {
        "id": m.id,
        "nome": m.nome,
        "data_nascimento": m.data_nascimento,
        "idade": m.idade,
        "telefone": m.telefone,
        "email": m.email,
        "endereco": m.endereco,
        "data_entrada": m.data_entrada,
        "status": m.status,
        "ministerios": m.ministerios,
        "observacoes": m.observacoes,
    }


def _filtros(request):
    return {
        "q": (request.GET.get("q") or "").strip() or None,
        "status": request.GET.get("status") or None,
        "ministerio": (request.GET.get("ministerio") or "").strip() or None,
    }


# ============================================
# CADASTRO
# ============================================

@login_required
@require_GET
def membros_listado(request):
    membros = services.filtrar_membros(**_filtros(request))
    return JsonResponse({
        "ok": True,
        "membros": [serializar_membro(m) for m in membros],
        "resumo": services.resumo_membros(),
    })


@login_required
@require_GET
def membro_detalhe(request, pk):
    membro = get_object_or_404(Membro, pk=pk)
    return JsonResponse({"ok": True, "membro": serializar_membro(membro)})


@login_required
@papel_requerido("secretaria")
@require_POST
def membro_criar(request):
    form = MembroForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    membro = form.save()
    logger.info(f"Membro cadastrado: {membro.nome}")
    return JsonResponse({"ok": True, "membro": serializar_membro(membro)}, status=201)


@login_required
@papel_requerido("secretaria")
@require_POST
def membro_editar(request, pk):
    membro = get_object_or_404(Membro, pk=pk)
    form = MembroForm(request.POST, instance=membro)
    if not form.is_valid():
        return resposta_erros_form(form)
    membro = form.save()
    return JsonResponse({"ok": True, "membro": serializar_membro(membro)})


@login_required
@papel_requerido("secretaria")
@require_POST
def membro_excluir(request, pk):
    membro = get_object_or_404(Membro, pk=pk)
    membro.delete()
    return JsonResponse({"ok": True})


# ============================================
# EXPORTAÇÃO E IMPORTAÇÃO
# ============================================

@login_required
@require_GET
def exportar_excel(request):
    """
    Exporta para Excel os membros do listado, respeitando os filtros.
    """
    membros = services.filtrar_membros(**_filtros(request))
    conteudo = exportar_membros_xlsx(membros)

    response = HttpResponse(
        conteudo,
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    response["Content-Disposition"] = 'attachment; filename="membros.xlsx"'
    return response


def _ler_arquivo(request):
    form = ImportacaoForm(request.POST, request.FILES)
    if not form.is_valid():
        return None, resposta_erros_form(form)
    try:
        return ler_planilha(form.cleaned_data["arquivo"]), None
    except ValidationError as e:
        return None, resposta_erro(e)


@login_required
@papel_requerido("secretaria")
@require_POST
def importar_previa(request):
    linhas, erro = _ler_arquivo(request)
    if erro is not None:
        return erro

    previa = services.pre_visualizar_importacao(linhas)
    return JsonResponse({
        "ok": True,
        "linhas": previa,
        "validas": sum(1 for p in previa if p["situacao"] != "erro"),
        "com_erro": sum(1 for p in previa if p["situacao"] == "erro"),
    })


@login_required
@papel_requerido("secretaria")
@require_POST
def importar(request):
    linhas, erro = _ler_arquivo(request)
    if erro is not None:
        return erro

    resultado = services.importar_membros(linhas)
    return JsonResponse({"ok": True, **resultado})
