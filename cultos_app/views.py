import logging

from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from core.decorators import papel_requerido
from core.utils import ler_corpo_json, parse_data, parse_decimal, resposta_erro, resposta_erros_form

from . import services
from .forms import CultoForm, EntradaCultoForm, GerarCultosForm, ModeloCultoForm
from .models import Culto, EntradaCulto, ModeloCulto

logger = logging.getLogger(__name__)


def serializar_modelo(modelo):
    return {
        "id": modelo.id,
        "nome": modelo.nome,
        "tipo": modelo.tipo,
        "horario": modelo.horario.strftime("%H:%M"),
        "dia_semana": modelo.dia_semana,
        "recorrente": modelo.recorrente,
        "ativo": modelo.ativo,
        "observacoes": modelo.observacoes,
    }


def serializar_entrada(entrada):
    return {
        "id": entrada.id,
        "culto_id": entrada.culto_id,
        "tipo": entrada.tipo,
        "valor": entrada.valor,
        "forma_pagamento": entrada.forma_pagamento,
        "observacoes": entrada.observacoes,
        "criado_em": entrada.criado_em,
    }


def serializar_culto(culto, com_entradas=False):
    data = {
        "id": culto.id,
        "modelo_id": culto.modelo_id,
        "nome": culto.nome,
        "tipo": culto.tipo,
        "data": culto.data,
        "horario": culto.horario.strftime("%H:%M"),
        "status": culto.status,
        "observacoes": culto.observacoes,
        "total_entradas": culto.total_entradas,
        "totais_por_forma": culto.totais_por_forma,
        "totais_por_tipo": culto.totais_por_tipo,
    }
    if com_entradas:
        data["entradas"] = [serializar_entrada(e) for e in culto.entradas.all()]
    return data


# ============================================
# MODELOS DE CULTO (CONFIGURAÇÃO)
# ============================================

@login_required
@require_GET
def modelos_listado(request):
    data = [serializar_modelo(m) for m in services.listar_modelos()]
    return JsonResponse({"ok": True, "modelos": data})


@login_required
@papel_requerido("secretaria", "tesouraria")
@require_POST
def modelo_criar(request):
    form = ModeloCultoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    modelo = form.save()
    return JsonResponse({"ok": True, "modelo": serializar_modelo(modelo)}, status=201)


@login_required
@papel_requerido("secretaria", "tesouraria")
@require_POST
def modelo_editar(request, pk):
    modelo = get_object_or_404(ModeloCulto, pk=pk)
    form = ModeloCultoForm(request.POST, instance=modelo)
    if not form.is_valid():
        return resposta_erros_form(form)
    modelo = form.save()
    return JsonResponse({"ok": True, "modelo": serializar_modelo(modelo)})


@login_required
@papel_requerido("secretaria", "tesouraria")
@require_POST
def modelo_excluir(request, pk):
    modelo = get_object_or_404(ModeloCulto, pk=pk)
    modelo.delete()
    return JsonResponse({"ok": True})


@login_required
@papel_requerido("secretaria", "tesouraria")
@require_POST
def gerar_semanais(request):
    form = GerarCultosForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        criados = services.gerar_cultos_semanais(semanas=form.cleaned_data.get("semanas"))
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({
        "ok": True,
        "criados": len(criados),
        "cultos": [serializar_culto(c) for c in criados],
    })


# ============================================
# CULTOS
# ============================================

@login_required
@require_GET
def cultos_listado(request):
    try:
        inicio = parse_data(request.GET.get("inicio"))
        fim = parse_data(request.GET.get("fim"))
    except ValueError as e:
        return resposta_erro(e)

    qs = services.listar_cultos(inicio=inicio, fim=fim, status=request.GET.get("status") or None)
    return JsonResponse({"ok": True, "cultos": [serializar_culto(c) for c in qs]})


@login_required
@require_GET
def culto_detalhe(request, pk):
    culto = get_object_or_404(Culto, pk=pk)
    return JsonResponse({"ok": True, "culto": serializar_culto(culto, com_entradas=True)})


@login_required
@papel_requerido("secretaria", "tesouraria")
@require_POST
def culto_criar(request):
    form = CultoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    culto = services.criar_culto(**form.cleaned_data)
    return JsonResponse({"ok": True, "culto": serializar_culto(culto)}, status=201)


@login_required
@papel_requerido("secretaria", "tesouraria")
@require_POST
def culto_editar(request, pk):
    culto = get_object_or_404(Culto, pk=pk)
    status_atual = culto.status
    form = CultoForm(request.POST, instance=culto)
    if not form.is_valid():
        return resposta_erros_form(form)

    culto = form.save(commit=False)
    if not form.cleaned_data.get("status"):
        culto.status = status_atual
    culto.save()
    return JsonResponse({"ok": True, "culto": serializar_culto(culto)})


@login_required
@papel_requerido("secretaria", "tesouraria")
@require_POST
def culto_excluir(request, pk):
    culto = get_object_or_404(Culto, pk=pk)
    try:
        services.excluir_culto(culto)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True})


@login_required
@require_GET
def pendentes(request):
    data = [serializar_culto(c) for c in services.cultos_pendentes()]
    return JsonResponse({"ok": True, "cultos": data})


@login_required
@require_GET
def proximos(request):
    data = [serializar_culto(c) for c in services.proximos_cultos()]
    return JsonResponse({"ok": True, "cultos": data})


# ============================================
# ENTRADAS E FECHAMENTO
# ============================================

@login_required
@papel_requerido("tesouraria")
@require_POST
def entrada_registrar(request, pk):
    culto = get_object_or_404(Culto, pk=pk)
    form = EntradaCultoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        entrada = services.registrar_entrada(culto, responsavel=request.user, **form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({
        "ok": True,
        "entrada": serializar_entrada(entrada),
        "total_entradas": culto.total_entradas,
    }, status=201)


@login_required
@papel_requerido("tesouraria")
@require_POST
def entrada_remover(request, pk):
    entrada = get_object_or_404(EntradaCulto, pk=pk)
    culto = entrada.culto
    services.remover_entrada(entrada)
    return JsonResponse({"ok": True, "total_entradas": culto.total_entradas})


def _sem_valor(valor):
    """Linhas do fechamento sem valor ou com valor zero/negativo são descartadas."""
    try:
        numero = parse_decimal(valor)
    except ValueError:
        return False
    return numero is None or numero <= 0


@login_required
@papel_requerido("tesouraria")
@require_POST
def culto_fechar(request, pk):
    """
    Corpo JSON:
        {"observacoes": "...", "entradas": [{"tipo": "dizimo", "valor": "150.00",
         "forma_pagamento": "pix", "observacoes": ""}, ...]}
    """
    culto = get_object_or_404(Culto, pk=pk)
    try:
        data = ler_corpo_json(request)
    except ValueError as e:
        return resposta_erro(e)

    entradas = []
    for i, item in enumerate(data.get("entradas") or []):
        item = item if isinstance(item, dict) else {}
        if _sem_valor(item.get("valor")):
            continue
        form = EntradaCultoForm(item)
        if not form.is_valid():
            return JsonResponse({
                "ok": False,
                "error": f"Entrada {i + 1} inválida.",
                "errors": form.errors.get_json_data(),
            }, status=400)
        entradas.append(form.cleaned_data)

    try:
        culto = services.fechar_culto(
            culto,
            entradas,
            observacoes=data.get("observacoes", ""),
            responsavel=request.user,
        )
    except ValidationError as e:
        return resposta_erro(e)

    return JsonResponse({"ok": True, "culto": serializar_culto(culto, com_entradas=True)})
