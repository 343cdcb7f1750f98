from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from core.decorators import papel_requerido
from core.utils import resposta_erro, resposta_erros_form

from . import services
from .forms import (
    CaixaEdicaoForm,
    CaixaForm,
    ClassificacaoEntradaForm,
    FiltroLivroForm,
    MovimentacaoEdicaoForm,
    MovimentacaoForm,
    TransferenciaForm,
)
from .models import Caixa, Movimentacao
from .pdf_reportlab import gerar_pdf_livro_caixa


def serializar_caixa(caixa):
    return {
        "id": caixa.id,
        "nome": caixa.nome,
        "tipo": caixa.tipo,
        "evento_id": caixa.evento_id,
        "saldo": caixa.saldo,
        "saldo_inicial": caixa.saldo_inicial,
        "criado_em": caixa.criado_em,
    }


def serializar_movimentacao(mov):
    return {
        "id": mov.id,
        "caixa_id": mov.caixa_id,
        "caixa": mov.caixa.nome,
        "tipo": mov.tipo,
        "categoria": mov.categoria,
        "descricao": mov.descricao,
        "valor": mov.valor,
        "forma_pagamento": mov.forma_pagamento,
        "data": mov.data,
        "culto_id": mov.culto_id,
        "conta_id": mov.conta_id,
        "transferencia_id": mov.transferencia_id,
        "responsavel_id": mov.responsavel_id,
        "responsavel": mov.responsavel_nome,
        "observacoes": mov.observacoes,
        "criado_em": mov.criado_em,
    }


# ============================================
# CAIXAS
# ============================================

@login_required
@require_GET
def caixas_listado(request):
    data = [serializar_caixa(c) for c in services.listar_caixas()]
    return JsonResponse({"ok": True, "caixas": data})


@login_required
@papel_requerido("tesouraria")
@require_POST
def caixa_criar(request):
    form = CaixaForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        caixa = services.criar_caixa(**form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "caixa": serializar_caixa(caixa)}, status=201)


@login_required
@papel_requerido("tesouraria")
@require_POST
def caixa_editar(request, pk):
    caixa = get_object_or_404(Caixa, pk=pk)
    form = CaixaEdicaoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)

    campos = {k: v for k, v in form.cleaned_data.items() if k in request.POST}
    try:
        caixa = services.atualizar_caixa(caixa, **campos)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "caixa": serializar_caixa(caixa)})


@login_required
@papel_requerido("tesouraria")
@require_POST
def caixa_recalcular(request, pk):
    caixa = get_object_or_404(Caixa, pk=pk)
    anterior, novo = services.recalcular_saldo(caixa)
    return JsonResponse({"ok": True, "saldo_anterior": anterior, "saldo": novo})


# ============================================
# MOVIMENTAÇÕES
# ============================================

@login_required
@require_GET
def movimentacoes_listado(request):
    form = FiltroLivroForm(request.GET)
    if not form.is_valid():
        return resposta_erros_form(form)

    filtros = form.cleaned_data
    qs = services.listar_movimentacoes(
        caixa=filtros.get("caixa"),
        inicio=filtros.get("inicio"),
        fim=filtros.get("fim"),
        tipo=filtros.get("tipo") or None,
    )
    data = [serializar_movimentacao(m) for m in qs]
    return JsonResponse({"ok": True, "movimentacoes": data})


@login_required
@papel_requerido("tesouraria")
@require_POST
def movimentacao_criar(request):
    form = MovimentacaoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        mov = services.criar_movimentacao(responsavel=request.user, **form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "movimentacao": serializar_movimentacao(mov)}, status=201)


@login_required
@require_GET
def movimentacao_detalhe(request, pk):
    mov = get_object_or_404(Movimentacao.objects.select_related("caixa"), pk=pk)
    return JsonResponse({"ok": True, "movimentacao": serializar_movimentacao(mov)})


@login_required
@papel_requerido("tesouraria")
@require_POST
def movimentacao_editar(request, pk):
    mov = get_object_or_404(Movimentacao, pk=pk)
    form = MovimentacaoEdicaoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)

    campos = {k: v for k, v in form.cleaned_data.items() if k in request.POST}
    try:
        mov = services.atualizar_movimentacao(mov, **campos)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "movimentacao": serializar_movimentacao(mov)})


@login_required
@papel_requerido("tesouraria")
@require_POST
def movimentacao_excluir(request, pk):
    mov = get_object_or_404(Movimentacao, pk=pk)
    try:
        excluidas = services.excluir_movimentacao(mov)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "excluidas": excluidas})


# ============================================
# TRANSFERÊNCIAS
# ============================================

@login_required
@require_GET
def transferencias_listado(request):
    data = []
    for saida in services.listar_transferencias():
        entrada = (
            Movimentacao.objects
            .filter(transferencia_id=saida.transferencia_id, tipo="entrada")
            .select_related("caixa")
            .first()
        )
        data.append({
            "transferencia_id": saida.transferencia_id,
            "data": saida.data,
            "valor": saida.valor,
            "descricao": saida.descricao,
            "origem": saida.caixa.nome,
            "destino": entrada.caixa.nome if entrada else None,
            "responsavel": saida.responsavel_nome,
        })
    return JsonResponse({"ok": True, "transferencias": data})


@login_required
@papel_requerido("tesouraria")
@require_POST
def transferencia_criar(request):
    form = TransferenciaForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        saida, entrada = services.transferir(responsavel=request.user, **form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({
        "ok": True,
        "saida": serializar_movimentacao(saida),
        "entrada": serializar_movimentacao(entrada),
    }, status=201)


# ============================================
# LIVRO CAIXA
# ============================================

def _livro_do_request(request):
    form = FiltroLivroForm(request.GET)
    if not form.is_valid():
        return form, None
    filtros = form.cleaned_data
    livro = services.livro_caixa(
        caixa=filtros.get("caixa"),
        inicio=filtros.get("inicio"),
        fim=filtros.get("fim"),
        tipo=filtros.get("tipo") or None,
    )
    return form, livro


@login_required
@require_GET
def livro(request):
    form, livro_caixa = _livro_do_request(request)
    if livro_caixa is None:
        return resposta_erros_form(form)

    linhas = []
    for linha in livro_caixa["linhas"]:
        item = serializar_movimentacao(linha["movimentacao"])
        item["saldo_acumulado"] = linha["saldo"]
        linhas.append(item)

    return JsonResponse({
        "ok": True,
        "linhas": linhas,
        "saldo_anterior": livro_caixa["saldo_anterior"],
        "total_entradas": livro_caixa["total_entradas"],
        "total_saidas": livro_caixa["total_saidas"],
        "resultado": livro_caixa["resultado"],
        "saldo_final": livro_caixa["saldo_final"],
    })


@login_required
@require_GET
def livro_pdf(request):
    form, livro_caixa = _livro_do_request(request)
    if livro_caixa is None:
        return resposta_erros_form(form)

    filtros = dict(form.cleaned_data)
    if filtros.get("caixa"):
        filtros["caixa"] = filtros["caixa"].nome

    pdf = gerar_pdf_livro_caixa(livro_caixa, titulo="Livro caixa", filtros=filtros)
    response = HttpResponse(pdf, content_type="application/pdf")
    response["Content-Disposition"] = 'inline; filename="livro_caixa.pdf"'
    return response


# ============================================
# ENTRADAS NÃO IDENTIFICADAS
# ============================================

@login_required
@require_GET
def alertas_entradas(request):
    data = []
    for alerta in services.entradas_nao_identificadas():
        item = serializar_movimentacao(alerta["movimentacao"])
        item["motivo"] = alerta["motivo"]
        data.append(item)
    return JsonResponse({"ok": True, "alertas": data})


@login_required
@papel_requerido("tesouraria")
@require_POST
def entrada_classificar(request, pk):
    mov = get_object_or_404(Movimentacao, pk=pk)
    form = ClassificacaoEntradaForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)

    observacoes = form.cleaned_data["observacoes"] if "observacoes" in request.POST else None
    try:
        mov = services.classificar_entrada(
            mov,
            form.cleaned_data["categoria"],
            form.cleaned_data["descricao"],
            observacoes,
        )
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "movimentacao": serializar_movimentacao(mov)})
