from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from caixa_app.views import serializar_movimentacao
from core.decorators import papel_requerido
from core.utils import parse_data, resposta_erro, resposta_erros_form

from . import services
from .forms import (
    CategoriaContaForm,
    ContaPagarForm,
    FornecedorForm,
    GerarRecorrentesForm,
    PagamentoForm,
)
from .models import CategoriaConta, ContaPagar, Fornecedor


def serializar_conta(conta):
    return {
        "id": conta.id,
        "fornecedor_id": conta.fornecedor_id,
        "fornecedor": conta.nome_fornecedor,
        "descricao": conta.descricao,
        "valor": conta.valor,
        "vencimento": conta.vencimento,
        "data_pagamento": conta.data_pagamento,
        "recorrencia": conta.recorrencia,
        "categoria": conta.categoria,
        "centro_custo": conta.centro_custo,
        "evento_id": conta.evento_id,
        "forma_pagamento": conta.forma_pagamento or None,
        "status": conta.status,
        "observacoes": conta.observacoes,
    }


def serializar_categoria(categoria):
    return {
        "id": categoria.id,
        "nome": categoria.nome,
        "descricao": categoria.descricao,
        "ativa": categoria.ativa,
    }


def serializar_fornecedor(fornecedor):
    return {
        "id": fornecedor.id,
        "nome": fornecedor.nome,
        "contato": fornecedor.contato,
        "telefone": fornecedor.telefone,
        "email": fornecedor.email,
        "categoria": fornecedor.categoria,
        "observacoes": fornecedor.observacoes,
    }


# ============================================
# CONTAS
# ============================================

@login_required
@require_GET
def contas_listado(request):
    try:
        vencimento_de = parse_data(request.GET.get("de"))
        vencimento_ate = parse_data(request.GET.get("ate"))
    except ValueError as e:
        return resposta_erro(e)

    qs = services.listar_contas(
        status=request.GET.get("status") or None,
        categoria=request.GET.get("categoria") or None,
        fornecedor=request.GET.get("fornecedor") or None,
        busca=(request.GET.get("q") or "").strip() or None,
        vencimento_de=vencimento_de,
        vencimento_ate=vencimento_ate,
    )
    return JsonResponse({"ok": True, "contas": [serializar_conta(c) for c in qs]})


@login_required
@require_GET
def conta_detalhe(request, pk):
    conta = get_object_or_404(ContaPagar.objects.select_related("fornecedor"), pk=pk)
    data = serializar_conta(conta)
    data["pagamentos"] = [serializar_movimentacao(m) for m in conta.movimentacoes.select_related("caixa")]
    return JsonResponse({"ok": True, "conta": data})


@login_required
@papel_requerido("tesouraria")
@require_POST
def conta_criar(request):
    form = ContaPagarForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        conta = services.criar_conta(**form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "conta": serializar_conta(conta)}, status=201)


@login_required
@papel_requerido("tesouraria")
@require_POST
def conta_editar(request, pk):
    conta = get_object_or_404(ContaPagar, pk=pk)
    status_atual = conta.status
    centro_atual = conta.centro_custo
    form = ContaPagarForm(request.POST, instance=conta)
    if not form.is_valid():
        return resposta_erros_form(form)

    conta = form.instance
    conta.status = form.cleaned_data.get("status") or status_atual
    conta.centro_custo = form.cleaned_data.get("centro_custo") or centro_atual
    try:
        conta = services.atualizar_conta(conta)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "conta": serializar_conta(conta)})


@login_required
@papel_requerido("tesouraria")
@require_POST
def conta_excluir(request, pk):
    conta = get_object_or_404(ContaPagar, pk=pk)
    services.excluir_conta(conta)
    return JsonResponse({"ok": True})


@login_required
@papel_requerido("tesouraria")
@require_POST
def conta_pagar(request, pk):
    conta = get_object_or_404(ContaPagar, pk=pk)
    form = PagamentoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        conta, mov = services.pagar_conta(conta, responsavel=request.user, **form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({
        "ok": True,
        "conta": serializar_conta(conta),
        "movimentacao": serializar_movimentacao(mov),
    })


@login_required
@papel_requerido("tesouraria")
@require_POST
def conta_estornar(request, pk):
    conta = get_object_or_404(ContaPagar, pk=pk)
    try:
        conta = services.estornar_pagamento(conta)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "conta": serializar_conta(conta)})


@login_required
@papel_requerido("tesouraria")
@require_POST
def conta_cancelar(request, pk):
    conta = get_object_or_404(ContaPagar, pk=pk)
    try:
        conta = services.cancelar_conta(conta)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "conta": serializar_conta(conta)})


@login_required
@papel_requerido("tesouraria")
@require_POST
def conta_gerar_recorrentes(request, pk):
    conta = get_object_or_404(ContaPagar, pk=pk)
    form = GerarRecorrentesForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        criadas = services.gerar_contas_recorrentes(conta, quantidade=form.cleaned_data.get("quantidade"))
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "criadas": criadas})


@login_required
@require_GET
def calendario(request):
    hoje = timezone.localdate()
    try:
        ano = int(request.GET.get("ano") or hoje.year)
        mes = int(request.GET.get("mes") or hoje.month)
    except ValueError:
        return resposta_erro("Ano ou mês inválido.")
    if not 1 <= mes <= 12:
        return resposta_erro("Ano ou mês inválido.")

    cal = services.calendario_contas(ano, mes, categoria=request.GET.get("categoria") or None)
    dias = [
        {"data": dia, "contas": [serializar_conta(c) for c in contas]}
        for dia, contas in cal["por_dia"].items()
    ]
    return JsonResponse({
        "ok": True,
        "ano": ano,
        "mes": mes,
        "dias": dias,
        "total_mes": cal["total_mes"],
        "total_pendente": cal["total_pendente"],
    })


# ============================================
# CATEGORIAS
# ============================================

@login_required
@require_GET
def categorias_listado(request):
    incluir = request.GET.get("inativas") == "1"
    data = [serializar_categoria(c) for c in services.listar_categorias(incluir_inativas=incluir)]
    return JsonResponse({"ok": True, "categorias": data})


@login_required
@papel_requerido("tesouraria")
@require_POST
def categoria_criar(request):
    form = CategoriaContaForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    try:
        categoria = services.criar_categoria(**form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "categoria": serializar_categoria(categoria)}, status=201)


@login_required
@papel_requerido("tesouraria")
@require_POST
def categoria_editar(request, pk):
    categoria = get_object_or_404(CategoriaConta, pk=pk)
    form = CategoriaContaForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)

    ativa = None
    if "ativa" in request.POST:
        ativa = request.POST.get("ativa") in ("1", "true", "on")
    try:
        categoria = services.atualizar_categoria(categoria, ativa=ativa, **form.cleaned_data)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "categoria": serializar_categoria(categoria)})


@login_required
@papel_requerido("tesouraria")
@require_POST
def categoria_excluir(request, pk):
    categoria = get_object_or_404(CategoriaConta, pk=pk)
    resultado = services.excluir_categoria(categoria)
    return JsonResponse({"ok": True, "resultado": resultado})


# ============================================
# FORNECEDORES
# ============================================

@login_required
@require_GET
def fornecedores_listado(request):
    qs = services.listar_fornecedores(busca=(request.GET.get("q") or "").strip() or None)
    return JsonResponse({"ok": True, "fornecedores": [serializar_fornecedor(f) for f in qs]})


@login_required
@papel_requerido("tesouraria")
@require_POST
def fornecedor_criar(request):
    form = FornecedorForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)
    fornecedor = form.save()
    return JsonResponse({"ok": True, "fornecedor": serializar_fornecedor(fornecedor)}, status=201)


@login_required
@papel_requerido("tesouraria")
@require_POST
def fornecedor_editar(request, pk):
    fornecedor = get_object_or_404(Fornecedor, pk=pk)
    form = FornecedorForm(request.POST, instance=fornecedor)
    if not form.is_valid():
        return resposta_erros_form(form)
    fornecedor = form.save()
    return JsonResponse({"ok": True, "fornecedor": serializar_fornecedor(fornecedor)})


@login_required
@papel_requerido("tesouraria")
@require_POST
def fornecedor_excluir(request, pk):
    fornecedor = get_object_or_404(Fornecedor, pk=pk)
    fornecedor.delete()
    return JsonResponse({"ok": True})
