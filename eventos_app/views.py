from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from core.decorators import papel_requerido
from core.utils import resposta_erro, resposta_erros_form

from . import services
from .forms import EventoForm
from .models import Evento


def serializar_evento(evento):
    caixa = evento.caixa_vinculado
    return {
        "id": evento.id,
        "nome": evento.nome,
        "descricao": evento.descricao,
        "data_inicio": evento.data_inicio,
        "data_fim": evento.data_fim,
        "status": evento.status,
        "caixa_id": caixa.id if caixa else None,
        "saldo_caixa": caixa.saldo if caixa else None,
        "total_entradas": evento.total_entradas,
        "total_saidas": evento.total_saidas,
        "resultado": evento.resultado,
        "observacoes": evento.observacoes,
        "criado_em": evento.criado_em,
    }


@login_required
@require_GET
def eventos_listado(request):
    status = request.GET.get("status") or None
    data = [serializar_evento(e) for e in services.listar_eventos(status=status)]
    return JsonResponse({"ok": True, "eventos": data})


@login_required
@require_GET
def evento_detalhe(request, pk):
    evento = get_object_or_404(Evento, pk=pk)
    return JsonResponse({"ok": True, "evento": serializar_evento(evento)})


@login_required
@papel_requerido("tesouraria", "secretaria")
@require_POST
def evento_criar(request):
    form = EventoForm(request.POST)
    if not form.is_valid():
        return resposta_erros_form(form)

    dados = dict(form.cleaned_data)
    # Sem o campo no POST, o evento ganha caixa próprio
    if "criar_caixa" not in request.POST:
        dados["criar_caixa"] = True
    try:
        evento = services.criar_evento(**dados)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "evento": serializar_evento(evento)}, status=201)


@login_required
@papel_requerido("tesouraria", "secretaria")
@require_POST
def evento_editar(request, pk):
    evento = get_object_or_404(Evento, pk=pk)
    form = EventoForm(request.POST, instance=evento)
    if not form.is_valid():
        return resposta_erros_form(form)

    if not form.cleaned_data.get("status"):
        form.instance.status = Evento.objects.values_list("status", flat=True).get(pk=pk)
    try:
        evento = services.atualizar_evento(form.instance)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True, "evento": serializar_evento(evento)})


@login_required
@papel_requerido("tesouraria", "secretaria")
@require_POST
def evento_excluir(request, pk):
    evento = get_object_or_404(Evento, pk=pk)
    try:
        services.excluir_evento(evento)
    except ValidationError as e:
        return resposta_erro(e)
    return JsonResponse({"ok": True})
