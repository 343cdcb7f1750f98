from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from caixa_app.services import entradas_nao_identificadas
from caixa_app.views import serializar_movimentacao
from contas_app.views import serializar_conta
from cultos_app.services import cultos_pendentes, proximos_cultos
from cultos_app.views import serializar_culto

from . import services


# ============================================
# PAINEL
# ============================================

@login_required
@require_GET
def painel(request):
    alertas = []
    for alerta in entradas_nao_identificadas():
        item = serializar_movimentacao(alerta["movimentacao"])
        item["motivo"] = alerta["motivo"]
        alertas.append(item)

    return JsonResponse({
        "ok": True,
        "resumo": services.resumo(),
        "receitas_por_tipo": services.receitas_por_tipo(),
        "movimentacoes_recentes": [serializar_movimentacao(m) for m in services.movimentacoes_recentes()],
        "proximas_contas": [serializar_conta(c) for c in services.proximas_contas()],
        "proximos_cultos": [serializar_culto(c) for c in proximos_cultos()],
        "cultos_pendentes": [serializar_culto(c) for c in cultos_pendentes()],
        "alertas_entradas": alertas,
    })


@login_required
@require_GET
def grafico(request):
    try:
        meses = int(request.GET.get("meses") or 6)
    except ValueError:
        meses = 6
    meses = max(1, min(meses, 24))
    return JsonResponse({"ok": True, "meses": services.grafico_mensal(meses=meses)})
