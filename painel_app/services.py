# painel_app/services.py

import calendar
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.db.models import Count, Q, Sum
from django.utils import timezone

from caixa_app.models import Movimentacao
from caixa_app.services import listar_movimentacoes, obter_caixa_geral
from contas_app.models import ContaPagar
from contas_app.services import STATUS_EM_ABERTO
from core.utils import mes_abreviado
from cultos_app.models import EntradaCulto


def limites_do_mes(ref):
    inicio = ref.replace(day=1)
    fim = date(ref.year, ref.month, calendar.monthrange(ref.year, ref.month)[1])
    return inicio, fim


def _entradas_saidas(caixa, inicio, fim):
    totais = Movimentacao.objects.filter(caixa=caixa, data__gte=inicio, data__lte=fim).aggregate(
        entradas=Sum("valor", filter=Q(tipo="entrada")),
        saidas=Sum("valor", filter=Q(tipo="saida")),
    )
    return totais.get("entradas") or Decimal("0"), totais.get("saidas") or Decimal("0")


def resumo(hoje=None):
    """
    Cartões do painel: saldo do caixa geral, receitas e despesas do mês,
    contas a vencer no mês e contas vencidas do mês.
    """
    hoje = hoje or timezone.localdate()
    inicio, fim = limites_do_mes(hoje)
    caixa = obter_caixa_geral()

    receitas, despesas = _entradas_saidas(caixa, inicio, fim)

    contas_mes = ContaPagar.objects.filter(vencimento__gte=inicio, vencimento__lte=fim)
    a_vencer = contas_mes.filter(status__in=STATUS_EM_ABERTO, vencimento__gte=hoje).aggregate(
        quantidade=Count("id"), total=Sum("valor"),
    )
    vencidas = contas_mes.filter(
        Q(status="atrasado") | Q(status="pendente", vencimento__lt=hoje)
    ).aggregate(quantidade=Count("id"), total=Sum("valor"))

    return {
        "saldo_geral": caixa.saldo,
        "receitas_mes": receitas,
        "despesas_mes": despesas,
        "resultado_mes": receitas - despesas,
        "contas_a_vencer": {
            "quantidade": a_vencer["quantidade"],
            "total": a_vencer["total"] or Decimal("0"),
        },
        "contas_vencidas": {
            "quantidade": vencidas["quantidade"],
            "total": vencidas["total"] or Decimal("0"),
        },
    }


def grafico_mensal(hoje=None, meses=6):
    """Entradas e gastos do caixa geral nos últimos meses, do mais antigo ao atual."""
    hoje = hoje or timezone.localdate()
    caixa = obter_caixa_geral()

    pontos = []
    for i in range(meses - 1, -1, -1):
        ref = hoje.replace(day=1) - relativedelta(months=i)
        inicio, fim = limites_do_mes(ref)
        entradas, gastos = _entradas_saidas(caixa, inicio, fim)
        pontos.append({
            "mes": mes_abreviado(ref.month),
            "ano": ref.year,
            "entradas": entradas,
            "gastos": gastos,
        })
    return pontos


def receitas_por_tipo(hoje=None):
    """
    Entradas dos cultos do mês agrupadas por tipo (dízimo, oferta...), maior primeiro.
    """
    hoje = hoje or timezone.localdate()
    inicio, fim = limites_do_mes(hoje)
    rotulos = dict(EntradaCulto.TIPO_CHOICES)

    linhas = (
        EntradaCulto.objects
        .filter(culto__data__gte=inicio, culto__data__lte=fim)
        .values("tipo")
        .annotate(total=Sum("valor"))
        .order_by()
    )
    dados = [
        {"tipo": row["tipo"], "rotulo": rotulos.get(row["tipo"], row["tipo"]), "total": row["total"]}
        for row in linhas
    ]
    return sorted(dados, key=lambda d: d["total"], reverse=True)


def movimentacoes_recentes(limite=5):
    return list(listar_movimentacoes()[:limite])


def proximas_contas(limite=5):
    return list(
        ContaPagar.objects
        .filter(status__in=STATUS_EM_ABERTO)
        .select_related("fornecedor")
        .order_by("vencimento", "id")[:limite]
    )
