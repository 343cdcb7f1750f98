# cultos_app/services.py

import logging
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from caixa_app.models import FORMA_PAGAMENTO_CHOICES, Movimentacao
from caixa_app.services import criar_movimentacao, excluir_movimentacao, obter_caixa_geral

from .models import Culto, EntradaCulto, ModeloCulto

logger = logging.getLogger(__name__)

CATEGORIA_CAIXA_CULTO = "Culto"

ROTULOS_TIPO_ENTRADA = dict(EntradaCulto.TIPO_CHOICES)
FORMAS_PAGAMENTO = {valor for valor, _ in FORMA_PAGAMENTO_CHOICES}


def dia_semana(data):
    """Dia da semana com domingo = 0 ... sábado = 6."""
    return (data.weekday() + 1) % 7


# ============================================
# MODELOS DE CULTO
# ============================================

def listar_modelos():
    return ModeloCulto.objects.order_by("nome")


def listar_modelos_ativos():
    return ModeloCulto.objects.filter(ativo=True, recorrente=True).order_by("nome")


# ============================================
# CULTOS
# ============================================

def listar_cultos(inicio=None, fim=None, status=None):
    qs = Culto.objects.all()
    if inicio:
        qs = qs.filter(data__gte=inicio)
    if fim:
        qs = qs.filter(data__lte=fim)
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-data", "-horario")


def criar_culto(nome, tipo, data, horario, observacoes="", modelo=None, status="agendado"):
    return Culto.objects.create(
        nome=nome.strip(),
        tipo=tipo,
        data=data,
        horario=horario,
        observacoes=observacoes or "",
        modelo=modelo,
        status=status or "agendado",
        total_entradas=Decimal("0"),
    )


def excluir_culto(culto):
    if culto.entradas.exists():
        raise ValidationError("Este culto possui entradas registradas. Remova as entradas antes de excluir.")
    culto.delete()


def cultos_pendentes(hoje=None, limite=5):
    """Cultos agendados até hoje que ainda não foram fechados, do mais antigo ao mais recente."""
    hoje = hoje or timezone.localdate()
    return list(
        Culto.objects
        .filter(status="agendado", data__lte=hoje)
        .order_by("data", "horario")[:limite]
    )


def proximos_cultos(hoje=None, limite=5):
    hoje = hoje or timezone.localdate()
    return list(
        Culto.objects
        .filter(status="agendado", data__gte=hoje)
        .order_by("data", "horario")[:limite]
    )


@transaction.atomic
def gerar_cultos_semanais(semanas=None, agora=None):
    """
    Gera os cultos das próximas semanas a partir dos modelos ativos e recorrentes.

    - a janela vai de hoje até hoje + 7 * semanas
    - se o dia do modelo é hoje e o horário já chegou, começa na semana seguinte
    - não duplica cultos com a mesma data, horário e tipo

    Returns:
        lista com os cultos criados
    """
    semanas = semanas or settings.CULTOS_SEMANAS_PADRAO
    agora = agora or timezone.localtime()
    hoje = agora.date()

    modelos = list(listar_modelos_ativos())
    if not modelos:
        raise ValidationError("Nenhum modelo de culto ativo encontrado. Configure os cultos recorrentes primeiro.")

    fim = hoje + timedelta(days=7 * semanas)

    existentes = set(
        Culto.objects
        .filter(data__gte=hoje, data__lte=fim)
        .values_list("data", "horario", "tipo")
    )

    criados = []
    for modelo in modelos:
        if modelo.dia_semana is None or not 0 <= modelo.dia_semana <= 6:
            logger.info(f"Modelo '{modelo.nome}' sem dia da semana; ignorado na geração")
            continue

        dias_ate = modelo.dia_semana - dia_semana(hoje)
        if dias_ate < 0:
            dias_ate += 7
        if dias_ate == 0 and agora.hour >= modelo.horario.hour:
            dias_ate = 7

        data = hoje + timedelta(days=dias_ate)
        while data <= fim:
            chave = (data, modelo.horario, modelo.tipo)
            if chave not in existentes:
                criados.append(criar_culto(
                    nome=modelo.nome,
                    tipo=modelo.tipo,
                    data=data,
                    horario=modelo.horario,
                    observacoes=modelo.observacoes,
                    modelo=modelo,
                ))
                existentes.add(chave)
            data += timedelta(days=7)

    logger.info(f"{len(criados)} culto(s) gerado(s) para {semanas} semana(s)")
    return criados


# ============================================
# ENTRADAS (DÍZIMOS E OFERTAS)
# ============================================

def atualizar_total_culto(culto):
    total = culto.entradas.aggregate(total=Sum("valor"))["total"] or Decimal("0")
    Culto.objects.filter(pk=culto.pk).update(total_entradas=total)
    culto.total_entradas = total
    return total


def _validar_entrada(tipo, valor, forma_pagamento):
    if tipo not in ROTULOS_TIPO_ENTRADA:
        raise ValidationError(f"Tipo de entrada inválido: {tipo}")
    if forma_pagamento not in FORMAS_PAGAMENTO:
        raise ValidationError(f"Forma de pagamento inválida: {forma_pagamento}")
    if valor is None or valor <= 0:
        raise ValidationError("O valor deve ser maior que zero.")


@transaction.atomic
def registrar_entrada(culto, tipo, valor, forma_pagamento, observacoes="", responsavel=None, hoje=None):
    """
    Registra a entrada do culto, atualiza o total do culto e lança a entrada no caixa geral.
    """
    _validar_entrada(tipo, valor, forma_pagamento)

    entrada = EntradaCulto.objects.create(
        culto=culto,
        tipo=tipo,
        valor=valor,
        forma_pagamento=forma_pagamento,
        observacoes=observacoes or "",
    )
    atualizar_total_culto(culto)

    criar_movimentacao(
        caixa=obter_caixa_geral(),
        tipo="entrada",
        categoria=CATEGORIA_CAIXA_CULTO,
        descricao=f"{ROTULOS_TIPO_ENTRADA[tipo]} - {culto.nome}",
        valor=valor,
        data=hoje or timezone.localdate(),
        forma_pagamento=forma_pagamento,
        responsavel=responsavel,
        observacoes=observacoes or "",
        culto=culto,
        entrada_culto=entrada,
    )
    return entrada


@transaction.atomic
def remover_entrada(entrada):
    """
    Remove a entrada, estorna o lançamento no caixa e recalcula o total do culto.
    """
    culto = entrada.culto
    mov = Movimentacao.objects.filter(entrada_culto=entrada).first()
    if mov is not None:
        excluir_movimentacao(mov, vinculada=True)
    entrada.delete()
    atualizar_total_culto(culto)
    logger.info(f"Entrada removida do culto {culto.pk}")


# ============================================
# FECHAMENTO
# ============================================

def _valor_json(valor):
    return str(Decimal(valor).quantize(Decimal("0.01")))


def resumo_fechamento(entradas):
    """
    Totais de uma lista de entradas (dicts ou EntradaCulto) por forma de pagamento e por tipo.
    Entradas sem valor positivo são ignoradas.
    """
    total = Decimal("0")
    por_forma = {}
    por_tipo = {}

    for entrada in entradas:
        if isinstance(entrada, dict):
            tipo = entrada["tipo"]
            valor = entrada["valor"]
            forma = entrada["forma_pagamento"]
        else:
            tipo, valor, forma = entrada.tipo, entrada.valor, entrada.forma_pagamento

        if valor is None or valor <= 0:
            continue
        total += valor
        por_forma[forma] = por_forma.get(forma, Decimal("0")) + valor
        por_tipo[tipo] = por_tipo.get(tipo, Decimal("0")) + valor

    return {
        "total": total,
        "por_forma": por_forma,
        "por_tipo": por_tipo,
    }


@transaction.atomic
def fechar_culto(culto, entradas, observacoes="", responsavel=None, hoje=None):
    """
    Fecha o culto: registra as entradas (e seus lançamentos no caixa geral),
    marca como finalizado e grava os totais por forma de pagamento e por tipo.

    Params:
        entradas: lista de dicts com tipo, valor, forma_pagamento e observacoes
    """
    culto = Culto.objects.select_for_update().get(pk=culto.pk)
    if culto.status == "finalizado":
        raise ValidationError("Este culto já está finalizado.")

    validas = [e for e in entradas if e.get("valor") is not None and e["valor"] > 0]
    if not validas:
        raise ValidationError("Adicione pelo menos uma entrada com valor maior que zero.")

    for e in validas:
        registrar_entrada(
            culto,
            tipo=e["tipo"],
            valor=e["valor"],
            forma_pagamento=e["forma_pagamento"],
            observacoes=e.get("observacoes", ""),
            responsavel=responsavel,
            hoje=hoje,
        )

    # Os totais consideram todas as entradas do culto, inclusive as lançadas antes do fechamento
    resumo = resumo_fechamento(culto.entradas.all())

    culto.status = "finalizado"
    culto.observacoes = observacoes or culto.observacoes
    culto.total_entradas = resumo["total"]
    culto.totais_por_forma = {k: _valor_json(v) for k, v in resumo["por_forma"].items()}
    culto.totais_por_tipo = {k: _valor_json(v) for k, v in resumo["por_tipo"].items()}
    culto.save()

    logger.info(f"Culto {culto.pk} fechado com total {culto.total_entradas}")
    return culto
