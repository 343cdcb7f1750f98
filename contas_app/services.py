# contas_app/services.py

import calendar
import logging
from datetime import date, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Max, Q, Sum
from django.utils import timezone

from caixa_app.services import criar_movimentacao, excluir_movimentacao, obter_caixa_geral

from .models import CategoriaConta, ContaPagar, Fornecedor

logger = logging.getLogger(__name__)

STATUS_EM_ABERTO = ("pendente", "atrasado")

CAMPOS_COPIADOS_NA_RECORRENCIA = (
    "fornecedor",
    "fornecedor_nome",
    "descricao",
    "valor",
    "recorrencia",
    "categoria",
    "centro_custo",
    "evento",
    "forma_pagamento",
    "observacoes",
)


# ============================================
# CONTAS A PAGAR
# ============================================

def marcar_contas_atrasadas(hoje=None):
    """
    Contas pendentes com vencimento anterior a hoje passam a "atrasado".
    """
    hoje = hoje or timezone.localdate()
    atualizadas = ContaPagar.objects.filter(status="pendente", vencimento__lt=hoje).update(status="atrasado")
    if atualizadas:
        logger.info(f"{atualizadas} conta(s) marcada(s) como atrasada(s)")
    return atualizadas


def listar_contas(status=None, categoria=None, fornecedor=None, busca=None,
                  vencimento_de=None, vencimento_ate=None, hoje=None):
    marcar_contas_atrasadas(hoje)

    qs = ContaPagar.objects.select_related("fornecedor", "evento")
    if status:
        qs = qs.filter(status=status)
    if categoria:
        qs = qs.filter(categoria=categoria)
    if fornecedor:
        qs = qs.filter(fornecedor=fornecedor)
    if busca:
        qs = qs.filter(
            Q(descricao__icontains=busca)
            | Q(fornecedor_nome__icontains=busca)
            | Q(fornecedor__nome__icontains=busca)
        )
    if vencimento_de:
        qs = qs.filter(vencimento__gte=vencimento_de)
    if vencimento_ate:
        qs = qs.filter(vencimento__lte=vencimento_ate)
    return qs.order_by("vencimento", "id")


def _validar_conta(conta):
    if conta.valor is None or conta.valor <= 0:
        raise ValidationError("O valor deve ser maior que zero.")
    if not (conta.descricao or "").strip():
        raise ValidationError("Informe a descrição.")
    if not (conta.categoria or "").strip():
        raise ValidationError("Informe a categoria.")
    if conta.centro_custo == "evento" and conta.evento_id is None:
        raise ValidationError("Contas do centro de custo evento precisam de um evento.")


def criar_conta(**campos):
    campos.setdefault("status", "pendente")
    campos.setdefault("centro_custo", "geral")
    campos["status"] = campos["status"] or "pendente"
    campos["centro_custo"] = campos["centro_custo"] or "geral"

    conta = ContaPagar(**campos)
    _validar_conta(conta)
    conta.save()
    logger.info(f"Conta criada: {conta.descricao} ({conta.vencimento})")
    return conta


def atualizar_conta(conta, **campos):
    for campo, valor in campos.items():
        setattr(conta, campo, valor)
    _validar_conta(conta)
    conta.save()
    return conta


def excluir_conta(conta):
    logger.info(f"Conta excluída: {conta.descricao} ({conta.vencimento})")
    conta.delete()


def proxima_ocorrencia(base, recorrencia, n):
    """
    n-ésima ocorrência após a data base. relativedelta ajusta para o último dia
    do mês quando o mês de destino é mais curto (31/01 + 1 mês = 28/02 ou 29/02).
    """
    if recorrencia == "semanal":
        return base + timedelta(weeks=n)
    if recorrencia == "mensal":
        return base + relativedelta(months=n)
    if recorrencia == "anual":
        return base + relativedelta(years=n)
    raise ValidationError(f"Recorrência inválida: {recorrencia}")


@transaction.atomic
def gerar_contas_recorrentes(conta, quantidade=None, hoje=None):
    """
    Gera as próximas ocorrências de uma conta recorrente.

    A série continua a partir do maior vencimento entre as contas com a mesma
    descrição, recorrência e categoria. Só gera vencimentos a partir de amanhã
    e não duplica vencimentos já existentes.

    Returns:
        quantidade de contas criadas
    """
    if not conta.recorrente:
        raise ValidationError("Conta não é recorrente.")

    quantidade = quantidade or settings.CONTAS_RECORRENTES_PADRAO
    hoje = hoje or timezone.localdate()
    amanha = hoje + timedelta(days=1)

    mesma_serie = ContaPagar.objects.filter(
        descricao=conta.descricao,
        recorrencia=conta.recorrencia,
        categoria=conta.categoria,
    )
    ultimo_vencimento = mesma_serie.aggregate(ultimo=Max("vencimento"))["ultimo"]
    base = max(conta.vencimento, ultimo_vencimento) if ultimo_vencimento else conta.vencimento

    criadas = 0
    for n in range(1, quantidade + 1):
        vencimento = proxima_ocorrencia(base, conta.recorrencia, n)
        if vencimento < amanha:
            continue

        ja_existe = ContaPagar.objects.filter(
            descricao=conta.descricao,
            vencimento=vencimento,
            recorrencia=conta.recorrencia,
        ).exists()
        if ja_existe:
            continue

        dados = {campo: getattr(conta, campo) for campo in CAMPOS_COPIADOS_NA_RECORRENCIA}
        ContaPagar.objects.create(
            vencimento=vencimento,
            status="pendente",
            data_pagamento=None,
            **dados,
        )
        criadas += 1

    logger.info(f"{criadas} conta(s) recorrente(s) gerada(s) a partir de '{conta.descricao}'")
    return criadas


def caixa_para_pagamento(conta):
    """
    Contas do centro de custo evento saem do caixa do evento, quando existe.
    As demais saem do caixa geral.
    """
    if conta.centro_custo == "evento" and conta.evento_id:
        caixa_evento = conta.evento.caixa_vinculado
        if caixa_evento is not None:
            return caixa_evento
    return obter_caixa_geral()


@transaction.atomic
def pagar_conta(conta, data_pagamento=None, forma_pagamento=None, responsavel=None):
    """
    Marca a conta como paga e lança a saída no caixa.

    Returns:
        tuple (conta, movimentacao)
    """
    if conta.status == "pago":
        raise ValidationError("Esta conta já está paga.")
    if conta.status == "cancelado":
        raise ValidationError("Não é possível pagar uma conta cancelada.")
    if not forma_pagamento:
        raise ValidationError("Informe a forma de pagamento.")

    data_pagamento = data_pagamento or timezone.localdate()

    conta.status = "pago"
    conta.data_pagamento = data_pagamento
    conta.forma_pagamento = forma_pagamento
    conta.save(update_fields=["status", "data_pagamento", "forma_pagamento", "atualizado_em"])

    mov = criar_movimentacao(
        caixa=caixa_para_pagamento(conta),
        tipo="saida",
        categoria=conta.categoria,
        descricao=f"Pagamento: {conta.descricao}",
        valor=conta.valor,
        data=data_pagamento,
        forma_pagamento=forma_pagamento,
        responsavel=responsavel,
        observacoes=f"Pagamento da despesa: {conta.descricao}",
        conta=conta,
    )
    logger.info(f"Conta {conta.pk} paga em {data_pagamento} ({forma_pagamento})")
    return conta, mov


@transaction.atomic
def estornar_pagamento(conta, hoje=None):
    """
    Desfaz o pagamento: exclui a saída lançada no caixa e a conta volta a pendente
    (ou atrasado, se já venceu).
    """
    if conta.status != "pago":
        raise ValidationError("Só é possível estornar uma conta paga.")

    hoje = hoje or timezone.localdate()
    for mov in conta.movimentacoes.all():
        excluir_movimentacao(mov, vinculada=True)

    conta.status = "atrasado" if conta.vencimento < hoje else "pendente"
    conta.data_pagamento = None
    conta.forma_pagamento = ""
    conta.save(update_fields=["status", "data_pagamento", "forma_pagamento", "atualizado_em"])
    logger.info(f"Pagamento da conta {conta.pk} estornado")
    return conta


def cancelar_conta(conta):
    if conta.status == "pago":
        raise ValidationError("Não é possível cancelar uma conta paga.")
    conta.status = "cancelado"
    conta.save(update_fields=["status", "atualizado_em"])
    return conta


def calendario_contas(ano, mes, categoria=None, hoje=None):
    """
    Contas com vencimento no mês, agrupadas por dia, com total do mês e total pendente.
    """
    marcar_contas_atrasadas(hoje)

    inicio = date(ano, mes, 1)
    fim = date(ano, mes, calendar.monthrange(ano, mes)[1])

    qs = ContaPagar.objects.filter(vencimento__gte=inicio, vencimento__lte=fim).select_related("fornecedor")
    if categoria:
        qs = qs.filter(categoria=categoria)
    qs = qs.order_by("vencimento", "id")

    por_dia = {}
    for conta in qs:
        por_dia.setdefault(conta.vencimento, []).append(conta)

    totais = qs.aggregate(
        total=Sum("valor"),
        pendente=Sum("valor", filter=Q(status__in=STATUS_EM_ABERTO)),
    )
    return {
        "inicio": inicio,
        "fim": fim,
        "por_dia": por_dia,
        "total_mes": totais.get("total") or Decimal("0"),
        "total_pendente": totais.get("pendente") or Decimal("0"),
    }


# ============================================
# CATEGORIAS
# ============================================

def listar_categorias(incluir_inativas=False):
    qs = CategoriaConta.objects.all()
    if not incluir_inativas:
        qs = qs.filter(ativa=True)
    return qs.order_by("nome")


def criar_categoria(nome, descricao=""):
    nome = (nome or "").strip()
    if not nome:
        raise ValidationError("Informe o nome da categoria.")
    if CategoriaConta.objects.filter(nome__iexact=nome).exists():
        raise ValidationError("Já existe uma categoria com este nome")
    return CategoriaConta.objects.create(nome=nome, descricao=(descricao or "").strip())


def atualizar_categoria(categoria, nome=None, descricao=None, ativa=None):
    if nome is not None:
        nome = nome.strip()
        if not nome:
            raise ValidationError("Informe o nome da categoria.")
        if CategoriaConta.objects.filter(nome__iexact=nome).exclude(pk=categoria.pk).exists():
            raise ValidationError("Já existe uma categoria com este nome")
        categoria.nome = nome
    if descricao is not None:
        categoria.descricao = descricao.strip()
    if ativa is not None:
        categoria.ativa = ativa
    categoria.save()
    return categoria


def excluir_categoria(categoria):
    """
    Categoria usada por alguma conta é desativada; sem uso, é excluída.
    Retorna "desativada" ou "excluida".
    """
    if ContaPagar.objects.filter(categoria=categoria.nome).exists():
        categoria.ativa = False
        categoria.save(update_fields=["ativa", "atualizado_em"])
        logger.info(f"Categoria '{categoria.nome}' em uso; desativada")
        return "desativada"

    categoria.delete()
    return "excluida"


# ============================================
# FORNECEDORES
# ============================================

def listar_fornecedores(busca=None):
    qs = Fornecedor.objects.all()
    if busca:
        qs = qs.filter(Q(nome__icontains=busca) | Q(contato__icontains=busca))
    return qs.order_by("nome")
