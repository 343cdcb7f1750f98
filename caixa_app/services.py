# caixa_app/services.py

import logging
import uuid
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, Q, Sum
from django.utils import timezone

from core.services import nome_exibicao, usuario_sistema

from .models import FORMA_PAGAMENTO_CHOICES, Caixa, Movimentacao

logger = logging.getLogger(__name__)

NOME_CAIXA_GERAL = "Caixa Geral"
CATEGORIA_TRANSFERENCIA = "Transferência"

CAMPOS_EDITAVEIS = {"categoria", "descricao", "valor", "forma_pagamento", "data", "observacoes"}

FORMAS_PAGAMENTO = {valor for valor, _ in FORMA_PAGAMENTO_CHOICES}
TIPOS_MOVIMENTACAO = {valor for valor, _ in Movimentacao.TIPO_CHOICES}

CATEGORIAS_GENERICAS = ["culto", "outros", "outras", "outra"]
DESCRICOES_VAGAS = ["entrada", "recebimento", "depósito", "recebido", "valor recebido"]
DESCRICAO_TAMANHO_MINIMO = 10


# ============================================
# CAIXAS
# ============================================

def obter_caixa_geral():
    """
    Retorna o caixa geral, criando "Caixa Geral" com saldo zero se ainda não existir.
    """
    caixa = Caixa.objects.filter(tipo="geral").order_by("id").first()
    if caixa is None:
        caixa = Caixa.objects.create(nome=NOME_CAIXA_GERAL, tipo="geral", saldo=0, saldo_inicial=0)
        logger.info(f"Caixa geral criado automaticamente (id={caixa.id})")
    return caixa


def listar_caixas():
    obter_caixa_geral()
    return Caixa.objects.select_related("evento").all()


def criar_caixa(nome, tipo="geral", saldo_inicial=Decimal("0"), evento=None):
    if not (nome or "").strip():
        raise ValidationError("Informe o nome do caixa.")
    if tipo == "evento" and evento is None:
        raise ValidationError("Caixa de evento precisa de um evento.")

    saldo_inicial = saldo_inicial or Decimal("0")
    caixa = Caixa.objects.create(
        nome=nome.strip(),
        tipo=tipo,
        evento=evento,
        saldo_inicial=saldo_inicial,
        saldo=saldo_inicial,
    )
    logger.info(f"Caixa criado: {caixa.nome} ({caixa.tipo})")
    return caixa


@transaction.atomic
def atualizar_caixa(caixa, nome=None, saldo_inicial=None):
    """
    Alterar o saldo inicial desloca o saldo atual pela mesma diferença.
    """
    if nome is not None:
        if not nome.strip():
            raise ValidationError("Informe o nome do caixa.")
        caixa.nome = nome.strip()

    if saldo_inicial is not None and saldo_inicial != caixa.saldo_inicial:
        diferenca = saldo_inicial - caixa.saldo_inicial
        caixa.saldo_inicial = saldo_inicial
        caixa.save(update_fields=["nome", "saldo_inicial", "atualizado_em"])
        _ajustar_saldo(caixa, diferenca)
    else:
        caixa.save(update_fields=["nome", "atualizado_em"])

    caixa.refresh_from_db()
    return caixa


def _ajustar_saldo(caixa, delta):
    if not delta:
        return
    Caixa.objects.filter(pk=caixa.pk).update(saldo=F("saldo") + delta)
    logger.debug(f"Saldo do caixa {caixa.pk} ajustado em {delta}")


def _atualizar_evento_do_caixa(caixa_id):
    caixa = Caixa.objects.filter(pk=caixa_id).only("evento").first()
    if caixa is None or caixa.evento_id is None:
        return
    from eventos_app.services import atualizar_totais_evento
    atualizar_totais_evento(caixa.evento)


def recalcular_saldo(caixa):
    """
    Recalcula o saldo a partir das movimentações. Retorna (anterior, novo).
    """
    totais = caixa.movimentacoes.aggregate(
        entradas=Sum("valor", filter=Q(tipo="entrada")),
        saidas=Sum("valor", filter=Q(tipo="saida")),
    )
    entradas = totais.get("entradas") or Decimal("0")
    saidas = totais.get("saidas") or Decimal("0")

    anterior = caixa.saldo
    novo = caixa.saldo_inicial + entradas - saidas
    if anterior != novo:
        Caixa.objects.filter(pk=caixa.pk).update(saldo=novo)
        logger.warning(f"Saldo do caixa {caixa.nome} corrigido de {anterior} para {novo}")
    caixa.saldo = novo
    return anterior, novo


# ============================================
# MOVIMENTAÇÕES
# ============================================

def listar_movimentacoes(caixa=None, inicio=None, fim=None, tipo=None):
    qs = Movimentacao.objects.select_related("caixa", "culto", "conta")
    if caixa is not None:
        qs = qs.filter(caixa=caixa)
    if inicio:
        qs = qs.filter(data__gte=inicio)
    if fim:
        qs = qs.filter(data__lte=fim)
    if tipo:
        qs = qs.filter(tipo=tipo)
    return qs.order_by("-data", "-criado_em", "-id")


def _validar_dados(tipo, descricao, valor, forma_pagamento, categoria):
    if tipo not in TIPOS_MOVIMENTACAO:
        raise ValidationError(f"Tipo de movimentação inválido: {tipo}")
    if forma_pagamento not in FORMAS_PAGAMENTO:
        raise ValidationError(f"Forma de pagamento inválida: {forma_pagamento}")
    if valor is None or valor <= 0:
        raise ValidationError("O valor deve ser maior que zero.")
    if not (descricao or "").strip():
        raise ValidationError("Informe a descrição.")
    if not (categoria or "").strip():
        raise ValidationError("Informe a categoria.")


@transaction.atomic
def criar_movimentacao(
    caixa,
    tipo,
    categoria,
    descricao,
    valor,
    data=None,
    forma_pagamento="dinheiro",
    responsavel=None,
    observacoes="",
    culto=None,
    conta=None,
    entrada_culto=None,
    transferencia_id=None,
):
    """
    Registra a movimentação e atualiza o saldo do caixa.

    entrada soma, saida subtrai, transferencia (lançamento manual) não altera o saldo.
    Sem responsável, o lançamento fica em nome do usuário do sistema.

    Raises:
        ValidationError se os dados forem inválidos
    """
    _validar_dados(tipo, descricao, valor, forma_pagamento, categoria)

    if responsavel is None:
        responsavel = usuario_sistema()

    mov = Movimentacao.objects.create(
        caixa=caixa,
        tipo=tipo,
        categoria=categoria.strip(),
        descricao=descricao.strip(),
        valor=valor,
        forma_pagamento=forma_pagamento,
        data=data or timezone.localdate(),
        culto=culto,
        conta=conta,
        entrada_culto=entrada_culto,
        transferencia_id=transferencia_id,
        responsavel=responsavel,
        responsavel_nome=nome_exibicao(responsavel),
        observacoes=observacoes or "",
    )

    _ajustar_saldo(caixa, valor * mov.efeito_no_saldo)
    _atualizar_evento_do_caixa(caixa.pk)
    caixa.refresh_from_db(fields=["saldo"])
    return mov


@transaction.atomic
def atualizar_movimentacao(mov, **campos):
    """
    Atualiza os campos editáveis. Se o valor mudar, o saldo anda pela diferença.
    """
    invalidos = set(campos) - CAMPOS_EDITAVEIS
    if invalidos:
        raise ValidationError(f"Campos não editáveis: {', '.join(sorted(invalidos))}")

    if "valor" in campos and mov.transferencia_id and campos["valor"] != mov.valor:
        raise ValidationError("O valor de uma transferência não pode ser alterado. Exclua e refaça a transferência.")
    if "valor" in campos and campos["valor"] != mov.valor:
        _validar_sem_vinculo(mov)

    valor_antigo = mov.valor
    for campo, valor in campos.items():
        setattr(mov, campo, valor)

    _validar_dados(mov.tipo, mov.descricao, mov.valor, mov.forma_pagamento, mov.categoria)
    mov.save()

    diferenca = mov.valor - valor_antigo
    if diferenca:
        _ajustar_saldo(mov.caixa, diferenca * mov.efeito_no_saldo)
        _atualizar_evento_do_caixa(mov.caixa_id)
    return mov


def _validar_sem_vinculo(mov):
    if mov.entrada_culto_id:
        raise ValidationError(
            "Esta movimentação foi gerada por uma entrada de culto. Remova a entrada no culto."
        )
    if mov.conta_id:
        raise ValidationError(
            "Esta movimentação é o pagamento de uma conta. Estorne o pagamento na conta."
        )


@transaction.atomic
def excluir_movimentacao(mov, vinculada=False):
    """
    Exclui e reverte o efeito no saldo. Excluir uma perna de transferência exclui as duas.

    Lançamentos de entrada de culto ou de pagamento de conta só são excluídos
    pela origem (vinculada=True).
    """
    if not vinculada:
        _validar_sem_vinculo(mov)

    if mov.transferencia_id:
        movimentos = list(Movimentacao.objects.filter(transferencia_id=mov.transferencia_id))
    else:
        movimentos = [mov]

    for m in movimentos:
        _ajustar_saldo(m.caixa, -m.valor * m.efeito_no_saldo)
        caixa_id = m.caixa_id
        m.delete()
        _atualizar_evento_do_caixa(caixa_id)

    logger.info(f"{len(movimentos)} movimentação(ões) excluída(s)")
    return len(movimentos)


@transaction.atomic
def transferir(origem, destino, valor, descricao="", data=None, responsavel=None, observacoes=""):
    """
    Transfere valor entre dois caixas: saída na origem e entrada no destino,
    ligadas pelo mesmo transferencia_id.

    Returns:
        tuple (saida, entrada)
    """
    if origem.pk == destino.pk:
        raise ValidationError("Não é possível transferir para o mesmo caixa.")
    if valor is None or valor <= 0:
        raise ValidationError("O valor deve ser maior que zero.")

    origem.refresh_from_db(fields=["saldo"])
    if origem.saldo < valor:
        raise ValidationError(
            f"O caixa '{origem.nome}' não tem saldo suficiente. "
            f"Saldo atual: {origem.saldo:.2f}, valor solicitado: {valor:.2f}"
        )

    vinculo = uuid.uuid4()
    descricao = (descricao or "").strip()

    saida = criar_movimentacao(
        caixa=origem,
        tipo="saida",
        categoria=CATEGORIA_TRANSFERENCIA,
        descricao=descricao or f"Transferência para {destino.nome}",
        valor=valor,
        data=data,
        forma_pagamento="transferencia",
        responsavel=responsavel,
        observacoes=observacoes,
        transferencia_id=vinculo,
    )
    entrada = criar_movimentacao(
        caixa=destino,
        tipo="entrada",
        categoria=CATEGORIA_TRANSFERENCIA,
        descricao=descricao or f"Transferência de {origem.nome}",
        valor=valor,
        data=data,
        forma_pagamento="transferencia",
        responsavel=responsavel,
        observacoes=observacoes,
        transferencia_id=vinculo,
    )

    logger.info(f"Transferência {vinculo}: {valor} de {origem.nome} para {destino.nome}")
    return saida, entrada


def listar_transferencias():
    """Pernas de saída das transferências, mais recentes primeiro."""
    return (
        Movimentacao.objects
        .filter(transferencia_id__isnull=False, tipo="saida")
        .select_related("caixa")
        .order_by("-data", "-criado_em")
    )


# ============================================
# LIVRO CAIXA
# ============================================

def _saldo_ate(caixa, data_limite):
    """Saldo do caixa antes de data_limite (exclusivo)."""
    totais = caixa.movimentacoes.filter(data__lt=data_limite).aggregate(
        entradas=Sum("valor", filter=Q(tipo="entrada")),
        saidas=Sum("valor", filter=Q(tipo="saida")),
    )
    return (
        caixa.saldo_inicial
        + (totais.get("entradas") or Decimal("0"))
        - (totais.get("saidas") or Decimal("0"))
    )


def livro_caixa(caixa=None, inicio=None, fim=None, tipo=None):
    """
    Livro caixa em ordem cronológica com saldo acumulado por caixa.

    O filtro de tipo só limita as linhas exibidas; o saldo acumulado
    sempre considera todas as movimentações do período.
    """
    caixas = [caixa] if caixa is not None else list(listar_caixas())

    saldos = {}
    for c in caixas:
        saldos[c.pk] = _saldo_ate(c, inicio) if inicio else c.saldo_inicial
    saldo_anterior = sum(saldos.values(), Decimal("0"))

    qs = Movimentacao.objects.filter(caixa__in=caixas).select_related("caixa")
    if inicio:
        qs = qs.filter(data__gte=inicio)
    if fim:
        qs = qs.filter(data__lte=fim)

    linhas = []
    total_entradas = Decimal("0")
    total_saidas = Decimal("0")

    for mov in qs.order_by("data", "criado_em", "id"):
        saldos[mov.caixa_id] += mov.valor * mov.efeito_no_saldo
        if tipo and mov.tipo != tipo:
            continue
        if mov.tipo == "entrada":
            total_entradas += mov.valor
        elif mov.tipo == "saida":
            total_saidas += mov.valor
        linhas.append({"movimentacao": mov, "saldo": saldos[mov.caixa_id]})

    return {
        "linhas": linhas,
        "saldo_anterior": saldo_anterior,
        "total_entradas": total_entradas,
        "total_saidas": total_saidas,
        "resultado": total_entradas - total_saidas,
        "saldo_final": sum(saldos.values(), Decimal("0")),
    }


# ============================================
# ENTRADAS NÃO IDENTIFICADAS
# ============================================

def motivo_nao_identificada(mov):
    """
    Motivo pelo qual a entrada precisa de classificação, ou None.
    """
    categoria = (mov.categoria or "").lower()
    descricao = (mov.descricao or "").strip().lower()

    if any(generica in categoria for generica in CATEGORIAS_GENERICAS):
        return "Categoria genérica"
    if not descricao:
        return "Sem descrição"
    if any(vaga in descricao for vaga in DESCRICOES_VAGAS):
        return "Descrição vaga"
    if len(descricao) < DESCRICAO_TAMANHO_MINIMO:
        return "Descrição muito curta"
    return None


def entradas_nao_identificadas(hoje=None, dias=None, limite=5):
    """
    Entradas recentes do caixa geral com categoria genérica ou descrição vaga.
    Lançamentos gerados por entradas de culto já estão identificados e ficam de fora.
    """
    hoje = hoje or timezone.localdate()
    dias = dias if dias is not None else settings.ALERTA_ENTRADAS_DIAS

    qs = listar_movimentacoes(
        caixa=obter_caixa_geral(),
        inicio=hoje - timedelta(days=dias),
        fim=hoje,
        tipo="entrada",
    ).filter(entrada_culto__isnull=True, transferencia_id__isnull=True)

    alertas = []
    for mov in qs:
        motivo = motivo_nao_identificada(mov)
        if motivo:
            alertas.append({"movimentacao": mov, "motivo": motivo})
            if len(alertas) >= limite:
                break
    return alertas


def classificar_entrada(mov, categoria, descricao, observacoes=None):
    if mov.tipo != "entrada":
        raise ValidationError("Só entradas podem ser classificadas.")
    campos = {"categoria": categoria, "descricao": descricao}
    if observacoes is not None:
        campos["observacoes"] = observacoes
    return atualizar_movimentacao(mov, **campos)
