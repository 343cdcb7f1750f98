# eventos_app/services.py

import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q, Sum

from .models import Evento

logger = logging.getLogger(__name__)


def listar_eventos(status=None):
    qs = Evento.objects.select_related("caixa")
    if status:
        qs = qs.filter(status=status)
    return qs.order_by("-data_inicio", "-id")


def _validar_datas(data_inicio, data_fim):
    if data_fim and data_inicio and data_fim < data_inicio:
        raise ValidationError("A data de término não pode ser anterior à data de início.")


@transaction.atomic
def criar_evento(nome, data_inicio, data_fim=None, descricao="", status="planejado",
                 observacoes="", criar_caixa=True):
    """
    Cria o evento e, por padrão, o caixa próprio "Caixa - <nome>".
    """
    _validar_datas(data_inicio, data_fim)

    evento = Evento.objects.create(
        nome=nome.strip(),
        descricao=descricao or "",
        data_inicio=data_inicio,
        data_fim=data_fim,
        status=status or "planejado",
        observacoes=observacoes or "",
    )

    if criar_caixa:
        from caixa_app.services import criar_caixa as criar_caixa_evento
        criar_caixa_evento(f"Caixa - {evento.nome}", tipo="evento", evento=evento)

    logger.info(f"Evento criado: {evento.nome} (caixa={'sim' if criar_caixa else 'não'})")
    return evento


def atualizar_evento(evento, **campos):
    for campo, valor in campos.items():
        setattr(evento, campo, valor)
    _validar_datas(evento.data_inicio, evento.data_fim)
    evento.save()
    return evento


def atualizar_totais_evento(evento):
    """
    Recalcula total_entradas e total_saidas a partir das movimentações do caixa do evento.
    """
    caixa = evento.caixa_vinculado
    if caixa is None:
        entradas = saidas = Decimal("0")
    else:
        totais = caixa.movimentacoes.aggregate(
            entradas=Sum("valor", filter=Q(tipo="entrada")),
            saidas=Sum("valor", filter=Q(tipo="saida")),
        )
        entradas = totais.get("entradas") or Decimal("0")
        saidas = totais.get("saidas") or Decimal("0")

    Evento.objects.filter(pk=evento.pk).update(total_entradas=entradas, total_saidas=saidas)
    evento.total_entradas = entradas
    evento.total_saidas = saidas
    return evento


@transaction.atomic
def excluir_evento(evento):
    caixa = evento.caixa_vinculado
    if caixa is not None and caixa.movimentacoes.exists():
        raise ValidationError(
            "Este evento possui movimentações no caixa. Exclua as movimentações antes de excluir o evento."
        )
    logger.info(f"Evento excluído: {evento.nome}")
    # O caixa do evento é excluído em cascata
    evento.delete()
