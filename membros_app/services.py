# membros_app/services.py

import logging
import re

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from core.utils import parse_data

from .models import Membro

logger = logging.getLogger(__name__)

STATUS_VALIDOS = {valor for valor, _ in Membro.STATUS_CHOICES}


def separar_ministerios(texto):
    """ "Louvor; Jovens | Infantil" -> ["Louvor", "Jovens", "Infantil"] """
    if not texto:
        return []
    if isinstance(texto, (list, tuple)):
        return [str(m).strip() for m in texto if str(m).strip()]
    return [m.strip() for m in re.split(r"[;|]", str(texto)) if m.strip()]


def filtrar_membros(q=None, status=None, ministerio=None):
    qs = Membro.objects.all()
    if q:
        qs = qs.filter(
            Q(nome__icontains=q)
            | Q(email__icontains=q)
            | Q(telefone__icontains=q)
        )
    if status:
        qs = qs.filter(status=status)
    qs = qs.order_by("nome")

    if ministerio:
        # Lista em JSON: o filtro por ministério é feito em memória
        alvo = ministerio.strip().lower()
        return [m for m in qs if alvo in [x.lower() for x in (m.ministerios or [])]]
    return list(qs)


def resumo_membros():
    totais = {
        row["status"]: row["total"]
        for row in Membro.objects.values("status").annotate(total=Count("id")).order_by()
    }
    resumo = {status: totais.get(status, 0) for status in STATUS_VALIDOS}
    resumo["total"] = sum(totais.values())
    return resumo


# ============================================
# IMPORTAÇÃO
# ============================================

def pre_visualizar_importacao(linhas):
    """
    Classifica cada linha lida da planilha:
    - erro: sem nome, e-mail inválido ou data inválida (não será importada)
    - aviso: sem telefone (será importada)
    - valido
    """
    resultado = []
    for linha in linhas:
        erros = []
        avisos = []

        nome = (linha.get("nome") or "").strip()
        if not nome:
            erros.append("Nome é obrigatório")

        email = (linha.get("email") or "").strip().lower()
        if email:
            try:
                validate_email(email)
            except ValidationError:
                erros.append("E-mail inválido")

        data_nascimento = None
        try:
            data_nascimento = parse_data(linha.get("data_nascimento"))
        except ValueError:
            erros.append("Data de nascimento inválida")

        if not (linha.get("telefone") or "").strip():
            avisos.append("Telefone não informado")

        status = (linha.get("status") or "").strip().lower()
        if status not in STATUS_VALIDOS:
            status = "ativo"

        resultado.append({
            "linha": linha.get("linha"),
            "situacao": "erro" if erros else ("aviso" if avisos else "valido"),
            "erros": erros,
            "avisos": avisos,
            "dados": {
                "nome": nome,
                "email": email,
                "telefone": (linha.get("telefone") or "").strip(),
                "data_nascimento": data_nascimento,
                "endereco": (linha.get("endereco") or "").strip(),
                "status": status,
                "ministerios": separar_ministerios(linha.get("ministerios")),
            },
        })
    return resultado


@transaction.atomic
def importar_membros(linhas):
    """
    Importa as linhas sem erro. Retorna {"criados": n, "ignorados": n}.
    """
    hoje = timezone.localdate()
    criados = 0
    ignorados = 0

    for item in pre_visualizar_importacao(linhas):
        if item["situacao"] == "erro":
            ignorados += 1
            continue
        Membro.objects.create(data_entrada=hoje, **item["dados"])
        criados += 1

    logger.info(f"Importação de membros: {criados} criado(s), {ignorados} ignorado(s)")
    return {"criados": criados, "ignorados": ignorados}
