import json
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.http import JsonResponse


MESES_ABREVIADOS = [
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
]

FORMATOS_DATA = ("%Y-%m-%d", "%d/%m/%Y")

# "1.234" e "1.234.567": pontos como separador de milhar
SOMENTE_MILHAR = re.compile(r"^-?[1-9]\d{0,2}(\.\d{3})+$")


# ============================================
# FORMATAÇÃO
# ============================================

def formatar_moeda(valor):
    """
    Formata um valor no padrão brasileiro: R$ 1.234,56
    """
    valor = Decimal(valor or 0).quantize(Decimal("0.01"))
    sinal = "-" if valor < 0 else ""
    inteiro, centavos = f"{abs(valor):.2f}".split(".")
    inteiro = f"{int(inteiro):,}".replace(",", ".")
    return f"{sinal}R$ {inteiro},{centavos}"


def formatar_data(valor):
    if not valor:
        return ""
    return valor.strftime("%d/%m/%Y")


def mes_abreviado(mes):
    return MESES_ABREVIADOS[mes - 1]


# ============================================
# CONVERSÃO DE ENTRADA
# ============================================

def parse_data(valor):
    """
    Converte 'aaaa-mm-dd' ou 'dd/mm/aaaa' em date.
    Retorna None para valor vazio e lança ValueError para formato inválido.
    """
    if valor in (None, ""):
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor

    texto = str(valor).strip()
    for formato in FORMATOS_DATA:
        try:
            return datetime.strptime(texto, formato).date()
        except ValueError:
            continue
    raise ValueError(f"Data inválida: {texto}")


def parse_decimal(valor):
    """
    Aceita 1234.56, "1234.56", "1.234,56" ou "1.234".

    Ponto seguido de exatamente três dígitos (sem vírgula) é separador de milhar.
    """
    if valor in (None, ""):
        return None
    if isinstance(valor, Decimal):
        return valor
    if isinstance(valor, (int, float)):
        return Decimal(str(valor))

    texto = str(valor).strip().replace("R$", "").strip()
    if "," in texto:
        texto = texto.replace(".", "").replace(",", ".")
    elif SOMENTE_MILHAR.match(texto):
        texto = texto.replace(".", "")
    try:
        return Decimal(texto)
    except InvalidOperation:
        raise ValueError(f"Valor inválido: {valor}")


# ============================================
# RESPOSTAS JSON
# ============================================

def ler_corpo_json(request):
    """
    Lê o corpo JSON da requisição. Lança ValueError se não for um objeto JSON.
    """
    try:
        data = json.loads(request.body.decode("utf-8") or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValueError("JSON inválido")
    if not isinstance(data, dict):
        raise ValueError("JSON inválido")
    return data


def resposta_erro(mensagem, status=400):
    if isinstance(mensagem, ValidationError):
        mensagem = " ".join(mensagem.messages)
    return JsonResponse({"ok": False, "error": str(mensagem)}, status=status)


def resposta_erros_form(form):
    return JsonResponse({"ok": False, "errors": form.errors.get_json_data()}, status=400)
