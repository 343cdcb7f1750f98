# membros_app/planilhas.py

import csv
import io
from io import BytesIO

from django.conf import settings
from django.core.exceptions import ValidationError
from openpyxl import Workbook, load_workbook

from core.utils import formatar_data

COLUNAS_IMPORTACAO = [
    "nome",
    "email",
    "telefone",
    "data_nascimento",
    "endereco",
    "status",
    "ministerios",
]

EXTENSOES_ACEITAS = (".csv", ".xlsx")


def _texto(valor):
    if valor is None:
        return ""
    if hasattr(valor, "year"):
        # Data vinda do Excel: mantém no formato ISO para o parser de datas
        try:
            return valor.date().isoformat()
        except AttributeError:
            return valor.isoformat()
    return str(valor).strip()


def _linhas_para_dicts(cabecalho, linhas):
    # Mapa nome_da_coluna -> índice
    mapa = {}
    for idx, nome in enumerate(cabecalho):
        if nome:
            mapa[str(nome).strip().lower()] = idx

    if "nome" not in mapa:
        raise ValidationError("A planilha precisa ter a coluna 'nome' no cabeçalho.")

    resultado = []
    for numero, linha in enumerate(linhas, start=2):
        # Linha totalmente vazia é ignorada
        if not linha or all(_texto(c) == "" for c in linha):
            continue

        item = {"linha": numero}
        for coluna in COLUNAS_IMPORTACAO:
            idx = mapa.get(coluna)
            item[coluna] = _texto(linha[idx]) if idx is not None and idx < len(linha) else ""
        resultado.append(item)
    return resultado


def _ler_csv(conteudo):
    texto = conteudo.decode("utf-8-sig")
    try:
        dialeto = csv.Sniffer().sniff(texto.splitlines()[0] if texto else "", delimiters=",;")
        delimitador = dialeto.delimiter
    except csv.Error:
        delimitador = ","

    leitor = csv.reader(io.StringIO(texto), delimiter=delimitador)
    try:
        cabecalho = next(leitor)
    except StopIteration:
        raise ValidationError("O arquivo está vazio.")
    return _linhas_para_dicts(cabecalho, list(leitor))


def _ler_xlsx(conteudo):
    try:
        wb = load_workbook(filename=BytesIO(conteudo), data_only=True, read_only=True)
    except Exception as e:
        raise ValidationError(f"O arquivo não parece ser um Excel válido: {e}")

    ws = wb.active
    linhas = ws.iter_rows(values_only=True)
    try:
        cabecalho = next(linhas)
    except StopIteration:
        raise ValidationError("O arquivo está vazio.")
    return _linhas_para_dicts(cabecalho, list(linhas))


def ler_planilha(arquivo):
    """
    Lê um arquivo .csv (vírgula ou ponto e vírgula) ou .xlsx com cabeçalho na primeira linha.

    Retorna uma lista de dicts com as colunas de importação (textos) e o número da linha.
    """
    nome = (getattr(arquivo, "name", "") or "").lower()
    if not nome.endswith(EXTENSOES_ACEITAS):
        raise ValidationError("Formato não suportado. Envie um arquivo .csv ou .xlsx.")

    tamanho = getattr(arquivo, "size", None)
    if tamanho is not None and tamanho > settings.IMPORTACAO_TAMANHO_MAXIMO:
        raise ValidationError("O arquivo é muito grande. Tamanho máximo: 5 MB.")

    conteudo = arquivo.read()
    if nome.endswith(".csv"):
        try:
            return _ler_csv(conteudo)
        except UnicodeDecodeError:
            raise ValidationError("O arquivo CSV precisa estar em UTF-8.")
    return _ler_xlsx(conteudo)


def exportar_membros_xlsx(membros):
    """
    Gera o Excel (bytes) com os membros informados.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Membros"

    ws.append([
        "ID",
        "Nome",
        "E-mail",
        "Telefone",
        "Data de nascimento",
        "Endereço",
        "Data de entrada",
        "Status",
        "Ministérios",
        "Observações",
    ])

    for m in membros:
        ws.append([
            m.id,
            m.nome,
            m.email or "",
            m.telefone or "",
            formatar_data(m.data_nascimento),
            m.endereco or "",
            formatar_data(m.data_entrada),
            m.get_status_display(),
            "; ".join(m.ministerios or []),
            m.observacoes or "",
        ])

    # Largura das colunas pelo maior conteúdo, com limite
    for column_cells in ws.columns:
        maior = max((len(str(c.value)) for c in column_cells if c.value is not None), default=0)
        ws.column_dimensions[column_cells[0].column_letter].width = min(maior + 2, 40)

    output = BytesIO()
    wb.save(output)
    return output.getvalue()
