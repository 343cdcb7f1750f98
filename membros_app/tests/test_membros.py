from datetime import date, datetime
from io import BytesIO

import pytest
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from openpyxl import Workbook, load_workbook

from membros_app import services
from membros_app.models import Membro
from membros_app.planilhas import exportar_membros_xlsx, ler_planilha

CSV_MEMBROS = (
    "nome;email;telefone;data_nascimento;status;ministerios\n"
    "Maria Souza;maria@igreja.test;11 99999-0000;15/03/1985;ativo;Louvor; Intercessão\n"
    "João Lima;;;1990-07-01;visitante;\n"
    ";sem-nome@igreja.test;11 98888-0000;;;\n"
    "Pedro Alves;email-invalido;11 97777-0000;;;\n"
    "\n"
)


def _arquivo_csv(conteudo=CSV_MEMBROS, nome="membros.csv"):
    return SimpleUploadedFile(nome, conteudo.encode("utf-8"), content_type="text/csv")


def _arquivo_xlsx():
    wb = Workbook()
    ws = wb.active
    ws.append(["Nome", "Telefone", "Data_Nascimento", "Ministerios"])
    ws.append(["Ana Paula", "11 96666-0000", datetime(1979, 12, 2), "Infantil | Jovens"])
    ws.append([None, None, None, None])
    output = BytesIO()
    wb.save(output)
    return SimpleUploadedFile("membros.xlsx", output.getvalue())


def test_separar_ministerios():
    assert services.separar_ministerios("Louvor; Jovens | Infantil ") == ["Louvor", "Jovens", "Infantil"]
    assert services.separar_ministerios("") == []
    assert services.separar_ministerios(["Louvor", " "]) == ["Louvor"]


# ============================================
# LEITURA DE PLANILHAS
# ============================================

def test_ler_csv_ponto_e_virgula():
    linhas = ler_planilha(_arquivo_csv())

    # A linha em branco é ignorada; o ";" extra em ministérios vira outra coluna
    assert len(linhas) == 4
    assert linhas[0]["linha"] == 2
    assert linhas[0]["nome"] == "Maria Souza"
    assert linhas[0]["data_nascimento"] == "15/03/1985"
    assert linhas[1]["email"] == ""


def test_ler_xlsx():
    linhas = ler_planilha(_arquivo_xlsx())

    assert linhas == [{
        "linha": 2,
        "nome": "Ana Paula",
        "email": "",
        "telefone": "11 96666-0000",
        "data_nascimento": "1979-12-02",
        "endereco": "",
        "status": "",
        "ministerios": "Infantil | Jovens",
    }]


def test_planilha_sem_coluna_nome():
    with pytest.raises(ValidationError):
        ler_planilha(_arquivo_csv("email,telefone\nx@igreja.test,1\n"))


def test_extensao_nao_suportada():
    with pytest.raises(ValidationError):
        ler_planilha(_arquivo_csv(nome="membros.txt"))


# ============================================
# PRÉVIA E IMPORTAÇÃO
# ============================================

def test_pre_visualizar_importacao():
    previa = services.pre_visualizar_importacao(ler_planilha(_arquivo_csv()))

    assert [p["situacao"] for p in previa] == ["valido", "aviso", "erro", "erro"]
    assert previa[0]["dados"]["data_nascimento"] == date(1985, 3, 15)
    assert previa[0]["dados"]["ministerios"] == ["Louvor"]
    assert previa[1]["avisos"] == ["Telefone não informado"]
    assert previa[1]["dados"]["status"] == "visitante"
    assert previa[2]["erros"] == ["Nome é obrigatório"]
    assert previa[3]["erros"] == ["E-mail inválido"]


def test_pre_visualizar_data_invalida():
    previa = services.pre_visualizar_importacao([
        {"linha": 2, "nome": "Carlos", "telefone": "1", "data_nascimento": "31/02/2000"},
    ])

    assert previa[0]["situacao"] == "erro"
    assert previa[0]["erros"] == ["Data de nascimento inválida"]


@pytest.mark.django_db
def test_importar_membros():
    resultado = services.importar_membros(ler_planilha(_arquivo_csv()))

    assert resultado == {"criados": 2, "ignorados": 2}
    maria = Membro.objects.get(nome="Maria Souza")
    assert maria.email == "maria@igreja.test"
    assert maria.status == "ativo"
    assert Membro.objects.get(nome="João Lima").status == "visitante"


# ============================================
# FILTROS E EXPORTAÇÃO
# ============================================

@pytest.fixture
def membros(db):
    return [
        Membro.objects.create(nome="Maria Souza", email="maria@igreja.test", ministerios=["Louvor", "Jovens"]),
        Membro.objects.create(nome="João Lima", telefone="11 95555-0000", status="visitante"),
        Membro.objects.create(nome="Ana Paula", status="inativo", ministerios=["louvor"]),
    ]


def test_filtrar_por_busca_e_status(membros):
    assert [m.nome for m in services.filtrar_membros(q="igreja.test")] == ["Maria Souza"]
    assert [m.nome for m in services.filtrar_membros(q="95555")] == ["João Lima"]
    assert [m.nome for m in services.filtrar_membros(status="inativo")] == ["Ana Paula"]


def test_filtrar_por_ministerio(membros):
    assert [m.nome for m in services.filtrar_membros(ministerio="Louvor")] == ["Ana Paula", "Maria Souza"]
    assert [m.nome for m in services.filtrar_membros(ministerio="Louvor", status="ativo")] == ["Maria Souza"]


def test_resumo_membros(membros):
    assert services.resumo_membros() == {"ativo": 1, "inativo": 1, "visitante": 1, "total": 3}


def test_exportar_xlsx(membros):
    conteudo = exportar_membros_xlsx(services.filtrar_membros())

    ws = load_workbook(BytesIO(conteudo)).active
    linhas = list(ws.iter_rows(values_only=True))
    assert linhas[0][1] == "Nome"
    assert [linha[1] for linha in linhas[1:]] == ["Ana Paula", "João Lima", "Maria Souza"]
    assert linhas[3][8] == "Louvor; Jovens"


# ============================================
# VIEWS
# ============================================

@pytest.mark.django_db
def test_view_criar_membro(cliente_secretaria):
    resp = cliente_secretaria.post("/api/membros/novo/", {
        "nome": "Lucas Prado",
        "data_nascimento": "2000-05-10",
        "ministerios": "Som; Mídia",
    })

    assert resp.status_code == 201
    body = resp.json()["membro"]
    assert body["status"] == "ativo"
    assert body["ministerios"] == ["Som", "Mídia"]
    assert body["data_entrada"] is not None


@pytest.mark.django_db
def test_view_tesouraria_nao_cadastra_membro(cliente_tesouraria):
    resp = cliente_tesouraria.post("/api/membros/novo/", {"nome": "Lucas Prado"})

    assert resp.status_code == 403


@pytest.mark.django_db
def test_view_importar_previa(cliente_secretaria):
    resp = cliente_secretaria.post("/api/membros/importar/previa/", {"arquivo": _arquivo_csv()})

    assert resp.status_code == 200
    body = resp.json()
    assert body["validas"] == 2
    assert body["com_erro"] == 2
    assert not Membro.objects.exists()


@pytest.mark.django_db
def test_view_exportar(cliente_auditor, membros):
    resp = cliente_auditor.get("/api/membros/exportar/", {"status": "ativo"})

    assert resp.status_code == 200
    assert resp["Content-Disposition"] == 'attachment; filename="membros.xlsx"'
    ws = load_workbook(BytesIO(resp.content)).active
    assert ws.max_row == 2
