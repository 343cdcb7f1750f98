from datetime import date, time
from decimal import Decimal

import pytest

from caixa_app.services import criar_caixa, criar_movimentacao, obter_caixa_geral
from contas_app.services import criar_conta
from cultos_app.services import criar_culto, registrar_entrada
from painel_app import services

HOJE = date(2024, 6, 15)


def _mov(tipo, valor, data, caixa=None, categoria="Diversos"):
    return criar_movimentacao(
        caixa or obter_caixa_geral(),
        tipo,
        categoria,
        f"{tipo} {valor}",
        Decimal(valor),
        data=data,
    )


def test_limites_do_mes():
    assert services.limites_do_mes(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert services.limites_do_mes(date(2023, 12, 31)) == (date(2023, 12, 1), date(2023, 12, 31))


@pytest.mark.django_db
def test_resumo_do_mes(admin):
    _mov("entrada", "1000", date(2024, 6, 2))
    _mov("saida", "250", date(2024, 6, 10))
    _mov("entrada", "500", date(2024, 5, 31))
    # Outro caixa não entra nas receitas do caixa geral
    _mov("entrada", "999", date(2024, 6, 5), caixa=criar_caixa("Caixa Missões"))

    criar_conta(descricao="Água", categoria="agua", valor=Decimal("80"), vencimento=date(2024, 6, 10))
    criar_conta(descricao="Luz", categoria="luz", valor=Decimal("200"), vencimento=date(2024, 6, 20))
    criar_conta(descricao="Internet", categoria="internet", valor=Decimal("120"), vencimento=date(2024, 6, 25))
    criar_conta(descricao="Som", categoria="som", valor=Decimal("50"), vencimento=date(2024, 6, 5), status="pago")
    criar_conta(descricao="Aluguel", categoria="aluguel", valor=Decimal("1500"), vencimento=date(2024, 7, 1))

    dados = services.resumo(HOJE)

    assert dados["saldo_geral"] == Decimal("1250")
    assert dados["receitas_mes"] == Decimal("1000")
    assert dados["despesas_mes"] == Decimal("250")
    assert dados["resultado_mes"] == Decimal("750")
    assert dados["contas_a_vencer"] == {"quantidade": 2, "total": Decimal("320")}
    assert dados["contas_vencidas"] == {"quantidade": 1, "total": Decimal("80")}


@pytest.mark.django_db
def test_resumo_sem_dados():
    dados = services.resumo(HOJE)

    assert dados["saldo_geral"] == 0
    assert dados["receitas_mes"] == 0
    assert dados["contas_vencidas"] == {"quantidade": 0, "total": Decimal("0")}


@pytest.mark.django_db
def test_grafico_mensal(admin):
    _mov("entrada", "300", date(2024, 6, 1))
    _mov("saida", "100", date(2024, 4, 30))
    _mov("entrada", "700", date(2023, 12, 31))

    pontos = services.grafico_mensal(HOJE, meses=6)

    assert [(p["mes"], p["ano"]) for p in pontos] == [
        ("Jan", 2024), ("Fev", 2024), ("Mar", 2024), ("Abr", 2024), ("Mai", 2024), ("Jun", 2024),
    ]
    assert pontos[3]["gastos"] == Decimal("100")
    assert pontos[5]["entradas"] == Decimal("300")
    assert sum(p["entradas"] for p in pontos) == Decimal("300")


@pytest.mark.django_db
def test_receitas_por_tipo(admin):
    culto = criar_culto("Culto da Família", "culto_familia", date(2024, 6, 2), time(18, 0))
    registrar_entrada(culto, "oferta", Decimal("80"), "dinheiro")
    registrar_entrada(culto, "dizimo", Decimal("300"), "pix")
    registrar_entrada(culto, "oferta", Decimal("40"), "pix")
    antigo = criar_culto("Culto da Família", "culto_familia", date(2024, 5, 26), time(18, 0))
    registrar_entrada(antigo, "doacao", Decimal("1000"), "pix")
    # Entrada avulsa no caixa não conta como receita de culto
    _mov("entrada", "5000", date(2024, 6, 3))

    dados = services.receitas_por_tipo(HOJE)

    assert dados == [
        {"tipo": "dizimo", "rotulo": "Dízimo", "total": Decimal("300")},
        {"tipo": "oferta", "rotulo": "Oferta", "total": Decimal("120")},
    ]


@pytest.mark.django_db
def test_proximas_contas_ignora_pagas():
    criar_conta(descricao="Água", categoria="agua", valor=Decimal("80"), vencimento=date(2024, 6, 10), status="pago")
    luz = criar_conta(descricao="Luz", categoria="luz", valor=Decimal("200"), vencimento=date(2024, 6, 20))

    assert services.proximas_contas() == [luz]


# ============================================
# VIEWS
# ============================================

@pytest.mark.django_db
def test_view_painel(cliente_auditor):
    resp = cliente_auditor.get("/api/painel/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    for chave in ("resumo", "receitas_por_tipo", "movimentacoes_recentes", "proximas_contas",
                  "proximos_cultos", "cultos_pendentes", "alertas_entradas"):
        assert chave in body


@pytest.mark.django_db
def test_view_grafico_limita_meses(cliente_auditor):
    resp = cliente_auditor.get("/api/painel/grafico/", {"meses": 99})

    assert len(resp.json()["meses"]) == 24


@pytest.mark.django_db
def test_view_painel_exige_login(client):
    resp = client.get("/api/painel/")

    assert resp.status_code == 302
