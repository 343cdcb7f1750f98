from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from caixa_app.services import obter_caixa_geral
from contas_app import services
from contas_app.models import CategoriaConta, ContaPagar
from eventos_app.services import criar_evento


def _conta(descricao="Aluguel do templo", valor="1500", vencimento=date(2024, 1, 31), **kwargs):
    kwargs.setdefault("categoria", "aluguel")
    return services.criar_conta(
        descricao=descricao,
        valor=Decimal(valor),
        vencimento=vencimento,
        **kwargs,
    )


def _vencimentos(descricao="Aluguel do templo"):
    return list(
        ContaPagar.objects.filter(descricao=descricao).order_by("vencimento").values_list("vencimento", flat=True)
    )


# ============================================
# RECORRÊNCIA
# ============================================

def test_proxima_ocorrencia_ajusta_fim_do_mes():
    base = date(2024, 1, 31)

    assert services.proxima_ocorrencia(base, "mensal", 1) == date(2024, 2, 29)
    assert services.proxima_ocorrencia(base, "mensal", 2) == date(2024, 3, 31)
    assert services.proxima_ocorrencia(date(2024, 2, 29), "anual", 1) == date(2025, 2, 28)
    assert services.proxima_ocorrencia(base, "semanal", 2) == date(2024, 2, 14)


def test_proxima_ocorrencia_invalida():
    with pytest.raises(ValidationError):
        services.proxima_ocorrencia(date(2024, 1, 1), "quinzenal", 1)


@pytest.mark.django_db
def test_gerar_recorrentes_mensal():
    conta = _conta(recorrencia="mensal")

    criadas = services.gerar_contas_recorrentes(conta, quantidade=3, hoje=date(2024, 1, 15))

    assert criadas == 3
    assert _vencimentos() == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]
    novas = ContaPagar.objects.exclude(pk=conta.pk)
    assert all(c.status == "pendente" and c.valor == Decimal("1500") for c in novas)
    assert all(c.recorrencia == "mensal" and c.categoria == "aluguel" for c in novas)


@pytest.mark.django_db
def test_gerar_recorrentes_continua_a_serie():
    conta = _conta(recorrencia="mensal")
    services.gerar_contas_recorrentes(conta, quantidade=3, hoje=date(2024, 1, 15))

    criadas = services.gerar_contas_recorrentes(conta, quantidade=2, hoje=date(2024, 1, 15))

    assert criadas == 2
    assert _vencimentos()[-2:] == [date(2024, 5, 30), date(2024, 6, 30)]
    assert ContaPagar.objects.count() == 6


@pytest.mark.django_db
def test_gerar_recorrentes_semanal():
    conta = _conta(descricao="Limpeza", categoria="manutencao", vencimento=date(2024, 6, 3), recorrencia="semanal")

    services.gerar_contas_recorrentes(conta, quantidade=2, hoje=date(2024, 6, 1))

    assert _vencimentos("Limpeza") == [date(2024, 6, 3), date(2024, 6, 10), date(2024, 6, 17)]


@pytest.mark.django_db
def test_gerar_recorrentes_ignora_vencimentos_passados():
    conta = _conta(vencimento=date(2024, 1, 10), recorrencia="mensal")

    criadas = services.gerar_contas_recorrentes(conta, quantidade=4, hoje=date(2024, 3, 20))

    assert criadas == 2
    assert _vencimentos() == [date(2024, 1, 10), date(2024, 4, 10), date(2024, 5, 10)]


@pytest.mark.django_db
def test_gerar_recorrentes_nao_duplica():
    conta = _conta(vencimento=date(2024, 1, 10), recorrencia="mensal")
    # Já existe, mas em outra categoria: não entra na série, mas bloqueia a duplicata
    _conta(vencimento=date(2024, 2, 10), recorrencia="mensal", categoria="outros")

    criadas = services.gerar_contas_recorrentes(conta, quantidade=2, hoje=date(2024, 1, 15))

    assert criadas == 1
    assert _vencimentos() == [date(2024, 1, 10), date(2024, 2, 10), date(2024, 3, 10)]


@pytest.mark.django_db
def test_gerar_recorrentes_conta_unica():
    conta = _conta(recorrencia="unica")

    with pytest.raises(ValidationError, match="não é recorrente"):
        services.gerar_contas_recorrentes(conta, hoje=date(2024, 1, 15))


# ============================================
# STATUS E PAGAMENTO
# ============================================

@pytest.mark.django_db
def test_marcar_contas_atrasadas():
    vencida = _conta(descricao="Água", categoria="agua", vencimento=date(2024, 6, 9))
    hoje_vence = _conta(descricao="Luz", categoria="luz", vencimento=date(2024, 6, 10))
    paga = _conta(descricao="Internet", categoria="internet", vencimento=date(2024, 6, 1), status="pago")

    assert services.marcar_contas_atrasadas(date(2024, 6, 10)) == 1

    vencida.refresh_from_db()
    hoje_vence.refresh_from_db()
    paga.refresh_from_db()
    assert vencida.status == "atrasado"
    assert hoje_vence.status == "pendente"
    assert paga.status == "pago"


@pytest.mark.django_db
def test_pagar_conta_lanca_saida_no_caixa_geral(admin):
    conta = _conta(valor="300")

    conta, mov = services.pagar_conta(conta, date(2024, 2, 1), "pix", responsavel=admin)

    assert conta.status == "pago"
    assert conta.data_pagamento == date(2024, 2, 1)
    assert conta.forma_pagamento == "pix"
    assert mov.tipo == "saida"
    assert mov.caixa == obter_caixa_geral()
    assert mov.descricao == "Pagamento: Aluguel do templo"
    assert mov.observacoes == "Pagamento da despesa: Aluguel do templo"
    assert mov.categoria == "aluguel"
    assert mov.conta == conta

    caixa = obter_caixa_geral()
    caixa.refresh_from_db()
    assert caixa.saldo == Decimal("-300")


@pytest.mark.django_db
def test_pagar_conta_de_evento_usa_caixa_do_evento(admin):
    evento = criar_evento("Retiro de Jovens", date(2024, 7, 10))
    conta = _conta(descricao="Hospedagem", categoria="outros", valor="800", centro_custo="evento", evento=evento)

    _, mov = services.pagar_conta(conta, date(2024, 7, 1), "transferencia", responsavel=admin)

    assert mov.caixa == evento.caixa
    evento.refresh_from_db()
    assert evento.total_saidas == Decimal("800")


@pytest.mark.django_db
def test_pagar_conta_ja_paga(admin):
    conta = _conta()
    services.pagar_conta(conta, date(2024, 2, 1), "pix", responsavel=admin)

    with pytest.raises(ValidationError):
        services.pagar_conta(conta, date(2024, 2, 2), "pix", responsavel=admin)


@pytest.mark.django_db
def test_estornar_pagamento(admin):
    conta = _conta(valor="300", vencimento=date(2024, 6, 10))
    services.pagar_conta(conta, date(2024, 6, 9), "pix", responsavel=admin)

    conta = services.estornar_pagamento(conta, hoje=date(2024, 6, 12))

    assert conta.status == "atrasado"
    assert conta.data_pagamento is None
    assert not conta.movimentacoes.exists()
    caixa = obter_caixa_geral()
    caixa.refresh_from_db()
    assert caixa.saldo == 0


@pytest.mark.django_db
def test_estornar_conta_nao_paga():
    conta = _conta()

    with pytest.raises(ValidationError):
        services.estornar_pagamento(conta)


@pytest.mark.django_db
def test_conta_de_evento_sem_evento():
    with pytest.raises(ValidationError):
        _conta(centro_custo="evento")


@pytest.mark.django_db
def test_cancelar_conta_paga(admin):
    conta = _conta()
    services.pagar_conta(conta, date(2024, 2, 1), "dinheiro", responsavel=admin)

    with pytest.raises(ValidationError):
        services.cancelar_conta(conta)


@pytest.mark.django_db
def test_calendario_do_mes():
    _conta(descricao="Água", categoria="agua", valor="80", vencimento=date(2024, 6, 5))
    _conta(descricao="Luz", categoria="luz", valor="200", vencimento=date(2024, 6, 5), status="pago")
    _conta(descricao="Internet", categoria="internet", valor="120", vencimento=date(2024, 6, 20))
    _conta(descricao="Aluguel", valor="1500", vencimento=date(2024, 7, 1))

    cal = services.calendario_contas(2024, 6, hoje=date(2024, 6, 10))

    assert list(cal["por_dia"].keys()) == [date(2024, 6, 5), date(2024, 6, 20)]
    assert [c.descricao for c in cal["por_dia"][date(2024, 6, 5)]] == ["Água", "Luz"]
    assert cal["total_mes"] == Decimal("400")
    # A conta de água venceu antes de 10/06 e conta como pendente (atrasada)
    assert cal["total_pendente"] == Decimal("200")


# ============================================
# CATEGORIAS
# ============================================

@pytest.mark.django_db
def test_categorias_padrao():
    nomes = set(CategoriaConta.objects.values_list("nome", flat=True))

    assert {"aluguel", "agua", "luz", "internet", "outros"} <= nomes


@pytest.mark.django_db
def test_criar_categoria_duplicada():
    with pytest.raises(ValidationError, match="Já existe uma categoria"):
        services.criar_categoria("Aluguel")


@pytest.mark.django_db
def test_excluir_categoria_em_uso_desativa():
    categoria = services.criar_categoria("Missões")
    _conta(descricao="Oferta missionária", categoria="Missões")

    assert services.excluir_categoria(categoria) == "desativada"
    categoria.refresh_from_db()
    assert categoria.ativa is False
    assert categoria not in services.listar_categorias()


@pytest.mark.django_db
def test_excluir_categoria_sem_uso():
    categoria = services.criar_categoria("Missões")

    assert services.excluir_categoria(categoria) == "excluida"
    assert not CategoriaConta.objects.filter(nome="Missões").exists()


# ============================================
# VIEWS
# ============================================

@pytest.mark.django_db
def test_view_criar_conta_categoria_inativa(cliente_tesouraria):
    CategoriaConta.objects.filter(nome="som").update(ativa=False)

    resp = cliente_tesouraria.post("/api/contas/nova/", {
        "descricao": "Cabo de microfone",
        "valor": "45.90",
        "vencimento": "2024-06-15",
        "categoria": "som",
    })

    assert resp.status_code == 400
    assert "categoria" in resp.json()["errors"]


@pytest.mark.django_db
def test_view_pagar_conta(cliente_tesouraria):
    conta = _conta(valor="99.90")

    resp = cliente_tesouraria.post(f"/api/contas/{conta.pk}/pagar/", {
        "data_pagamento": "2024-02-01",
        "forma_pagamento": "pix",
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["conta"]["status"] == "pago"
    assert Decimal(body["movimentacao"]["valor"]) == Decimal("99.90")


@pytest.mark.django_db
def test_view_secretaria_nao_paga(cliente_secretaria):
    conta = _conta()

    resp = cliente_secretaria.post(f"/api/contas/{conta.pk}/pagar/", {"forma_pagamento": "pix"})

    assert resp.status_code == 403


@pytest.mark.django_db
def test_view_estornar_pagamento(cliente_tesouraria):
    conta = _conta(valor="99.90", vencimento=date(2099, 1, 10))
    cliente_tesouraria.post(f"/api/contas/{conta.pk}/pagar/", {"forma_pagamento": "pix"})

    resp = cliente_tesouraria.post(f"/api/contas/{conta.pk}/estornar/")

    assert resp.status_code == 200
    assert resp.json()["conta"]["status"] == "pendente"
