import json
from datetime import date, datetime, time
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from caixa_app.models import Movimentacao
from caixa_app.services import obter_caixa_geral
from cultos_app import services
from cultos_app.models import Culto, EntradaCulto, ModeloCulto


def _modelo(nome="Culto da Família", tipo="culto_familia", dia=0, hora=time(18, 0), **kwargs):
    return ModeloCulto.objects.create(nome=nome, tipo=tipo, dia_semana=dia, horario=hora, **kwargs)


def _saldo_geral():
    caixa = obter_caixa_geral()
    caixa.refresh_from_db()
    return caixa.saldo


# 2024-06-05 é uma quarta-feira
QUARTA_MANHA = datetime(2024, 6, 5, 9, 0)
QUARTA_NOITE = datetime(2024, 6, 5, 21, 0)


def test_dia_semana_domingo_zero():
    assert services.dia_semana(date(2024, 6, 2)) == 0  # domingo
    assert services.dia_semana(date(2024, 6, 5)) == 3  # quarta
    assert services.dia_semana(date(2024, 6, 8)) == 6  # sábado


@pytest.mark.django_db
def test_gerar_sem_modelos_ativos():
    _modelo(ativo=False)

    with pytest.raises(ValidationError):
        services.gerar_cultos_semanais(agora=QUARTA_MANHA)


@pytest.mark.django_db
def test_gerar_cultos_semanais_domingo():
    modelo = _modelo(observacoes="Trazer a família")

    criados = services.gerar_cultos_semanais(semanas=4, agora=QUARTA_MANHA)

    # Janela de 05/06 a 03/07: domingos 09, 16, 23 e 30
    assert [c.data for c in criados] == [date(2024, 6, 9), date(2024, 6, 16), date(2024, 6, 23), date(2024, 6, 30)]
    assert all(c.status == "agendado" for c in criados)
    assert all(c.modelo == modelo for c in criados)
    assert criados[0].observacoes == "Trazer a família"


@pytest.mark.django_db
def test_gerar_no_mesmo_dia_antes_do_horario():
    _modelo(nome="Oração", tipo="oracao", dia=3, hora=time(19, 30))

    criados = services.gerar_cultos_semanais(semanas=1, agora=QUARTA_MANHA)

    assert [c.data for c in criados] == [date(2024, 6, 5), date(2024, 6, 12)]


@pytest.mark.django_db
def test_gerar_no_mesmo_dia_depois_do_horario():
    _modelo(nome="Oração", tipo="oracao", dia=3, hora=time(19, 30))

    criados = services.gerar_cultos_semanais(semanas=1, agora=QUARTA_NOITE)

    assert [c.data for c in criados] == [date(2024, 6, 12)]


@pytest.mark.django_db
def test_gerar_e_idempotente():
    _modelo()
    services.gerar_cultos_semanais(semanas=4, agora=QUARTA_MANHA)

    criados = services.gerar_cultos_semanais(semanas=4, agora=QUARTA_MANHA)

    assert criados == []
    assert Culto.objects.count() == 4


@pytest.mark.django_db
def test_modelo_sem_dia_e_ignorado():
    _modelo(dia=None)
    _modelo(nome="Jovens", tipo="jovens", dia=6, hora=time(19, 0))

    criados = services.gerar_cultos_semanais(semanas=1, agora=QUARTA_MANHA)

    assert [c.tipo for c in criados] == ["jovens"]


@pytest.mark.django_db
def test_modelo_nao_recorrente_nao_gera():
    _modelo(recorrente=False)
    _modelo(nome="Jovens", tipo="jovens", dia=6, hora=time(19, 0))

    criados = services.gerar_cultos_semanais(semanas=1, agora=QUARTA_MANHA)

    assert {c.tipo for c in criados} == {"jovens"}


@pytest.fixture
def culto(db):
    return services.criar_culto("Culto da Família", "culto_familia", date(2024, 6, 2), time(18, 0))


@pytest.mark.django_db
def test_registrar_entrada_lanca_no_caixa_geral(culto, admin):
    hoje = date(2024, 6, 3)
    entrada = services.registrar_entrada(culto, "dizimo", Decimal("150"), "pix", hoje=hoje)

    culto.refresh_from_db()
    assert culto.total_entradas == Decimal("150")

    mov = Movimentacao.objects.get(entrada_culto=entrada)
    assert mov.tipo == "entrada"
    assert mov.categoria == "Culto"
    assert mov.descricao == "Dízimo - Culto da Família"
    assert mov.data == hoje
    assert mov.culto == culto
    assert mov.responsavel == admin
    assert _saldo_geral() == Decimal("150")


@pytest.mark.django_db
def test_remover_entrada_estorna_caixa(culto, admin):
    services.registrar_entrada(culto, "oferta", Decimal("40"), "dinheiro")
    entrada = services.registrar_entrada(culto, "doacao", Decimal("60"), "cartao")

    services.remover_entrada(entrada)

    culto.refresh_from_db()
    assert culto.total_entradas == Decimal("40")
    assert _saldo_geral() == Decimal("40")
    assert Movimentacao.objects.count() == 1


def test_resumo_fechamento_ignora_valores_nao_positivos():
    resumo = services.resumo_fechamento([
        {"tipo": "dizimo", "valor": Decimal("100"), "forma_pagamento": "pix"},
        {"tipo": "oferta", "valor": Decimal("30"), "forma_pagamento": "dinheiro"},
        {"tipo": "oferta", "valor": Decimal("20"), "forma_pagamento": "pix"},
        {"tipo": "doacao", "valor": Decimal("0"), "forma_pagamento": "pix"},
    ])

    assert resumo["total"] == Decimal("150")
    assert resumo["por_forma"] == {"pix": Decimal("120"), "dinheiro": Decimal("30")}
    assert resumo["por_tipo"] == {"dizimo": Decimal("100"), "oferta": Decimal("50")}


@pytest.mark.django_db
def test_fechar_culto(culto, admin):
    entradas = [
        {"tipo": "dizimo", "valor": Decimal("100"), "forma_pagamento": "pix"},
        {"tipo": "oferta", "valor": Decimal("35.50"), "forma_pagamento": "dinheiro"},
        {"tipo": "oferta", "valor": Decimal("0"), "forma_pagamento": "dinheiro"},
    ]

    fechado = services.fechar_culto(culto, entradas, observacoes="Culto abençoado")

    assert fechado.status == "finalizado"
    assert fechado.observacoes == "Culto abençoado"
    assert fechado.total_entradas == Decimal("135.50")
    assert fechado.totais_por_forma == {"pix": "100.00", "dinheiro": "35.50"}
    assert fechado.totais_por_tipo == {"dizimo": "100.00", "oferta": "35.50"}
    assert EntradaCulto.objects.filter(culto=culto).count() == 2
    assert _saldo_geral() == Decimal("135.50")


@pytest.mark.django_db
def test_fechar_culto_ja_finalizado(culto, admin):
    services.fechar_culto(culto, [{"tipo": "oferta", "valor": Decimal("10"), "forma_pagamento": "pix"}])

    with pytest.raises(ValidationError, match="já está finalizado"):
        services.fechar_culto(culto, [{"tipo": "oferta", "valor": Decimal("10"), "forma_pagamento": "pix"}])


@pytest.mark.django_db
def test_fechar_culto_sem_entradas(culto, admin):
    with pytest.raises(ValidationError):
        services.fechar_culto(culto, [{"tipo": "oferta", "valor": Decimal("0"), "forma_pagamento": "pix"}])

    culto.refresh_from_db()
    assert culto.status == "agendado"


@pytest.mark.django_db
def test_cultos_pendentes_e_proximos():
    hoje = date(2024, 6, 10)
    antigo = services.criar_culto("Culto A", "celebracao", date(2024, 6, 2), time(10, 0))
    recente = services.criar_culto("Culto B", "celebracao", date(2024, 6, 9), time(10, 0))
    futuro = services.criar_culto("Culto C", "celebracao", date(2024, 6, 16), time(10, 0))
    services.criar_culto("Culto D", "celebracao", date(2024, 6, 5), time(10, 0), status="finalizado")

    assert services.cultos_pendentes(hoje) == [antigo, recente]
    assert services.proximos_cultos(hoje) == [futuro]


@pytest.mark.django_db
def test_excluir_culto_com_entradas(culto, admin):
    services.registrar_entrada(culto, "oferta", Decimal("10"), "pix")

    with pytest.raises(ValidationError):
        services.excluir_culto(culto)


# ============================================
# VIEWS
# ============================================

@pytest.mark.django_db
def test_view_fechamento_json(cliente_tesouraria, culto):
    payload = {
        "observacoes": "Santa ceia",
        "entradas": [
            {"tipo": "dizimo", "valor": "200.00", "forma_pagamento": "pix"},
            {"tipo": "oferta", "valor": 50, "forma_pagamento": "dinheiro"},
        ],
    }

    resp = cliente_tesouraria.post(
        f"/api/cultos/{culto.pk}/fechamento/",
        data=json.dumps(payload),
        content_type="application/json",
    )

    assert resp.status_code == 200
    body = resp.json()["culto"]
    assert body["status"] == "finalizado"
    assert Decimal(body["total_entradas"]) == Decimal("250")
    assert len(body["entradas"]) == 2


@pytest.mark.django_db
def test_view_fechamento_descarta_linhas_zeradas(cliente_tesouraria, culto):
    payload = {
        "entradas": [
            {"tipo": "dizimo", "valor": "100.00", "forma_pagamento": "pix"},
            {"tipo": "oferta", "valor": 0, "forma_pagamento": "dinheiro"},
            {"tipo": "doacao", "valor": "", "forma_pagamento": "pix"},
        ],
    }

    resp = cliente_tesouraria.post(
        f"/api/cultos/{culto.pk}/fechamento/",
        data=json.dumps(payload),
        content_type="application/json",
    )

    assert resp.status_code == 200
    body = resp.json()["culto"]
    assert Decimal(body["total_entradas"]) == Decimal("100")
    assert body["totais_por_tipo"] == {"dizimo": "100.00"}
    assert EntradaCulto.objects.filter(culto=culto).count() == 1


@pytest.mark.django_db
def test_view_fechamento_so_com_linhas_zeradas(cliente_tesouraria, culto):
    payload = {"entradas": [{"tipo": "oferta", "valor": "0", "forma_pagamento": "dinheiro"}]}

    resp = cliente_tesouraria.post(
        f"/api/cultos/{culto.pk}/fechamento/",
        data=json.dumps(payload),
        content_type="application/json",
    )

    assert resp.status_code == 400
    assert "pelo menos uma entrada" in resp.json()["error"]


@pytest.mark.django_db
def test_view_fechamento_json_invalido(cliente_tesouraria, culto):
    resp = cliente_tesouraria.post(
        f"/api/cultos/{culto.pk}/fechamento/",
        data="{nao e json",
        content_type="application/json",
    )

    assert resp.status_code == 400
    assert resp.json()["error"] == "JSON inválido"


@pytest.mark.django_db
def test_view_gerar_semanais_sem_modelos(cliente_secretaria):
    resp = cliente_secretaria.post("/api/cultos/gerar-semanais/", {"semanas": 2})

    assert resp.status_code == 400
    assert resp.json()["ok"] is False


@pytest.mark.django_db
def test_view_criar_modelo(cliente_secretaria):
    resp = cliente_secretaria.post("/api/cultos/modelos/novo/", {
        "nome": "Culto de Jovens",
        "tipo": "jovens",
        "horario": "19:30",
        "dia_semana": 6,
        "recorrente": "on",
        "ativo": "on",
    })

    assert resp.status_code == 201
    assert resp.json()["modelo"]["horario"] == "19:30"
