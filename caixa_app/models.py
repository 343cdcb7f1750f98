from django.conf import settings
from django.db import models


FORMA_PAGAMENTO_CHOICES = [
    ("dinheiro", "Dinheiro"),
    ("pix", "PIX"),
    ("cartao", "Cartão"),
    ("transferencia", "Transferência"),
    ("outros", "Outros"),
]


class Caixa(models.Model):
    """
    Caixa (livro) com saldo mantido a cada movimentação.
    saldo = saldo_inicial + entradas - saídas
    """
    TIPO_CHOICES = [
        ("geral", "Geral"),
        ("evento", "Evento"),
    ]

    nome = models.CharField(max_length=100)
    tipo = models.CharField(
        max_length=10,
        choices=TIPO_CHOICES,
        default="geral",
        help_text="Caixa geral da igreja ou caixa próprio de um evento."
    )
    evento = models.OneToOneField(
        "eventos_app.Evento",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="caixa",
    )
    saldo = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
        help_text="Saldo atual, atualizado pelas movimentações."
    )
    saldo_inicial = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Caixa"
        verbose_name_plural = "Caixas"
        ordering = ["-criado_em", "-id"]

    def __str__(self):
        return self.nome


class Movimentacao(models.Model):
    TIPO_CHOICES = [
        ("entrada", "Entrada"),
        ("saida", "Saída"),
        ("transferencia", "Transferência"),
    ]

    caixa = models.ForeignKey(
        Caixa,
        on_delete=models.PROTECT,
        related_name="movimentacoes",
    )
    tipo = models.CharField(max_length=15, choices=TIPO_CHOICES)
    categoria = models.CharField(max_length=100)
    descricao = models.CharField(max_length=255)
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    forma_pagamento = models.CharField(
        max_length=20,
        choices=FORMA_PAGAMENTO_CHOICES,
        default="dinheiro",
    )
    data = models.DateField()

    # Origem do lançamento (opcionais)
    culto = models.ForeignKey(
        "cultos_app.Culto",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="movimentacoes",
    )
    entrada_culto = models.OneToOneField(
        "cultos_app.EntradaCulto",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="movimentacao",
    )
    conta = models.ForeignKey(
        "contas_app.ContaPagar",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="movimentacoes",
    )
    transferencia_id = models.UUIDField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Identificador comum às duas pernas de uma transferência."
    )

    responsavel = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="movimentacoes_caixa",
    )
    responsavel_nome = models.CharField(max_length=150, blank=True)
    observacoes = models.TextField(blank=True)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Movimentação"
        verbose_name_plural = "Movimentações"
        ordering = ["-data", "-criado_em", "-id"]

    def __str__(self):
        return f"{self.get_tipo_display()} {self.valor} - {self.descricao}"

    @property
    def efeito_no_saldo(self):
        """Sinal da movimentação no saldo do caixa: 1, -1 ou 0."""
        if self.tipo == "entrada":
            return 1
        if self.tipo == "saida":
            return -1
        return 0
