from django.db import models

from caixa_app.models import FORMA_PAGAMENTO_CHOICES


TIPO_CULTO_CHOICES = [
    ("culto_familia", "Culto da Família"),
    ("celebracao", "Celebração"),
    ("oracao", "Oração"),
    ("jovens", "Jovens"),
    ("mulheres", "Mulheres"),
    ("homens", "Homens"),
    ("especial", "Especial"),
]

DIA_SEMANA_CHOICES = [
    (0, "Domingo"),
    (1, "Segunda-feira"),
    (2, "Terça-feira"),
    (3, "Quarta-feira"),
    (4, "Quinta-feira"),
    (5, "Sexta-feira"),
    (6, "Sábado"),
]


class ModeloCulto(models.Model):
    """
    Configuração de um culto recorrente (ex: Culto da Família, domingo 18:00).
    Usado para gerar a agenda semanal de cultos.
    """
    nome = models.CharField(max_length=150)
    tipo = models.CharField(max_length=20, choices=TIPO_CULTO_CHOICES)
    horario = models.TimeField()
    dia_semana = models.PositiveSmallIntegerField(
        choices=DIA_SEMANA_CHOICES,
        null=True,
        blank=True,
        help_text="0 = domingo ... 6 = sábado. Sem dia, o modelo não gera cultos."
    )
    recorrente = models.BooleanField(default=True)
    ativo = models.BooleanField(default=True)
    observacoes = models.TextField(blank=True)
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Modelo de culto"
        verbose_name_plural = "Modelos de culto"
        ordering = ["nome"]

    def __str__(self):
        return f"{self.nome} ({self.horario:%H:%M})"


class Culto(models.Model):
    STATUS_CHOICES = [
        ("agendado", "Agendado"),
        ("em_andamento", "Em andamento"),
        ("finalizado", "Finalizado"),
    ]

    modelo = models.ForeignKey(
        ModeloCulto,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="cultos",
    )
    nome = models.CharField(max_length=150)
    tipo = models.CharField(max_length=20, choices=TIPO_CULTO_CHOICES)
    data = models.DateField()
    horario = models.TimeField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="agendado")
    observacoes = models.TextField(blank=True)
    total_entradas = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
        help_text="Soma das entradas registradas no culto."
    )
    totais_por_forma = models.JSONField(
        default=dict,
        blank=True,
        help_text="Totais do fechamento por forma de pagamento."
    )
    totais_por_tipo = models.JSONField(
        default=dict,
        blank=True,
        help_text="Totais do fechamento por tipo de entrada."
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Culto"
        verbose_name_plural = "Cultos"
        ordering = ["-data", "-horario"]

    def __str__(self):
        return f"{self.nome} - {self.data:%d/%m/%Y} {self.horario:%H:%M}"


class EntradaCulto(models.Model):
    TIPO_CHOICES = [
        ("dizimo", "Dízimo"),
        ("oferta", "Oferta"),
        ("doacao", "Doação"),
        ("campanha", "Campanha"),
        ("outros", "Outros"),
    ]

    culto = models.ForeignKey(
        Culto,
        on_delete=models.CASCADE,
        related_name="entradas",
    )
    tipo = models.CharField(max_length=20, choices=TIPO_CHOICES)
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    forma_pagamento = models.CharField(max_length=20, choices=FORMA_PAGAMENTO_CHOICES)
    observacoes = models.TextField(blank=True)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Entrada de culto"
        verbose_name_plural = "Entradas de culto"
        ordering = ["-criado_em", "-id"]

    def __str__(self):
        return f"{self.get_tipo_display()} {self.valor} ({self.culto.nome})"
