from decimal import Decimal

from django.db import models


class Evento(models.Model):
    """
    Evento da igreja (retiro, congresso, cantata...).
    Pode ter um caixa próprio (caixa_app.Caixa com tipo "evento").
    """
    STATUS_CHOICES = [
        ("planejado", "Planejado"),
        ("em_andamento", "Em andamento"),
        ("finalizado", "Finalizado"),
        ("cancelado", "Cancelado"),
    ]

    nome = models.CharField(max_length=150)
    descricao = models.TextField(blank=True)
    data_inicio = models.DateField()
    data_fim = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default="planejado",
    )
    total_entradas = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
        help_text="Soma das entradas do caixa do evento."
    )
    total_saidas = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=0,
        help_text="Soma das saídas do caixa do evento."
    )
    observacoes = models.TextField(blank=True)
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Evento"
        verbose_name_plural = "Eventos"
        ordering = ["-data_inicio", "-id"]

    def __str__(self):
        return f"{self.nome} ({self.data_inicio:%d/%m/%Y})"

    @property
    def resultado(self):
        return (self.total_entradas or Decimal("0")) - (self.total_saidas or Decimal("0"))

    @property
    def caixa_vinculado(self):
        # Reverso do OneToOne em caixa_app.Caixa; None quando o evento não tem caixa
        return getattr(self, "caixa", None)
