from django.db import models

from caixa_app.models import FORMA_PAGAMENTO_CHOICES


class Fornecedor(models.Model):
    nome = models.CharField(max_length=150)
    contato = models.CharField(max_length=150, blank=True)
    telefone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    categoria = models.CharField(
        max_length=100,
        blank=True,
        help_text="Categoria principal das contas deste fornecedor."
    )
    observacoes = models.TextField(blank=True)
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Fornecedor"
        verbose_name_plural = "Fornecedores"
        ordering = ["nome"]

    def __str__(self):
        return self.nome


class CategoriaConta(models.Model):
    """
    Categorias das contas a pagar (aluguel, água, luz...).
    As contas guardam o nome da categoria; por isso uma categoria em uso
    é desativada em vez de excluída.
    """
    nome = models.CharField(max_length=100, unique=True)
    descricao = models.CharField(max_length=255, blank=True)
    ativa = models.BooleanField(
        default=True,
        help_text="Categorias inativas não aparecem para novas contas."
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Categoria de conta"
        verbose_name_plural = "Categorias de conta"
        ordering = ["nome"]

    def __str__(self):
        return self.nome


class ContaPagar(models.Model):
    STATUS_CHOICES = [
        ("pendente", "Pendente"),
        ("pago", "Pago"),
        ("atrasado", "Atrasado"),
        ("cancelado", "Cancelado"),
    ]

    RECORRENCIA_CHOICES = [
        ("mensal", "Mensal"),
        ("semanal", "Semanal"),
        ("anual", "Anual"),
        ("unica", "Única"),
    ]

    CENTRO_CUSTO_CHOICES = [
        ("geral", "Geral"),
        ("evento", "Evento"),
    ]

    fornecedor = models.ForeignKey(
        Fornecedor,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="contas",
    )
    fornecedor_nome = models.CharField(
        max_length=150,
        blank=True,
        help_text="Nome do fornecedor quando não há cadastro."
    )
    descricao = models.CharField(max_length=255)
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    vencimento = models.DateField()
    data_pagamento = models.DateField(null=True, blank=True)
    recorrencia = models.CharField(
        max_length=10,
        choices=RECORRENCIA_CHOICES,
        null=True,
        blank=True,
    )
    categoria = models.CharField(max_length=100)
    centro_custo = models.CharField(
        max_length=10,
        choices=CENTRO_CUSTO_CHOICES,
        default="geral",
    )
    evento = models.ForeignKey(
        "eventos_app.Evento",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="contas",
    )
    forma_pagamento = models.CharField(
        max_length=20,
        choices=FORMA_PAGAMENTO_CHOICES,
        blank=True,
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="pendente")
    observacoes = models.TextField(blank=True)
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Conta a pagar"
        verbose_name_plural = "Contas a pagar"
        ordering = ["vencimento", "id"]

    def __str__(self):
        return f"{self.descricao} - {self.vencimento:%d/%m/%Y}"

    @property
    def nome_fornecedor(self):
        if self.fornecedor_id:
            return self.fornecedor.nome
        return self.fornecedor_nome

    @property
    def recorrente(self):
        return self.recorrencia not in (None, "", "unica")
