from decimal import Decimal

from django import forms

from .models import FORMA_PAGAMENTO_CHOICES, Caixa, Movimentacao


# ============================================
# CAIXA
# ============================================

class CaixaForm(forms.ModelForm):
    class Meta:
        model = Caixa
        fields = ["nome", "tipo", "evento", "saldo_inicial"]

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("tipo") == "evento" and not cleaned.get("evento"):
            self.add_error("evento", "Caixa de evento precisa de um evento.")
        return cleaned


class CaixaEdicaoForm(forms.Form):
    nome = forms.CharField(max_length=100, required=False)
    saldo_inicial = forms.DecimalField(max_digits=12, decimal_places=2, required=False)


# ============================================
# MOVIMENTAÇÃO
# ============================================

class MovimentacaoForm(forms.ModelForm):
    class Meta:
        model = Movimentacao
        fields = [
            "caixa",
            "tipo",
            "categoria",
            "descricao",
            "valor",
            "forma_pagamento",
            "data",
            "observacoes",
        ]

    def clean_valor(self):
        valor = self.cleaned_data["valor"]
        if valor is not None and valor <= 0:
            raise forms.ValidationError("O valor deve ser maior que zero.")
        return valor


class MovimentacaoEdicaoForm(forms.Form):
    """Só os campos enviados no POST são aplicados."""
    categoria = forms.CharField(max_length=100, required=False)
    descricao = forms.CharField(max_length=255, required=False)
    valor = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"), required=False)
    forma_pagamento = forms.ChoiceField(choices=FORMA_PAGAMENTO_CHOICES, required=False)
    data = forms.DateField(required=False)
    observacoes = forms.CharField(required=False)


class TransferenciaForm(forms.Form):
    origem = forms.ModelChoiceField(queryset=Caixa.objects.all())
    destino = forms.ModelChoiceField(queryset=Caixa.objects.all())
    valor = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    descricao = forms.CharField(max_length=255, required=False)
    data = forms.DateField(required=False)
    observacoes = forms.CharField(required=False)

    def clean(self):
        cleaned = super().clean()
        origem = cleaned.get("origem")
        destino = cleaned.get("destino")
        if origem and destino and origem == destino:
            raise forms.ValidationError("Não é possível transferir para o mesmo caixa.")
        return cleaned


class ClassificacaoEntradaForm(forms.Form):
    categoria = forms.CharField(max_length=100)
    descricao = forms.CharField(max_length=255)
    observacoes = forms.CharField(required=False)


class FiltroLivroForm(forms.Form):
    caixa = forms.ModelChoiceField(queryset=Caixa.objects.all(), required=False)
    inicio = forms.DateField(required=False)
    fim = forms.DateField(required=False)
    tipo = forms.ChoiceField(choices=[("", "Todos")] + Movimentacao.TIPO_CHOICES, required=False)
