from django import forms

from caixa_app.models import FORMA_PAGAMENTO_CHOICES

from .models import CategoriaConta, ContaPagar, Fornecedor


# ============================================
# CONTA A PAGAR
# ============================================

class ContaPagarForm(forms.ModelForm):
    class Meta:
        model = ContaPagar
        fields = [
            "fornecedor",
            "fornecedor_nome",
            "descricao",
            "valor",
            "vencimento",
            "recorrencia",
            "categoria",
            "centro_custo",
            "evento",
            "forma_pagamento",
            "status",
            "observacoes",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["status"].required = False
        self.fields["centro_custo"].required = False

    def clean_categoria(self):
        nome = self.cleaned_data["categoria"].strip()
        categoria = CategoriaConta.objects.filter(nome=nome).first()
        # Conta já existente pode manter uma categoria que foi desativada depois
        mantendo = self.instance.pk and self.instance.categoria == nome
        if categoria is None or (not categoria.ativa and not mantendo):
            raise forms.ValidationError("Categoria inexistente ou inativa.")
        return nome

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("centro_custo") == "evento" and not cleaned.get("evento"):
            self.add_error("evento", "Contas do centro de custo evento precisam de um evento.")
        return cleaned


class PagamentoForm(forms.Form):
    data_pagamento = forms.DateField(required=False)
    forma_pagamento = forms.ChoiceField(choices=FORMA_PAGAMENTO_CHOICES)


class GerarRecorrentesForm(forms.Form):
    quantidade = forms.IntegerField(min_value=1, max_value=60, required=False)


# ============================================
# CATEGORIA E FORNECEDOR
# ============================================

class CategoriaContaForm(forms.Form):
    nome = forms.CharField(max_length=100)
    descricao = forms.CharField(max_length=255, required=False)


class FornecedorForm(forms.ModelForm):
    class Meta:
        model = Fornecedor
        fields = [
            "nome",
            "contato",
            "telefone",
            "email",
            "categoria",
            "observacoes",
        ]
