from decimal import Decimal

from django import forms

from caixa_app.models import FORMA_PAGAMENTO_CHOICES

from .models import Culto, EntradaCulto, ModeloCulto


class ModeloCultoForm(forms.ModelForm):
    class Meta:
        model = ModeloCulto
        fields = [
            "nome",
            "tipo",
            "horario",
            "dia_semana",
            "recorrente",
            "ativo",
            "observacoes",
        ]


class CultoForm(forms.ModelForm):
    class Meta:
        model = Culto
        fields = [
            "nome",
            "tipo",
            "data",
            "horario",
            "status",
            "observacoes",
            "modelo",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["status"].required = False


class EntradaCultoForm(forms.Form):
    tipo = forms.ChoiceField(choices=EntradaCulto.TIPO_CHOICES)
    valor = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    forma_pagamento = forms.ChoiceField(choices=FORMA_PAGAMENTO_CHOICES)
    observacoes = forms.CharField(required=False)


class GerarCultosForm(forms.Form):
    semanas = forms.IntegerField(min_value=1, max_value=52, required=False)
