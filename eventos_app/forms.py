from django import forms

from .models import Evento


class EventoForm(forms.ModelForm):
    criar_caixa = forms.BooleanField(required=False, initial=True)

    class Meta:
        model = Evento
        fields = [
            "nome",
            "descricao",
            "data_inicio",
            "data_fim",
            "status",
            "observacoes",
        ]

    def clean(self):
        cleaned = super().clean()
        inicio = cleaned.get("data_inicio")
        fim = cleaned.get("data_fim")
        if inicio and fim and fim < inicio:
            self.add_error("data_fim", "A data de término não pode ser anterior à data de início.")
        return cleaned

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["status"].required = False
