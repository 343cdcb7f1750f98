from django import forms

from .models import Membro
from .services import separar_ministerios


class MembroForm(forms.ModelForm):
    ministerios = forms.CharField(
        required=False,
        help_text="Ministérios separados por ponto e vírgula.",
    )

    class Meta:
        model = Membro
        fields = [
            "nome",
            "data_nascimento",
            "telefone",
            "email",
            "endereco",
            "data_entrada",
            "status",
            "ministerios",
            "observacoes",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["data_entrada"].required = False
        self.fields["status"].required = False
        if self.instance.pk and not self.is_bound:
            self.initial["ministerios"] = "; ".join(self.instance.ministerios or [])

    def clean_ministerios(self):
        return separar_ministerios(self.cleaned_data.get("ministerios"))

    def clean_status(self):
        return self.cleaned_data.get("status") or self.instance.status or "ativo"

    def clean_data_entrada(self):
        return self.cleaned_data.get("data_entrada") or self.instance.data_entrada


class ImportacaoForm(forms.Form):
    arquivo = forms.FileField()
