from django import forms

from .models import PerfilUsuario


class LoginForm(forms.Form):
    email = forms.EmailField()
    senha = forms.CharField(widget=forms.PasswordInput)


class UsuarioForm(forms.Form):
    nome = forms.CharField(max_length=150)
    email = forms.EmailField()
    papel = forms.ChoiceField(choices=PerfilUsuario.PAPEL_CHOICES)
    senha = forms.CharField(
        required=False,
        min_length=6,
        widget=forms.PasswordInput,
        help_text="Opcional. Sem senha o usuário precisa usar a recuperação de senha.",
    )
    avatar = forms.URLField(required=False)


class UsuarioEdicaoForm(forms.Form):
    nome = forms.CharField(max_length=150, required=False)
    email = forms.EmailField(required=False)
    papel = forms.ChoiceField(choices=PerfilUsuario.PAPEL_CHOICES, required=False)
    avatar = forms.URLField(required=False)


class SenhaForm(forms.Form):
    nova_senha = forms.CharField(min_length=6, widget=forms.PasswordInput)
