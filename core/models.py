from django.conf import settings
from django.db import models


class PerfilUsuario(models.Model):
    """
    Dados de acesso de um usuário do sistema.
    O nome de exibição fica em User.first_name e o login é o e-mail (User.username).
    """
    PAPEL_CHOICES = [
        ("admin", "Administrador"),
        ("tesouraria", "Tesouraria"),
        ("secretaria", "Secretaria"),
        ("pastor", "Pastor"),
        ("auditor", "Auditor"),
    ]

    usuario = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="perfil",
    )
    papel = models.CharField(
        max_length=20,
        choices=PAPEL_CHOICES,
        default="secretaria",
        help_text="Papel que define o que o usuário pode alterar."
    )
    avatar = models.URLField(
        blank=True,
        help_text="URL opcional da foto do usuário."
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Perfil de usuário"
        verbose_name_plural = "Perfis de usuário"
        ordering = ["usuario__first_name"]

    def __str__(self):
        return f"{self.usuario.first_name or self.usuario.username} ({self.get_papel_display()})"
