from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PerfilUsuario",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("papel", models.CharField(choices=[("admin", "Administrador"), ("tesouraria", "Tesouraria"), ("secretaria", "Secretaria"), ("pastor", "Pastor"), ("auditor", "Auditor")], default="secretaria", help_text="Papel que define o que o usuário pode alterar.", max_length=20)),
                ("avatar", models.URLField(blank=True, help_text="URL opcional da foto do usuário.")),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                ("usuario", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="perfil", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Perfil de usuário",
                "verbose_name_plural": "Perfis de usuário",
                "ordering": ["usuario__first_name"],
            },
        ),
    ]
