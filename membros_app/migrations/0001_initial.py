from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Membro",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=150)),
                ("data_nascimento", models.DateField(blank=True, null=True)),
                ("telefone", models.CharField(blank=True, max_length=30)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("endereco", models.CharField(blank=True, max_length=255)),
                ("data_entrada", models.DateField(default=django.utils.timezone.localdate, help_text="Data de entrada na igreja.")),
                ("status", models.CharField(choices=[("ativo", "Ativo"), ("inativo", "Inativo"), ("visitante", "Visitante")], default="ativo", max_length=10)),
                ("ministerios", models.JSONField(blank=True, default=list, help_text="Lista de ministérios em que o membro serve.")),
                ("observacoes", models.TextField(blank=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Membro",
                "verbose_name_plural": "Membros",
                "ordering": ["nome"],
            },
        ),
    ]
