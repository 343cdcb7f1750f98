from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Evento",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=150)),
                ("descricao", models.TextField(blank=True)),
                ("data_inicio", models.DateField()),
                ("data_fim", models.DateField(blank=True, null=True)),
                ("status", models.CharField(choices=[("planejado", "Planejado"), ("em_andamento", "Em andamento"), ("finalizado", "Finalizado"), ("cancelado", "Cancelado")], default="planejado", max_length=20)),
                ("total_entradas", models.DecimalField(decimal_places=2, default=0, help_text="Soma das entradas do caixa do evento.", max_digits=12)),
                ("total_saidas", models.DecimalField(decimal_places=2, default=0, help_text="Soma das saídas do caixa do evento.", max_digits=12)),
                ("observacoes", models.TextField(blank=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Evento",
                "verbose_name_plural": "Eventos",
                "ordering": ["-data_inicio", "-id"],
            },
        ),
    ]
