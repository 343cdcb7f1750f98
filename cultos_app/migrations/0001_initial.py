from django.db import migrations, models
import django.db.models.deletion


TIPO_CULTO = [("culto_familia", "Culto da Família"), ("celebracao", "Celebração"), ("oracao", "Oração"), ("jovens", "Jovens"), ("mulheres", "Mulheres"), ("homens", "Homens"), ("especial", "Especial")]
FORMA_PAGAMENTO = [("dinheiro", "Dinheiro"), ("pix", "PIX"), ("cartao", "Cartão"), ("transferencia", "Transferência"), ("outros", "Outros")]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ModeloCulto",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=150)),
                ("tipo", models.CharField(choices=TIPO_CULTO, max_length=20)),
                ("horario", models.TimeField()),
                ("dia_semana", models.PositiveSmallIntegerField(blank=True, choices=[(0, "Domingo"), (1, "Segunda-feira"), (2, "Terça-feira"), (3, "Quarta-feira"), (4, "Quinta-feira"), (5, "Sexta-feira"), (6, "Sábado")], help_text="0 = domingo ... 6 = sábado. Sem dia, o modelo não gera cultos.", null=True)),
                ("recorrente", models.BooleanField(default=True)),
                ("ativo", models.BooleanField(default=True)),
                ("observacoes", models.TextField(blank=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Modelo de culto",
                "verbose_name_plural": "Modelos de culto",
                "ordering": ["nome"],
            },
        ),
        migrations.CreateModel(
            name="Culto",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=150)),
                ("tipo", models.CharField(choices=TIPO_CULTO, max_length=20)),
                ("data", models.DateField()),
                ("horario", models.TimeField()),
                ("status", models.CharField(choices=[("agendado", "Agendado"), ("em_andamento", "Em andamento"), ("finalizado", "Finalizado")], default="agendado", max_length=20)),
                ("observacoes", models.TextField(blank=True)),
                ("total_entradas", models.DecimalField(decimal_places=2, default=0, help_text="Soma das entradas registradas no culto.", max_digits=12)),
                ("totais_por_forma", models.JSONField(blank=True, default=dict, help_text="Totais do fechamento por forma de pagamento.")),
                ("totais_por_tipo", models.JSONField(blank=True, default=dict, help_text="Totais do fechamento por tipo de entrada.")),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                ("modelo", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="cultos", to="cultos_app.modeloculto")),
            ],
            options={
                "verbose_name": "Culto",
                "verbose_name_plural": "Cultos",
                "ordering": ["-data", "-horario"],
            },
        ),
        migrations.CreateModel(
            name="EntradaCulto",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tipo", models.CharField(choices=[("dizimo", "Dízimo"), ("oferta", "Oferta"), ("doacao", "Doação"), ("campanha", "Campanha"), ("outros", "Outros")], max_length=20)),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                ("forma_pagamento", models.CharField(choices=FORMA_PAGAMENTO, max_length=20)),
                ("observacoes", models.TextField(blank=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("culto", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="entradas", to="cultos_app.culto")),
            ],
            options={
                "verbose_name": "Entrada de culto",
                "verbose_name_plural": "Entradas de culto",
                "ordering": ["-criado_em", "-id"],
            },
        ),
    ]
