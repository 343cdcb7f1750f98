from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("eventos_app", "0001_initial"),
        ("cultos_app", "0001_initial"),
        ("contas_app", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Caixa",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=100)),
                ("tipo", models.CharField(choices=[("geral", "Geral"), ("evento", "Evento")], default="geral", help_text="Caixa geral da igreja ou caixa próprio de um evento.", max_length=10)),
                ("saldo", models.DecimalField(decimal_places=2, default=0, help_text="Saldo atual, atualizado pelas movimentações.", max_digits=12)),
                ("saldo_inicial", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                ("evento", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="caixa", to="eventos_app.evento")),
            ],
            options={
                "verbose_name": "Caixa",
                "verbose_name_plural": "Caixas",
                "ordering": ["-criado_em", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Movimentacao",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tipo", models.CharField(choices=[("entrada", "Entrada"), ("saida", "Saída"), ("transferencia", "Transferência")], max_length=15)),
                ("categoria", models.CharField(max_length=100)),
                ("descricao", models.CharField(max_length=255)),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                ("forma_pagamento", models.CharField(choices=[("dinheiro", "Dinheiro"), ("pix", "PIX"), ("cartao", "Cartão"), ("transferencia", "Transferência"), ("outros", "Outros")], default="dinheiro", max_length=20)),
                ("data", models.DateField()),
                ("transferencia_id", models.UUIDField(blank=True, db_index=True, help_text="Identificador comum às duas pernas de uma transferência.", null=True)),
                ("responsavel_nome", models.CharField(blank=True, max_length=150)),
                ("observacoes", models.TextField(blank=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("caixa", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="movimentacoes", to="caixa_app.caixa")),
                ("conta", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="movimentacoes", to="contas_app.contapagar")),
                ("culto", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="movimentacoes", to="cultos_app.culto")),
                ("entrada_culto", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="movimentacao", to="cultos_app.entradaculto")),
                ("responsavel", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="movimentacoes_caixa", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Movimentação",
                "verbose_name_plural": "Movimentações",
                "ordering": ["-data", "-criado_em", "-id"],
            },
        ),
    ]
