from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("eventos_app", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Fornecedor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=150)),
                ("contato", models.CharField(blank=True, max_length=150)),
                ("telefone", models.CharField(blank=True, max_length=30)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("categoria", models.CharField(blank=True, help_text="Categoria principal das contas deste fornecedor.", max_length=100)),
                ("observacoes", models.TextField(blank=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Fornecedor",
                "verbose_name_plural": "Fornecedores",
                "ordering": ["nome"],
            },
        ),
        migrations.CreateModel(
            name="CategoriaConta",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=100, unique=True)),
                ("descricao", models.CharField(blank=True, max_length=255)),
                ("ativa", models.BooleanField(default=True, help_text="Categorias inativas não aparecem para novas contas.")),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Categoria de conta",
                "verbose_name_plural": "Categorias de conta",
                "ordering": ["nome"],
            },
        ),
        migrations.CreateModel(
            name="ContaPagar",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("fornecedor_nome", models.CharField(blank=True, help_text="Nome do fornecedor quando não há cadastro.", max_length=150)),
                ("descricao", models.CharField(max_length=255)),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                ("vencimento", models.DateField()),
                ("data_pagamento", models.DateField(blank=True, null=True)),
                ("recorrencia", models.CharField(blank=True, choices=[("mensal", "Mensal"), ("semanal", "Semanal"), ("anual", "Anual"), ("unica", "Única")], max_length=10, null=True)),
                ("categoria", models.CharField(max_length=100)),
                ("centro_custo", models.CharField(choices=[("geral", "Geral"), ("evento", "Evento")], default="geral", max_length=10)),
                ("forma_pagamento", models.CharField(blank=True, choices=[("dinheiro", "Dinheiro"), ("pix", "PIX"), ("cartao", "Cartão"), ("transferencia", "Transferência"), ("outros", "Outros")], max_length=20)),
                ("status", models.CharField(choices=[("pendente", "Pendente"), ("pago", "Pago"), ("atrasado", "Atrasado"), ("cancelado", "Cancelado")], default="pendente", max_length=10)),
                ("observacoes", models.TextField(blank=True)),
                ("criado_em", models.DateTimeField(auto_now_add=True)),
                ("atualizado_em", models.DateTimeField(auto_now=True)),
                ("evento", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="contas", to="eventos_app.evento")),
                ("fornecedor", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="contas", to="contas_app.fornecedor")),
            ],
            options={
                "verbose_name": "Conta a pagar",
                "verbose_name_plural": "Contas a pagar",
                "ordering": ["vencimento", "id"],
            },
        ),
    ]
