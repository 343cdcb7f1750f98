from django.db import migrations


def seed_categorias(apps, schema_editor):
    CategoriaConta = apps.get_model("contas_app", "CategoriaConta")

    categorias = [
        ("aluguel", "Aluguel do templo ou salas"),
        ("agua", "Conta de água"),
        ("luz", "Conta de energia elétrica"),
        ("internet", "Internet e telefone"),
        ("som", "Equipamentos e manutenção de som"),
        ("manutencao", "Manutenção predial"),
        ("acao_social", "Ação social"),
        ("salarios", "Salários e prebendas"),
        ("outros", "Outras despesas"),
    ]

    for nome, descricao in categorias:
        CategoriaConta.objects.update_or_create(
            nome=nome,
            defaults={
                "descricao": descricao,
                "ativa": True,
            }
        )


def remover_categorias(apps, schema_editor):
    # Não remove: as contas guardam o nome da categoria
    pass


class Migration(migrations.Migration):

    dependencies = [
        ("contas_app", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_categorias, remover_categorias),
    ]
