from django.core.management.base import BaseCommand
from django.db import transaction


class Command(BaseCommand):
    help = "Recalcula o saldo de todos os caixas a partir das movimentações (saldo inicial + entradas - saídas)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--simular",
            action="store_true",
            help="Só mostra as diferenças, sem gravar.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        from caixa_app.models import Caixa
        from caixa_app.services import recalcular_saldo

        simular = options["simular"]
        corrigidos = 0

        for caixa in Caixa.objects.order_by("id"):
            anterior, novo = recalcular_saldo(caixa)
            if anterior != novo:
                corrigidos += 1
                self.stdout.write(self.style.WARNING(
                    f"⚠️  {caixa.nome}: {anterior} -> {novo}"
                ))

        if simular:
            transaction.set_rollback(True)
            self.stdout.write(self.style.SUCCESS(f"✔ Simulação: {corrigidos} caixa(s) com diferença."))
        else:
            self.stdout.write(self.style.SUCCESS(f"✔ {corrigidos} caixa(s) corrigido(s)."))
