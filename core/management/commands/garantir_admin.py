from django.core.management.base import BaseCommand

from core.services import garantir_admin_padrao


class Command(BaseCommand):
    help = "Garante que o administrador padrão exista (não altera a senha de um admin existente)."

    def handle(self, *args, **options):
        usuario, criado = garantir_admin_padrao()

        if criado:
            self.stdout.write(self.style.WARNING(
                f"⚠️  Administrador criado: {usuario.username}. Troque a senha padrão."
            ))
        else:
            self.stdout.write(self.style.SUCCESS(
                f"✔ Administrador já existe: {usuario.username}"
            ))
