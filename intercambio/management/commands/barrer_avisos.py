from django.core.management.base import BaseCommand
from django.utils import timezone

from intercambio.services.avisos import barrer_avisos_vencidos
from intercambio.services.notificaciones import depurar_notificaciones


class Command(BaseCommand):
    help = "Unpublish expired notices and purge stale notifications. Meant to run from cron."

    def add_arguments(self, parser):
        parser.add_argument('--sin-notificaciones', action='store_true',
                            help="Only sweep notices; leave notifications untouched.")

    def handle(self, *args, **opts):
        now = timezone.now()
        avisos = barrer_avisos_vencidos(timezone.localdate(now))
        self.stdout.write(self.style.SUCCESS(f"avisos despublicados: {avisos}"))
        if not opts['sin_notificaciones']:
            borradas = depurar_notificaciones(ahora=now)
            self.stdout.write(self.style.SUCCESS(f"notificaciones eliminadas: {borradas}"))
