from django.core.management.base import BaseCommand

from intercambio.models import EstadoDonacion, EstadoEnvio, Transporte

ESTADOS_ENVIO = [(EstadoEnvio.EMPAQUETANDO, 1), (EstadoEnvio.EN_CAMINO, 2), (EstadoEnvio.ENTREGADO, 3)]
ESTADOS_DONACION = [
    EstadoDonacion.DISPONIBLE, EstadoDonacion.SOLICITADA, EstadoDonacion.ASIGNADA, EstadoDonacion.ENTREGADA,
]
TRANSPORTES = ['Terrestre', 'Aéreo', 'Mensajería']


class Command(BaseCommand):
    help = "Ensure the shipment state, donation state and transport catalogs exist (idempotent)."

    def handle(self, *args, **opts):
        for estado, orden in ESTADOS_ENVIO:
            _, created = EstadoEnvio.objects.get_or_create(estado=estado, defaults={'orden': orden})
            self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'ok'}: estado envio {estado}"))
        for nombre in ESTADOS_DONACION:
            _, created = EstadoDonacion.objects.get_or_create(nombre=nombre)
            self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'ok'}: estado donacion {nombre}"))
        for nombre in TRANSPORTES:
            _, created = Transporte.objects.get_or_create(nombre=nombre)
            self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'ok'}: transporte {nombre}"))
        self.stdout.write(self.style.SUCCESS("Catalogs ensured."))
