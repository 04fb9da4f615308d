from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.db.models import Count, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from intercambio.models import (
    Donacion, EstadoEnvio, Envio, Hospital, Medicamento, Pago, Publicacion, Solicitud, Usuario,
)

VENTANA_MESES = 12
ESTADOS_RECIBIDOS = (EstadoEnvio.ENTREGADO, EstadoEnvio.EN_CAMINO, EstadoEnvio.EMPAQUETANDO)


def inicio_ventana(ahora: datetime, meses: int = VENTANA_MESES) -> datetime:
    """Same instant ``meses`` months earlier, clamped to the month's last day."""
    total = ahora.year * 12 + (ahora.month - 1) - meses
    year, month = divmod(total, 12)
    month += 1
    for day in (ahora.day, 30, 29, 28):
        try:
            return ahora.replace(year=year, month=month, day=day)
        except ValueError:
            continue
    raise ValueError(f'cannot shift {ahora!r} by {meses} months')


def _por_mes(qs, campo: str = 'created_at') -> list[dict]:
    filas = (
        qs.annotate(mes=TruncMonth(campo))
        .values('mes')
        .annotate(total=Count('id'))
        .order_by('mes')
    )
    return [
        {'mes': fila['mes'].strftime('%Y-%m'), 'total': int(fila['total'])}
        for fila in filas
        if fila['mes'] is not None and fila['total']
    ]


def calcular_metricas(ahora: Optional[datetime] = None) -> dict:
    """Dashboard counters and monthly series, recomputed on every call.

    Months without activity are left out of the series.
    ``publicacionesDisponibles`` is publications minus requests, an
    approximation that ignores publication state.
    """
    ahora = ahora or timezone.now()
    desde = inicio_ventana(ahora)

    total_publicaciones = Publicacion.objects.count()
    total_solicitudes = Solicitud.objects.count()
    facturado = Pago.objects.filter(estado=Pago.ESTADO_COMPLETADO).aggregate(total=Sum('monto'))['total']

    envios = Envio.objects.filter(created_at__gte=desde, created_at__lte=ahora)

    return {
        'metricas': {
            'totalUsuarios': Usuario.objects.count(),
            'totalHospitales': Hospital.objects.count(),
            'totalDonaciones': Donacion.objects.count(),
            'totalPublicaciones': total_publicaciones,
            'totalFacturado': float(facturado or Decimal('0')),
            'totalMedicamentos': Medicamento.objects.count(),
            'totalSolicitudes': total_solicitudes,
            'publicacionesDisponibles': total_publicaciones - total_solicitudes,
        },
        'publicacionesPorMes': _por_mes(
            Publicacion.objects.filter(created_at__gte=desde, created_at__lte=ahora)
        ),
        'comparacion': {
            'enviosEntregados': _por_mes(envios.filter(estado_envio__estado=EstadoEnvio.ENTREGADO)),
            'enviosRecibidos': _por_mes(envios.filter(estado_envio__estado__in=ESTADOS_RECIBIDOS)),
        },
    }
