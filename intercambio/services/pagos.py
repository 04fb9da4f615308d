import logging
import secrets
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import Count, Q, QuerySet, Sum
from django.utils import timezone

from intercambio.exceptions import Conflict, NotFound
from intercambio.models import Pago, Solicitud

logger = logging.getLogger(__name__)

REALIZADOS = 'realizados'
RECIBIDOS = 'recibidos'


def _generar_transaccion() -> str:
    return f"TRX-{timezone.now():%Y%m%d%H%M%S}-{secrets.token_hex(4).upper()}"


def formatear_pago(p: Pago) -> dict:
    return {
        'id': p.id,
        'transaccion': p.transaccion,
        'monto': float(p.monto),
        'estado': p.estado,
        'solicitud_id': p.solicitud_id,
        'created_at': p.created_at.isoformat() if p.created_at else None,
    }


def pagos_de_hospital(hospital_id: Optional[int] = None, tipo: str = REALIZADOS) -> QuerySet:
    """Payments made by ``hospital_id``'s requests, or received on its listings."""
    qs = Pago.objects.select_related('solicitud')
    if hospital_id:
        if tipo == RECIBIDOS:
            qs = qs.filter(solicitud__publicacion__hospital_id=hospital_id)
        else:
            qs = qs.filter(solicitud__hospital_id=hospital_id)
    return qs.order_by('-created_at', '-id')


def estadisticas(qs: QuerySet) -> dict:
    agg = qs.aggregate(
        pendientes=Count('id', filter=Q(estado=Pago.ESTADO_PENDIENTE)),
        completados=Count('id', filter=Q(estado=Pago.ESTADO_COMPLETADO)),
        recaudado=Sum('monto', filter=Q(estado=Pago.ESTADO_COMPLETADO)),
    )
    return {
        'pendientes': agg['pendientes'],
        'completados': agg['completados'],
        'totalRecaudado': float(agg['recaudado'] or Decimal('0')),
    }


def crear_pago(*, solicitud_id: int, monto: Decimal) -> Pago:
    with transaction.atomic():
        solicitud = Solicitud.objects.select_for_update().filter(id=solicitud_id).first()
        if solicitud is None:
            raise NotFound('Solicitud no encontrada')
        if Pago.objects.filter(solicitud=solicitud).exists():
            raise Conflict('Ya existe un pago registrado para esta solicitud')
        pago = Pago.objects.create(solicitud=solicitud, monto=monto, transaccion=_generar_transaccion())
    logger.info('payment %s registered for request %s', pago.id, solicitud_id)
    return pago


def cambiar_estado_pago(pago_id: int, estado: str) -> Pago:
    pago = Pago.objects.filter(id=pago_id).first()
    if pago is None:
        raise NotFound('Pago no encontrado')
    if pago.estado != estado:
        pago.estado = estado
        pago.save(update_fields=['estado'])
        logger.info('payment %s -> %s', pago.id, estado)
    return pago
