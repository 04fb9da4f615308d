import logging
from datetime import timedelta
from typing import Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.utils import timezone

from intercambio.exceptions import NotFound
from intercambio.models import Hospital, Notificacion

logger = logging.getLogger(__name__)

LIMITE_LISTADO = 7
MAX_POR_HOSPITAL = 20
DIAS_LEIDAS = 5
DIAS_MAXIMO = 30


def grupo_hospital(hospital_id: int) -> str:
    return f"notificaciones.{hospital_id}"


def formatear_notificacion(n: Notificacion) -> dict:
    return {
        'id': n.id,
        'titulo': n.titulo,
        'mensaje': n.mensaje,
        'tipo': n.tipo,
        'hospital_id': n.hospital_id,
        'leida': n.leida,
        'referencia_id': n.referencia_id,
        'referencia_tipo': n.referencia_tipo,
        'created_at': n.created_at.isoformat() if n.created_at else None,
    }


def _difundir(notificacion: Notificacion) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    payload = {'type': 'notificacion.nueva', **formatear_notificacion(notificacion)}
    async_to_sync(channel_layer.group_send)(grupo_hospital(notificacion.hospital_id), payload)


def crear_notificacion(*, hospital_id: int, titulo: str, mensaje: str, tipo: str,
                       referencia_id: Optional[int] = None, referencia_tipo: Optional[str] = None) -> Notificacion:
    """Persist a notification and push it to the hospital's live channel.

    The push happens after commit so listeners never see a row that a
    surrounding transaction later rolls back.
    """
    if not Hospital.objects.filter(id=hospital_id).exists():
        raise NotFound('Hospital no encontrado')
    n = Notificacion.objects.create(
        hospital_id=hospital_id,
        titulo=titulo,
        mensaje=mensaje,
        tipo=tipo,
        referencia_id=referencia_id,
        referencia_tipo=referencia_tipo,
    )
    transaction.on_commit(lambda: _difundir(n))
    return n


def listar_notificaciones(hospital_id: int) -> list[Notificacion]:
    return list(Notificacion.objects.filter(hospital_id=hospital_id).order_by('-created_at', '-id')[:LIMITE_LISTADO])


def marcar_leida(notificacion_id: int) -> Notificacion:
    n = Notificacion.objects.filter(id=notificacion_id).first()
    if n is None:
        raise NotFound('Notificación no encontrada')
    if not n.leida:
        n.leida = True
        n.save(update_fields=['leida'])
    return n


def eliminar_notificacion(notificacion_id: int) -> None:
    deleted, _ = Notificacion.objects.filter(id=notificacion_id).delete()
    if not deleted:
        raise NotFound('Notificación no encontrada')


def depurar_notificaciones(hospital_id: Optional[int] = None, *, ahora=None) -> int:
    """Delete stale notifications.

    Read ones older than 5 days and any older than 30 days go; then only
    the newest 20 per hospital are kept.  Returns the number deleted.
    """
    ahora = ahora or timezone.now()
    qs = Notificacion.objects.all()
    if hospital_id is not None:
        qs = qs.filter(hospital_id=hospital_id)

    total = 0
    total += qs.filter(leida=True, created_at__lt=ahora - timedelta(days=DIAS_LEIDAS)).delete()[0]
    total += qs.filter(created_at__lt=ahora - timedelta(days=DIAS_MAXIMO)).delete()[0]

    hospitales = [hospital_id] if hospital_id is not None else list(
        qs.values_list('hospital_id', flat=True).distinct()
    )
    for hid in hospitales:
        sobrantes = list(
            Notificacion.objects.filter(hospital_id=hid)
            .order_by('-created_at', '-id')
            .values_list('id', flat=True)[MAX_POR_HOSPITAL:]
        )
        if sobrantes:
            total += Notificacion.objects.filter(id__in=sobrantes).delete()[0]

    if total:
        logger.info('notification cleanup removed %s rows', total)
    return total
