import logging
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet

from intercambio.exceptions import Conflict, NotFound
from intercambio.models import Hospital, Publicacion, Solicitud
from intercambio.services.notificaciones import crear_notificacion

logger = logging.getLogger(__name__)


def formatear_solicitud(s: Solicitud) -> dict:
    pub = s.publicacion
    return {
        'id': s.id,
        'publicacion_id': s.publicacion_id,
        'hospital_id': s.hospital_id,
        'hospital': s.hospital.nombre if s.hospital_id else None,
        'cantidad': s.cantidad,
        'estado': s.estado,
        'publicacion': {
            'id': pub.id,
            'principioactivo': pub.principioactivo,
            'cantidad': pub.cantidad,
            'hospital_id': pub.hospital_id,
            'estado': pub.estado,
        },
        'created_at': s.created_at.isoformat() if s.created_at else None,
    }


def listar_solicitudes(hospital_id: Optional[int] = None, publicacion_hospital_id: Optional[int] = None,
                       estado: Optional[str] = None) -> QuerySet:
    """Requests made by ``hospital_id`` and/or received on ``publicacion_hospital_id``'s listings."""
    qs = Solicitud.objects.select_related('hospital', 'publicacion')
    if hospital_id:
        qs = qs.filter(hospital_id=hospital_id)
    if publicacion_hospital_id:
        qs = qs.filter(publicacion__hospital_id=publicacion_hospital_id)
    if estado:
        qs = qs.filter(estado=estado)
    return qs.order_by('-created_at', '-id')


def obtener_solicitud(solicitud_id: int) -> Solicitud:
    s = Solicitud.objects.select_related('hospital', 'publicacion').filter(id=solicitud_id).first()
    if s is None:
        raise NotFound('Solicitud no encontrada')
    return s


def crear_solicitud(*, publicacion_id: int, hospital_id: int, cantidad: int) -> Solicitud:
    with transaction.atomic():
        publicacion = Publicacion.objects.select_for_update().filter(id=publicacion_id).first()
        if publicacion is None:
            raise NotFound('Publicación no encontrada')
        solicitante = Hospital.objects.filter(id=hospital_id).first()
        if solicitante is None:
            raise NotFound('Hospital no encontrado')
        if publicacion.hospital_id == solicitante.id:
            raise Conflict('No puedes solicitar tu propia publicación')
        if publicacion.estado == Publicacion.ESTADO_CERRADA:
            raise Conflict('Esta publicación ya no está disponible')
        if cantidad > publicacion.cantidad:
            raise Conflict(f'La cantidad solicitada supera la disponible ({publicacion.cantidad})')

        solicitud = Solicitud.objects.create(publicacion=publicacion, hospital=solicitante, cantidad=cantidad)
        crear_notificacion(
            hospital_id=publicacion.hospital_id,
            titulo='Nueva solicitud de medicamento',
            mensaje=f'{solicitante.nombre} ha solicitado tu publicación de {publicacion.principioactivo}',
            tipo='solicitud',
            referencia_id=solicitud.id,
            referencia_tipo='solicitud',
        )

    logger.info('request %s created on publication %s', solicitud.id, publicacion.id)
    return solicitud


def cambiar_estado_solicitud(solicitud_id: int, nuevo_estado: str) -> Solicitud:
    """Approve or reject a pending request.

    Approval reserves the publication and notifies the requesting
    hospital.  Only ``Pendiente`` requests can change state.
    """
    with transaction.atomic():
        solicitud = (
            Solicitud.objects.select_for_update(of=('self',))
            .select_related('hospital', 'publicacion')
            .filter(id=solicitud_id)
            .first()
        )
        if solicitud is None:
            raise NotFound('Solicitud no encontrada')
        if solicitud.estado != Solicitud.ESTADO_PENDIENTE:
            raise Conflict(f"La solicitud ya está en estado '{solicitud.estado}'")

        solicitud.estado = nuevo_estado
        solicitud.save(update_fields=['estado'])

        if nuevo_estado == Solicitud.ESTADO_APROBADA:
            publicacion = solicitud.publicacion
            publicacion.estado = Publicacion.ESTADO_RESERVADA
            publicacion.save(update_fields=['estado', 'updated_at'])
            crear_notificacion(
                hospital_id=solicitud.hospital_id,
                titulo='Solicitud aprobada',
                mensaje=f'Tu solicitud de {publicacion.principioactivo} fue aprobada',
                tipo='solicitud',
                referencia_id=solicitud.id,
                referencia_tipo='solicitud',
            )

    logger.info('request %s -> %s', solicitud.id, nuevo_estado)
    return solicitud
