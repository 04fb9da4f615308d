"""
Donation-to-shipment workflow.

A donation receives exactly one shipment, created in the initial
``Empaquetando`` state, which then only moves forward through the
``EstadoEnvio`` catalog order.  Both the shipment insert and the
donation link happen inside one transaction with the donation row
locked, and the one-to-one column makes a second link impossible at
the database level as well.
"""
import logging
import secrets
from typing import Optional

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from intercambio.exceptions import Conflict, InvariantViolation, NotFound, PinIncorrecto
from intercambio.models import Donacion, EncargadoLogistica, EstadoDonacion, EstadoEnvio, Envio, Transporte
from intercambio.services.notificaciones import crear_notificacion

logger = logging.getLogger(__name__)

# Notification sent to the receiving hospital for each state reached
MENSAJES_ESTADO = {
    EstadoEnvio.EN_CAMINO: ('Envío en camino', 'El envío de {medicamento} está en camino hacia tu hospital', 'pin_envio'),
    EstadoEnvio.ENTREGADO: ('Envío entregado', 'El envío de {medicamento} ha sido entregado correctamente', 'estado_envio'),
}


def estado_inicial() -> EstadoEnvio:
    estado = EstadoEnvio.objects.filter(estado=EstadoEnvio.INICIAL).first()
    if estado is None:
        raise InvariantViolation(f"No se encontró el estado '{EstadoEnvio.INICIAL}' en la base de datos")
    return estado


def formatear_envio(envio: Envio) -> dict:
    return {
        'id': envio.id,
        'transporte_id': envio.transporte_id,
        'estado_envio_id': envio.estado_envio_id,
        'estado': envio.estado_envio.estado,
        'encargado_logistica_id': envio.encargado_logistica_id,
        'fecha_recoleccion': envio.fecha_recoleccion.isoformat() if envio.fecha_recoleccion else None,
        'fecha_entrega_estimada': envio.fecha_entrega_estimada.isoformat() if envio.fecha_entrega_estimada else None,
        'descripcion': envio.descripcion,
        'created_at': envio.created_at.isoformat() if envio.created_at else None,
        'updated_at': envio.updated_at.isoformat() if envio.updated_at else None,
    }


def crear_envio(*, donacion_id: int, transporte_id: int, fecha_recoleccion, fecha_entrega_estimada,
                descripcion: Optional[str] = None, encargado_logistica_id: Optional[int] = None) -> Envio:
    with transaction.atomic():
        donacion = Donacion.objects.select_for_update().filter(id=donacion_id).first()
        if donacion is None:
            raise NotFound('Donación no encontrada')
        if donacion.envio_id:
            raise Conflict('Esta donación ya tiene un envío asignado')

        inicial = estado_inicial()
        if not Transporte.objects.filter(id=transporte_id).exists():
            raise NotFound('Transporte no encontrado')
        if encargado_logistica_id and not EncargadoLogistica.objects.filter(id=encargado_logistica_id).exists():
            raise NotFound('Encargado de logística no encontrado')

        envio = Envio.objects.create(
            transporte_id=transporte_id,
            estado_envio=inicial,
            fecha_recoleccion=fecha_recoleccion,
            fecha_entrega_estimada=fecha_entrega_estimada,
            descripcion=descripcion or None,
            encargado_logistica_id=encargado_logistica_id or None,
        )
        donacion.envio = envio
        try:
            with transaction.atomic():
                donacion.save(update_fields=['envio'])
        except IntegrityError as exc:
            raise Conflict('Esta donación ya tiene un envío asignado') from exc

    logger.info('shipment %s created for donation %s', envio.id, donacion_id)
    return envio


def _resolver_estado(nombre: str) -> EstadoEnvio:
    buscado = (nombre or '').strip().lower()
    estados = list(EstadoEnvio.objects.order_by('orden'))
    for estado in estados:
        if estado.estado.strip().lower() == buscado:
            return estado
    raise ValidationError({'estado': [f"Estado no válido. Disponibles: {', '.join(e.estado for e in estados)}"]})


def _generar_pin() -> str:
    return f"{secrets.randbelow(9000) + 1000}"


def cambiar_estado(envio_id: int, estado_nombre: str, pin: Optional[str] = None) -> tuple[Envio, Optional[str]]:
    """Move a shipment forward to ``estado_nombre``.

    Reaching ``En camino`` issues a delivery PIN, returned once to the
    caller; ``Entregado`` requires that PIN and clears it.
    """
    nuevo = _resolver_estado(estado_nombre)
    pin_generado = None
    with transaction.atomic():
        envio = Envio.objects.select_for_update().select_related('estado_envio').filter(id=envio_id).first()
        if envio is None:
            raise NotFound('Envío no encontrado')
        actual = envio.estado_envio
        if nuevo.orden <= actual.orden:
            raise Conflict(f"No se puede pasar de '{actual.estado}' a '{nuevo.estado}'")

        if nuevo.estado == EstadoEnvio.ENTREGADO:
            if not pin:
                raise ValidationError({'pin': ['PIN requerido para confirmar entrega']})
            if not envio.pin:
                raise Conflict('No se encontró PIN para este envío')
            if pin != envio.pin:
                raise PinIncorrecto()
            envio.pin = None
        elif nuevo.estado == EstadoEnvio.EN_CAMINO:
            pin_generado = _generar_pin()
            envio.pin = pin_generado

        envio.estado_envio = nuevo
        envio.save(update_fields=['estado_envio', 'pin', 'updated_at'])

        donacion = Donacion.objects.filter(envio=envio).select_related('hospital').first()
        if donacion is not None:
            _actualizar_donacion(donacion, nuevo)
            _notificar(envio, donacion, nuevo)

    logger.info('shipment %s: %s -> %s', envio.id, actual.estado, nuevo.estado)
    return envio, pin_generado


def _actualizar_donacion(donacion: Donacion, estado: EstadoEnvio) -> None:
    nombre = EstadoDonacion.ENTREGADA if estado.estado == EstadoEnvio.ENTREGADO else EstadoDonacion.ASIGNADA
    estado_donacion = EstadoDonacion.objects.filter(nombre=nombre).first()
    if estado_donacion is not None and donacion.estado_donacion_id != estado_donacion.id:
        donacion.estado_donacion = estado_donacion
        donacion.save(update_fields=['estado_donacion'])


def _notificar(envio: Envio, donacion: Donacion, estado: EstadoEnvio) -> None:
    receptor = donacion.hospital_destino_id
    mensaje = MENSAJES_ESTADO.get(estado.estado)
    if not receptor or not mensaje:
        return
    titulo, plantilla, tipo = mensaje
    crear_notificacion(
        hospital_id=receptor,
        titulo=titulo,
        mensaje=plantilla.format(medicamento=donacion.principioactivo or 'medicamento'),
        tipo=tipo,
        referencia_id=envio.id,
        referencia_tipo='envio',
    )


def listar_envios(hospital_id: Optional[int] = None):
    qs = Envio.objects.select_related('estado_envio', 'transporte', 'encargado_logistica')
    if hospital_id:
        qs = qs.filter(donacion__hospital_id=hospital_id) | qs.filter(donacion__hospital_destino_id=hospital_id)
    return qs.order_by('-created_at', '-id')
