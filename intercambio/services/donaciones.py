import logging
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet

from intercambio.exceptions import Conflict, InvariantViolation, NotFound
from intercambio.models import Donacion, EstadoDonacion, Hospital
from intercambio.services.notificaciones import crear_notificacion

logger = logging.getLogger(__name__)


def _hospital_ref(h: Optional[Hospital]) -> Optional[dict]:
    if h is None:
        return None
    return {'id': h.id, 'nombre': h.nombre, 'direccion': h.direccion, 'celular': h.celular,
            'telefono': h.telefono, 'email': h.email, 'municipio': h.municipio}


def formatear_donacion(d: Donacion) -> dict:
    return {
        'id': d.id,
        'hospital_id': d.hospital_id,
        'hospital': _hospital_ref(d.hospital),
        'hospital_destino': _hospital_ref(d.hospital_destino),
        'envio_id': d.envio_id,
        'estado_donacion': d.estado_donacion.nombre if d.estado_donacion_id else None,
        'principioactivo': d.principioactivo,
        'cantidad': d.cantidad,
        'lote': d.lote,
        'cum': d.cum,
        'reg_invima': d.reg_invima,
        'fecha_fabricacion': d.fecha_fabricacion.isoformat(),
        'fecha_expiracion': d.fecha_expiracion.isoformat(),
        'descripcion': d.descripcion,
        'created_at': d.created_at.isoformat() if d.created_at else None,
    }


def listar_donaciones(hospital_id: Optional[int] = None) -> QuerySet:
    qs = Donacion.objects.select_related('hospital', 'hospital_destino', 'estado_donacion')
    if hospital_id:
        qs = qs.filter(hospital_id=hospital_id)
    return qs.order_by('-created_at', '-id')


def crear_donacion(**datos) -> Donacion:
    estado = EstadoDonacion.objects.filter(nombre=EstadoDonacion.DISPONIBLE).first()
    if estado is None:
        raise InvariantViolation(f"Estado '{EstadoDonacion.DISPONIBLE}' no encontrado en la base de datos")
    if not Hospital.objects.filter(id=datos['hospital_id']).exists():
        raise NotFound('Hospital no encontrado')
    destino = datos.get('hospital_destino_id')
    if destino and not Hospital.objects.filter(id=destino).exists():
        raise NotFound('Hospital destino no encontrado')
    return Donacion.objects.create(estado_donacion=estado, **datos)


def solicitar_donacion(donacion_id: int, hospital_id: int) -> Donacion:
    """Claim an available donation for ``hospital_id``.

    The donation moves from ``Disponible`` to ``Solicitado`` and the
    claiming hospital becomes its destination, which is where a later
    shipment is delivered.  The donor hospital is notified.
    """
    with transaction.atomic():
        donacion = (
            Donacion.objects.select_for_update(of=('self',))
            .select_related('estado_donacion')
            .filter(id=donacion_id)
            .first()
        )
        if donacion is None:
            raise NotFound('Donación no encontrada')
        solicitante = Hospital.objects.filter(id=hospital_id).first()
        if solicitante is None:
            raise NotFound('Hospital no encontrado')
        if donacion.estado_donacion.nombre != EstadoDonacion.DISPONIBLE:
            raise Conflict('Esta donación ya no está disponible')
        if donacion.hospital_id == solicitante.id:
            raise Conflict('No puedes solicitar tu propia donación')

        estado = EstadoDonacion.objects.filter(nombre=EstadoDonacion.SOLICITADA).first()
        if estado is None:
            raise InvariantViolation(f"Estado '{EstadoDonacion.SOLICITADA}' no encontrado en la base de datos")

        donacion.estado_donacion = estado
        donacion.hospital_destino = solicitante
        donacion.save(update_fields=['estado_donacion', 'hospital_destino'])

        crear_notificacion(
            hospital_id=donacion.hospital_id,
            titulo='Donación solicitada',
            mensaje=f"{solicitante.nombre} ha solicitado tu donación de {donacion.principioactivo or 'medicamento'}",
            tipo='donacion',
            referencia_id=donacion.id,
            referencia_tipo='donacion',
        )

    logger.info('donation %s claimed by hospital %s', donacion.id, solicitante.id)
    return donacion
