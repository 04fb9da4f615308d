import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from intercambio.exceptions import Conflict, NotFound
from intercambio.models import EncargadoLogistica, Envio, Hospital

logger = logging.getLogger(__name__)

DUPLICADO = 'Este hospital ya tiene un encargado de logística'


def formatear_encargado(e: EncargadoLogistica) -> dict:
    return {
        'id': e.id,
        'nombre': e.nombre,
        'apellido': e.apellido,
        'cedula': e.cedula,
        'correo': e.correo,
        'celular': e.celular,
        'hospital_id': e.hospital_id,
    }


def obtener_por_hospital(hospital_id: int) -> Optional[EncargadoLogistica]:
    return EncargadoLogistica.objects.filter(hospital_id=hospital_id).order_by('id').first()


@transaction.atomic
def crear_encargado(*, nombre, apellido, cedula, celular, hospital_id, correo=None) -> EncargadoLogistica:
    hospital = Hospital.objects.select_for_update().filter(id=hospital_id).first()
    if hospital is None:
        raise NotFound('Hospital no encontrado')
    if EncargadoLogistica.objects.filter(hospital=hospital).exists():
        raise Conflict(DUPLICADO)
    try:
        with transaction.atomic():
            return EncargadoLogistica.objects.create(
                nombre=nombre, apellido=apellido, cedula=cedula, celular=celular,
                correo=correo or None, hospital=hospital,
            )
    except IntegrityError as exc:
        raise Conflict(DUPLICADO) from exc


@transaction.atomic
def actualizar_encargado(encargado_id: int, *, nombre, apellido, cedula, celular, hospital_id, correo=None) -> EncargadoLogistica:
    encargado = EncargadoLogistica.objects.select_for_update().filter(id=encargado_id).first()
    if encargado is None:
        raise NotFound('Encargado no encontrado')
    hospital = Hospital.objects.select_for_update().filter(id=hospital_id).first()
    if hospital is None:
        raise NotFound('Hospital no encontrado')
    if EncargadoLogistica.objects.filter(hospital=hospital).exclude(id=encargado.id).exists():
        raise Conflict(DUPLICADO)

    encargado.hospital = hospital
    encargado.nombre = nombre
    encargado.apellido = apellido
    encargado.cedula = cedula
    encargado.celular = celular
    encargado.correo = correo or None
    try:
        with transaction.atomic():
            encargado.save()
    except IntegrityError as exc:
        raise Conflict(DUPLICADO) from exc
    return encargado


def eliminar_encargado(encargado_id: int) -> None:
    """Delete a logistics handler that no shipment references.

    The count gives the caller a precise message; the ``PROTECT``
    foreign key is what actually guarantees no shipment is left pointing
    at a deleted handler when a shipment is created concurrently.
    """
    encargado = EncargadoLogistica.objects.filter(id=encargado_id).first()
    if encargado is None:
        raise NotFound('Encargado no encontrado')

    asociados = Envio.objects.filter(encargado_logistica_id=encargado_id).count()
    if asociados > 0:
        raise Conflict(
            'No se puede eliminar el encargado porque tiene envíos asociados',
            extra={'envios_asociados': asociados},
        )
    try:
        with transaction.atomic():
            encargado.delete()
    except ProtectedError as exc:
        asociados = len(exc.protected_objects)
        raise Conflict(
            'No se puede eliminar el encargado porque tiene envíos asociados',
            extra={'envios_asociados': asociados},
        ) from exc
    logger.info('logistics handler %s deleted', encargado_id)
