import logging
from datetime import date
from typing import Optional

from django.db import transaction
from django.utils import timezone

from intercambio.exceptions import Conflict, NotFound
from intercambio.models import Aviso

logger = logging.getLogger(__name__)


def hoy_local() -> date:
    return timezone.localdate()


def formatear_aviso(aviso: Aviso, *, con_usuario: bool = True) -> dict:
    data = {
        'id': aviso.id,
        'titulo': aviso.titulo,
        'descripcion': aviso.descripcion,
        'fecha': aviso.fecha.isoformat(),
        'publicado': aviso.publicado,
        'created_at': aviso.created_at.isoformat() if aviso.created_at else None,
        'updated_at': aviso.updated_at.isoformat() if aviso.updated_at else None,
    }
    if con_usuario:
        u = aviso.usuario
        data['usuario'] = {'id': u.id, 'nombre_completo': f'{u.first_name} {u.last_name}'.strip()} if u else None
    return data


def barrer_avisos_vencidos(hoy: Optional[date] = None) -> int:
    """Unpublish every notice whose last day is before ``hoy``."""
    hoy = hoy or hoy_local()
    n = Aviso.objects.filter(publicado=True, fecha__lt=hoy).update(publicado=False)
    if n:
        logger.info('unpublished %s expired notices', n)
    return n


def listar_avisos_activos(hoy: Optional[date] = None) -> list[Aviso]:
    """Published notices still in force, latest ``fecha`` first.  Read only."""
    hoy = hoy or hoy_local()
    return list(Aviso.objects.filter(publicado=True, fecha__gte=hoy).order_by('-fecha', '-id'))


def listar_avisos() -> list[Aviso]:
    return list(Aviso.objects.select_related('usuario').order_by('-created_at', '-id')[:Aviso.MAXIMO])


def obtener_aviso(aviso_id: int) -> Aviso:
    aviso = Aviso.objects.select_related('usuario').filter(id=aviso_id).first()
    if aviso is None:
        raise NotFound('Aviso no encontrado')
    return aviso


@transaction.atomic
def crear_aviso(*, titulo: str, descripcion: str, fecha: date, usuario) -> Aviso:
    # cap is checked with the existing rows locked
    existentes = list(Aviso.objects.select_for_update().values_list('id', flat=True))
    if len(existentes) >= Aviso.MAXIMO:
        raise Conflict(f'Ya existen {Aviso.MAXIMO} avisos. Elimina uno para crear otro.')
    return Aviso.objects.create(titulo=titulo, descripcion=descripcion, fecha=fecha, usuario=usuario, publicado=False)


def actualizar_aviso(aviso_id: int, datos: dict) -> Aviso:
    aviso = obtener_aviso(aviso_id)
    for campo in ('titulo', 'descripcion', 'fecha', 'publicado'):
        if campo in datos:
            setattr(aviso, campo, datos[campo])
    aviso.save()
    return aviso


def eliminar_aviso(aviso_id: int) -> None:
    deleted, _ = Aviso.objects.filter(id=aviso_id).delete()
    if not deleted:
        raise NotFound('Aviso no encontrado')
