"""
Audit trail.

Every write through the API leaves an :class:`AuditEvent` row naming
the acting user, the client address and the object touched.  The same
event is echoed to the ``intercambio.services.audit`` logger.
"""
import logging
from typing import Optional

from intercambio.models import AuditEvent, Usuario

logger = logging.getLogger(__name__)


def ip_cliente(request) -> Optional[str]:
    reenviada = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if reenviada:
        return reenviada.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def registrar_evento(request, accion: str, objeto_tipo: str, objeto_id: Optional[int] = None, *,
                     usuario: Optional[Usuario] = None, **detalle) -> AuditEvent:
    """Record ``accion`` on ``objeto_tipo``/``objeto_id``.

    ``usuario`` defaults to the request's user; anonymous callers are
    stored as ``NULL``.
    """
    if usuario is None:
        usuario = getattr(request, 'user', None)
    if not getattr(usuario, 'pk', None):
        usuario = None
    evento = AuditEvent.objects.create(
        user=usuario,
        action=accion,
        object_type=objeto_tipo,
        object_id=objeto_id,
        detail={'ip': ip_cliente(request), **detalle},
    )
    logger.info('%s %s:%s by user %s', accion, objeto_tipo, objeto_id, usuario.pk if usuario else '-')
    return evento
