import logging
import secrets
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.contrib.auth import authenticate
from django.db import transaction
from django.utils import timezone

from intercambio.exceptions import Conflict
from intercambio.models import Sesion, Usuario

logger = logging.getLogger(__name__)


class CredencialesInvalidas(Exception):
    pass


class UsuarioSuspendido(Exception):
    pass


def duracion_sesion(recordar: bool = False) -> timedelta:
    if recordar:
        return timedelta(days=settings.SESION_RECORDAR_DIAS)
    return timedelta(hours=settings.SESION_DURACION_HORAS)


def iniciar_sesion(request, correo: str, contrasena: str, *, recordar: bool = False) -> tuple[Usuario, Sesion]:
    """Authenticate by corporate e-mail and issue a server-side session.

    Suspended accounts are refused even with valid credentials; an
    ``ausente`` account becomes ``activo`` again on login.
    """
    usuario = Usuario.objects.filter(correo_corporativo=correo).first()
    if not usuario:
        raise CredencialesInvalidas()
    if usuario.estado == Usuario.ESTADO_SUSPENDIDO:
        raise UsuarioSuspendido()
    if authenticate(request, username=usuario.username, password=contrasena) is None:
        raise CredencialesInvalidas()

    ahora = timezone.now()
    usuario.ultimo_ingreso = ahora
    update_fields = ['ultimo_ingreso']
    if usuario.estado == Usuario.ESTADO_AUSENTE:
        usuario.estado = Usuario.ESTADO_ACTIVO
        update_fields.append('estado')
    usuario.save(update_fields=update_fields)

    sesion = Sesion.objects.create(
        token=secrets.token_urlsafe(32),
        usuario=usuario,
        expira=ahora + duracion_sesion(recordar),
    )
    logger.info('session issued for user %s (expires %s)', usuario.id, sesion.expira.isoformat())
    return usuario, sesion


def sesion_valida(token: Optional[str]) -> Optional[Sesion]:
    if not token:
        return None
    return (
        Sesion.objects.select_related('usuario', 'usuario__hospital')
        .filter(token=token, revocada=False, expira__gt=timezone.now(), usuario__is_active=True)
        .exclude(usuario__estado=Usuario.ESTADO_SUSPENDIDO)
        .first()
    )


def cerrar_sesion(token: Optional[str]) -> int:
    if not token:
        return 0
    return Sesion.objects.filter(token=token, revocada=False).update(revocada=True)


@transaction.atomic
def registrar_usuario(*, nombres, apellidos, cedula, correo_corporativo, contrasena,
                      fecha_nacimiento=None, sexo='', celular='', numero_tarjeta_profesional='',
                      hospital=None) -> Usuario:
    if Usuario.objects.filter(correo_corporativo=correo_corporativo).exists():
        raise Conflict('El correo electrónico ya está registrado')
    if Usuario.objects.filter(cedula=cedula).exists():
        raise Conflict('La cédula ya está registrada')
    usuario = Usuario.objects.create_user(
        username=correo_corporativo,
        email=correo_corporativo,
        password=contrasena,
        first_name=nombres,
        last_name=apellidos,
        correo_corporativo=correo_corporativo,
        cedula=cedula,
        fecha_nacimiento=fecha_nacimiento,
        sexo=sexo or '',
        celular=celular or '',
        numero_tarjeta_profesional=numero_tarjeta_profesional or '',
        hospital=hospital,
        rol=Usuario.ROL_USUARIO,
        estado=Usuario.ESTADO_ACTIVO,
    )
    logger.info('user registered: %s', usuario.id)
    return usuario


def formatear_usuario(usuario: Usuario) -> dict:
    return {
        'id': usuario.id,
        'nombres': usuario.first_name,
        'apellidos': usuario.last_name,
        'correo_corporativo': usuario.correo_corporativo,
        'cedula': usuario.cedula,
        'celular': usuario.celular,
        'sexo': usuario.sexo,
        'fecha_nacimiento': usuario.fecha_nacimiento.isoformat() if usuario.fecha_nacimiento else None,
        'numero_tarjeta_profesional': usuario.numero_tarjeta_profesional,
        'rol': usuario.rol,
        'estado': usuario.estado,
        'hospital': {'id': usuario.hospital.id, 'nombre': usuario.hospital.nombre} if usuario.hospital else None,
        'ultimo_ingreso': usuario.ultimo_ingreso.isoformat() if usuario.ultimo_ingreso else None,
    }
