import secrets
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework.test import APIClient

from intercambio.models import Sesion, Usuario

PASSWORD = 'Clave2024x'


def crear_usuario(correo, cedula, hospital=None, rol=Usuario.ROL_USUARIO, **extra):
    return Usuario.objects.create_user(
        username=correo,
        email=correo,
        password=PASSWORD,
        correo_corporativo=correo,
        cedula=cedula,
        first_name='Ana',
        last_name='Pérez',
        hospital=hospital,
        rol=rol,
        **extra,
    )


def abrir_sesion(usuario, horas=1):
    return Sesion.objects.create(
        token=secrets.token_urlsafe(32),
        usuario=usuario,
        expira=timezone.now() + timedelta(hours=horas),
    )


def cliente_con_sesion(usuario):
    client = APIClient()
    client.cookies[settings.SESION_COOKIE_NOMBRE] = abrir_sesion(usuario).token
    return client
