"""
Authentication views.

Login issues a server-side :class:`~intercambio.models.Sesion` whose
token travels in the httpOnly ``sesion_usuario`` cookie, plus a JWT
pair for API clients.  These views skip the default authenticators so
that a stale cookie never blocks logging in again.
"""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from intercambio.exceptions import CredencialesRechazadas
from intercambio.models import Hospital
from intercambio.serializers.auth import InicioSesionSerializer, RegistroSerializer
from intercambio.services.audit import registrar_evento
from intercambio.services.sesiones import (
    CredencialesInvalidas,
    UsuarioSuspendido,
    cerrar_sesion,
    formatear_usuario,
    iniciar_sesion,
    registrar_usuario,
    sesion_valida,
)
from intercambio.throttling import LoginRateThrottle

logger = logging.getLogger(__name__)


def _poner_cookie(response, sesion):
    response.set_cookie(
        settings.SESION_COOKIE_NOMBRE,
        sesion.token,
        expires=sesion.expira,
        httponly=True,
        secure=settings.SESION_COOKIE_SECURE,
        samesite='Lax',
        path='/',
    )


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([AnonRateThrottle, LoginRateThrottle])
def login_view(request):
    s = InicioSesionSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    try:
        usuario, sesion = iniciar_sesion(request, vd['correo_corporativo'], vd['contrasena'], recordar=vd['recordar'])
    except UsuarioSuspendido:
        raise exceptions.PermissionDenied('Usuario suspendido. Contacte al administrador')
    except CredencialesInvalidas:
        registrar_evento(request, 'login', 'usuario', result='fail', correo=vd['correo_corporativo'])
        raise CredencialesRechazadas()

    registrar_evento(request, 'login', 'usuario', usuario.id, usuario=usuario, result='ok')
    refresh = RefreshToken.for_user(usuario)

    response = Response({
        'ok': True,
        'message': 'Inicio de sesión exitoso',
        'usuario': formatear_usuario(usuario),
        'expira': sesion.expira.isoformat(),
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
    })
    _poner_cookie(response, sesion)
    return response


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def logout_view(request):
    token = request.COOKIES.get(settings.SESION_COOKIE_NOMBRE)
    cerrar_sesion(token)

    refresh = request.data.get('refresh') if hasattr(request.data, 'get') else None
    blacklisted = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            blacklisted = 1
        except TokenError as e:
            logger.info('refresh token not blacklisted: %s', e)

    response = Response({'ok': True, 'message': 'Sesión cerrada', 'blacklisted': blacklisted})
    response.delete_cookie(settings.SESION_COOKIE_NOMBRE, path='/', samesite='Lax')
    return response


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def verificar_sesion_view(request):
    sesion = sesion_valida(request.COOKIES.get(settings.SESION_COOKIE_NOMBRE))
    if sesion is None:
        return Response({'ok': True, 'usuario': None})
    return Response({'ok': True, 'usuario': formatear_usuario(sesion.usuario), 'expira': sesion.expira.isoformat()})


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([AnonRateThrottle, LoginRateThrottle])
def register_view(request):
    s = RegistroSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    hospital = Hospital.objects.filter(id=vd['hospital_id']).first() if vd.get('hospital_id') else None
    usuario = registrar_usuario(
        nombres=vd['nombres'],
        apellidos=vd['apellidos'],
        cedula=vd['cedula'],
        correo_corporativo=vd['correo_corporativo'],
        contrasena=vd['contrasena'],
        fecha_nacimiento=vd.get('fecha_nacimiento'),
        sexo=vd.get('sexo', ''),
        celular=vd.get('celular', ''),
        numero_tarjeta_profesional=vd.get('numero_tarjeta_profesional', ''),
        hospital=hospital,
    )
    registrar_evento(request, 'register', 'usuario', usuario.id, usuario=usuario)
    return Response({'ok': True, 'message': 'Usuario registrado exitosamente', 'usuario': formatear_usuario(usuario)},
                    status=status.HTTP_201_CREATED)


jwt_refresh_view = TokenRefreshView.as_view()
