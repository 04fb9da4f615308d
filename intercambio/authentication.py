"""
Session authentication for the API.

Browsers carry the server-issued token in the httpOnly
``sesion_usuario`` cookie; other clients may send it in the
``Authorization: Sesion <token>`` header.  Expired and revoked sessions
are rejected here, so views only ever see a live session.
"""
from __future__ import annotations

from django.conf import settings
from rest_framework import authentication, exceptions

from intercambio.services.sesiones import sesion_valida


class SesionAuthentication(authentication.BaseAuthentication):
    keyword = 'Sesion'

    def get_token(self, request):
        auth = authentication.get_authorization_header(request).split()
        if auth and auth[0].lower() == self.keyword.lower().encode():
            if len(auth) != 2:
                raise exceptions.AuthenticationFailed('Encabezado de sesión inválido')
            return auth[1].decode()
        return request.COOKIES.get(settings.SESION_COOKIE_NOMBRE)

    def authenticate(self, request):
        token = self.get_token(request)
        if not token:
            return None
        sesion = sesion_valida(token)
        if sesion is None:
            raise exceptions.AuthenticationFailed('Sesión expirada o inválida')
        return sesion.usuario, sesion

    def authenticate_header(self, request):
        return self.keyword
