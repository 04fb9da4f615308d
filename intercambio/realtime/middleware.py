"""
WebSocket authentication from the ``sesion_usuario`` cookie.

The browser sends the httpOnly cookie with the upgrade request, so the
same server-side session that guards the HTTP API identifies the user
on the socket.  ``scope["user"]`` is ``None`` when there is no live
session.
"""
from http.cookies import SimpleCookie

from channels.db import database_sync_to_async
from django.conf import settings

from intercambio.services.sesiones import sesion_valida


def _token_de_cookie(scope):
    for name, value in scope.get("headers", []):
        if name == b"cookie":
            cookie = SimpleCookie()
            cookie.load(value.decode("latin-1"))
            morsel = cookie.get(settings.SESION_COOKIE_NOMBRE)
            return morsel.value if morsel else None
    return None


@database_sync_to_async
def _usuario_de_sesion(token):
    sesion = sesion_valida(token)
    return sesion.usuario if sesion else None


class SesionAuthMiddleware:
    def __init__(self, inner):
        self.inner = inner

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        scope["user"] = await _usuario_de_sesion(_token_de_cookie(scope))
        return await self.inner(scope, receive, send)
