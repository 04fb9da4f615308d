from django.conf import settings
from django.http import JsonResponse


class SessionGateMiddleware:
    """Reject API requests that carry no credential at all.

    Public prefixes (login, registration, health) pass through.  The
    credential itself is validated later by the DRF authentication
    classes; this gate only refuses requests without one.
    """
    API_PREFIX = '/api/'

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path or ''
        if path.startswith(self.API_PREFIX) and not self._es_publica(path) and not self._tiene_credencial(request):
            return JsonResponse(
                {'ok': False, 'error': {'code': 'not_authenticated', 'message': 'Debe iniciar sesión'}},
                status=401,
            )
        return self.get_response(request)

    @staticmethod
    def _es_publica(path: str) -> bool:
        return any(path.startswith(p) for p in settings.SESION_RUTAS_PUBLICAS)

    @staticmethod
    def _tiene_credencial(request) -> bool:
        return bool(request.COOKIES.get(settings.SESION_COOKIE_NOMBRE) or request.META.get('HTTP_AUTHORIZATION'))
