"""
Error taxonomy and the unified API exception handler.

Services raise these exceptions; the handler configured in
``REST_FRAMEWORK['EXCEPTION_HANDLER']`` renders every failure as
``{"ok": false, "error": {"code", "message", "fields"?}}``.
"""
import logging

from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class NotFound(exceptions.NotFound):
    default_detail = 'Recurso no encontrado'
    default_code = 'not_found'


class Conflict(exceptions.APIException):
    """A state invariant would be violated by the request."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'La operación entra en conflicto con el estado actual'
    default_code = 'conflict'

    def __init__(self, detail=None, code=None, extra=None):
        super().__init__(detail, code)
        self.extra = extra or {}


class PinIncorrecto(exceptions.APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'PIN incorrecto'
    default_code = 'pin_incorrecto'


class CredencialesRechazadas(exceptions.APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Correo o contraseña incorrectos'
    default_code = 'authentication_failed'


class InvariantViolation(exceptions.APIException):
    """Corrupt or missing seed data; never the caller's fault."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Error interno del servidor'
    default_code = 'invariant_violation'


def _flatten_fields(data, prefix=''):
    fields = []
    if isinstance(data, dict):
        for key, value in data.items():
            name = f'{prefix}.{key}' if prefix else str(key)
            fields.extend(_flatten_fields(value, name))
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, (dict, list)):
                fields.extend(_flatten_fields(item, prefix))
            else:
                fields.append({'field': prefix or 'non_field_errors', 'message': str(item)})
    else:
        fields.append({'field': prefix or 'non_field_errors', 'message': str(data)})
    return fields


def api_exception_handler(exc, context):
    # rest_framework.views pulls in the configured authenticators, which import this module
    from rest_framework.views import exception_handler as drf_exception_handler

    if isinstance(exc, ProtectedError):
        exc = Conflict('El registro tiene dependencias y no puede eliminarse')

    if isinstance(exc, InvariantViolation):
        logger.error('invariant violation: %s', exc.detail)
        exc = InvariantViolation()

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', getattr(context.get('view'), '__name__', context.get('view')), exc_info=exc)
        return Response(
            {'ok': False, 'error': {'code': 'server_error', 'message': 'Error interno del servidor'}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        return Response({'ok': False, 'error': {
            'code': 'validation_error',
            'message': 'Datos inválidos',
            'fields': _flatten_fields(exc.detail),
        }}, status=resp.status_code)

    if isinstance(exc, Http404):
        code = 'not_found'
    elif isinstance(exc, exceptions.APIException):
        code = exc.default_code
    else:
        code = 'api_error'

    if isinstance(exc, exceptions.APIException) and not isinstance(exc.detail, (dict, list)):
        message = str(exc.detail)
    elif isinstance(resp.data, dict):
        message = resp.data.get('detail') or resp.data
    else:
        message = str(resp.data)

    error = {'code': code, 'message': message}
    error.update(getattr(exc, 'extra', {}) or {})
    return Response({'ok': False, 'error': error}, status=resp.status_code, headers=_auth_headers(resp))


def _auth_headers(resp):
    headers = {}
    for name in ('WWW-Authenticate', 'Retry-After'):
        if name in resp:
            headers[name] = resp[name]
    return headers
