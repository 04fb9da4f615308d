"""
URL mappings for the medication exchange API.

Every API path lives under ``/api/`` without a trailing slash; the
session gate middleware relies on that prefix.  Route names are used by
the test-suite through :func:`django.urls.reverse`.
"""
from django.urls import path, include

from .views import (
    avisos,
    catalogos,
    dashboard,
    donaciones,
    encargados,
    envios,
    health,
    notificaciones,
    pagos,
    publicaciones,
    solicitudes,
)
from .views.auth import jwt_refresh_view, login_view, logout_view, register_view, verificar_sesion_view

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('api/health', health.healthz, name='health'),

    path('api/auth/register', register_view, name='auth-register'),
    path('api/auth/login', login_view, name='auth-login'),
    path('api/auth/logout', logout_view, name='auth-logout'),
    path('api/auth/verificar-sesion', verificar_sesion_view, name='auth-verificar-sesion'),
    path('api/auth/refresh', jwt_refresh_view, name='auth-refresh'),

    path('api/donaciones', donaciones.donaciones_list, name='donaciones'),
    path('api/donaciones/envio', donaciones.donacion_envio, name='donacion-envio'),
    path('api/donaciones/<int:donacion_id>/solicitar', donaciones.donacion_solicitar, name='donacion-solicitar'),

    path('api/envios', envios.envios_list, name='envios'),
    path('api/envios/<int:envio_id>/cambiar-estado', envios.envio_cambiar_estado, name='envio-cambiar-estado'),

    path('api/encargado-logistica', encargados.encargados_list, name='encargados'),
    path('api/encargado-logistica/<int:encargado_id>', encargados.encargado_detail, name='encargado-detail'),

    path('api/notificaciones', notificaciones.notificaciones_list, name='notificaciones'),
    path('api/notificaciones/<int:notificacion_id>', notificaciones.notificacion_detail, name='notificacion-detail'),

    path('api/dashboard/metricas', dashboard.dashboard_metricas, name='dashboard-metricas'),

    path('api/avisos', avisos.avisos_list, name='avisos'),
    path('api/avisos/publicados', avisos.avisos_publicados, name='avisos-publicados'),
    path('api/avisos/<int:aviso_id>', avisos.aviso_detail, name='aviso-detail'),

    path('api/publicaciones', publicaciones.publicaciones_list, name='publicaciones'),
    path('api/publicaciones/<int:publicacion_id>', publicaciones.publicacion_detail, name='publicacion-detail'),

    path('api/solicitudes', solicitudes.solicitudes_list, name='solicitudes'),
    path('api/solicitudes/<int:solicitud_id>', solicitudes.solicitud_detail, name='solicitud-detail'),
    path('api/solicitudes/<int:solicitud_id>/estado', solicitudes.solicitud_estado, name='solicitud-estado'),

    path('api/pagos', pagos.pagos_list, name='pagos'),
    path('api/pagos/<int:pago_id>', pagos.pago_detail, name='pago-detail'),

    path('api/transporte', catalogos.transportes_list, name='transportes'),
    path('api/estado-envio', catalogos.estados_envio_list, name='estados-envio'),
]
