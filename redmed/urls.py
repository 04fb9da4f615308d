"""
URL configuration for the medication exchange backend.

The `urlpatterns` list routes URLs to views.  This module includes
both the Django admin and the API routes provided by the intercambio
app.  OpenAPI documentation is exposed at ``/swagger/`` and ``/redoc/``.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

api_info = openapi.Info(
    title="Red de Intercambio de Medicamentos API",
    default_version='v1',
    description="Donaciones, envíos, publicaciones y métricas entre hospitales.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('intercambio.routers')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
