"""
Django admin registrations.

Catalogs and the exchange records are exposed at ``/admin/`` so staff
can inspect data and fix seed rows by hand.
"""

from django.contrib import admin

from .models import (
    Aviso,
    AuditEvent,
    Donacion,
    EncargadoLogistica,
    Envio,
    EstadoDonacion,
    EstadoEnvio,
    Hospital,
    Notificacion,
    Pago,
    Publicacion,
    Sesion,
    Solicitud,
    Transporte,
    Usuario,
)


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('id', 'nombre', 'nit', 'municipio', 'created_at')
    search_fields = ('nombre', 'nit', 'municipio')


@admin.register(Usuario)
class UsuarioAdmin(admin.ModelAdmin):
    list_display = ('correo_corporativo', 'rol', 'estado', 'hospital', 'ultimo_ingreso')
    list_filter = ('rol', 'estado', 'hospital')
    search_fields = ('correo_corporativo', 'cedula', 'first_name', 'last_name')


@admin.register(Sesion)
class SesionAdmin(admin.ModelAdmin):
    list_display = ('usuario', 'creada', 'expira', 'revocada')
    list_filter = ('revocada',)


admin.site.register(Transporte)
admin.site.register(EstadoDonacion)


@admin.register(EstadoEnvio)
class EstadoEnvioAdmin(admin.ModelAdmin):
    list_display = ('estado', 'orden')
    ordering = ('orden',)


@admin.register(EncargadoLogistica)
class EncargadoLogisticaAdmin(admin.ModelAdmin):
    list_display = ('nombre', 'apellido', 'cedula', 'hospital')
    search_fields = ('nombre', 'apellido', 'cedula')


@admin.register(Envio)
class EnvioAdmin(admin.ModelAdmin):
    list_display = ('id', 'estado_envio', 'transporte', 'encargado_logistica', 'created_at')
    list_filter = ('estado_envio', 'transporte')
    exclude = ('pin',)


@admin.register(Donacion)
class DonacionAdmin(admin.ModelAdmin):
    list_display = ('id', 'principioactivo', 'cantidad', 'hospital', 'hospital_destino', 'estado_donacion', 'envio')
    list_filter = ('estado_donacion',)
    search_fields = ('principioactivo', 'lote', 'cum')


@admin.register(Publicacion)
class PublicacionAdmin(admin.ModelAdmin):
    list_display = ('id', 'principioactivo', 'cantidad', 'hospital', 'estado', 'created_at')
    list_filter = ('estado',)
    search_fields = ('principioactivo', 'reg_invima')


@admin.register(Solicitud)
class SolicitudAdmin(admin.ModelAdmin):
    list_display = ('id', 'publicacion', 'hospital', 'cantidad', 'estado', 'created_at')
    list_filter = ('estado',)


@admin.register(Pago)
class PagoAdmin(admin.ModelAdmin):
    list_display = ('transaccion', 'solicitud', 'monto', 'estado', 'created_at')
    list_filter = ('estado',)
    search_fields = ('transaccion',)


@admin.register(Notificacion)
class NotificacionAdmin(admin.ModelAdmin):
    list_display = ('titulo', 'hospital', 'tipo', 'leida', 'created_at')
    list_filter = ('tipo', 'leida')


@admin.register(Aviso)
class AvisoAdmin(admin.ModelAdmin):
    list_display = ('titulo', 'fecha', 'publicado', 'usuario')
    list_filter = ('publicado',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action', 'object_type')
