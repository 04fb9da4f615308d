"""
Database models for the medication exchange network.

These models capture hospitals, their users, the medication donations
and publications they offer, the shipments that move donations between
hospitals and the notifications and notices shown to users.  Catalog
tables (shipment states, donation states, transports) are reference
data seeded by ``manage.py seed_catalogos``.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models


class Hospital(models.Model):
    """A hospital participating in the exchange network."""
    nombre = models.CharField(max_length=150)
    nit = models.CharField(max_length=20, blank=True)
    direccion = models.CharField(max_length=255, blank=True)
    telefono = models.CharField(max_length=20, blank=True)
    celular = models.CharField(max_length=10, blank=True)
    email = models.EmailField(max_length=100, blank=True)
    municipio = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.nombre


class Usuario(AbstractUser):
    """Custom user model bound to a hospital.

    The corporate e-mail is the login identifier; ``username`` is kept
    equal to it so Django's auth backends keep working unchanged.
    ``first_name``/``last_name`` hold the person's names.
    """
    ROL_USUARIO = 'usuario'
    ROL_ADMIN = 'admin'
    ROL_CHOICES = [
        (ROL_USUARIO, 'Usuario'),
        (ROL_ADMIN, 'Administrador'),
    ]

    ESTADO_ACTIVO = 'activo'
    ESTADO_AUSENTE = 'ausente'
    ESTADO_SUSPENDIDO = 'suspendido'
    ESTADO_CHOICES = [
        (ESTADO_ACTIVO, 'Activo'),
        (ESTADO_AUSENTE, 'Ausente'),
        (ESTADO_SUSPENDIDO, 'Suspendido'),
    ]

    SEXO_CHOICES = [
        ('Hombre', 'Hombre'),
        ('Mujer', 'Mujer'),
        ('Otro', 'Otro'),
    ]

    correo_corporativo = models.EmailField(max_length=100, unique=True)
    cedula = models.CharField(max_length=12, unique=True)
    celular = models.CharField(max_length=10, blank=True)
    sexo = models.CharField(max_length=10, choices=SEXO_CHOICES, blank=True)
    fecha_nacimiento = models.DateField(null=True, blank=True)
    numero_tarjeta_profesional = models.CharField(max_length=50, blank=True)
    hospital = models.ForeignKey(
        Hospital, null=True, blank=True, on_delete=models.SET_NULL, related_name='usuarios'
    )
    rol = models.CharField(max_length=10, choices=ROL_CHOICES, default=ROL_USUARIO)
    estado = models.CharField(max_length=12, choices=ESTADO_CHOICES, default=ESTADO_ACTIVO)
    ultimo_ingreso = models.DateTimeField(null=True, blank=True)

    REQUIRED_FIELDS = ['email', 'correo_corporativo', 'cedula']

    def __str__(self) -> str:
        return f"{self.correo_corporativo} ({self.rol})"


class Sesion(models.Model):
    """Server-issued session token carried in the ``sesion_usuario`` cookie."""
    token = models.CharField(max_length=64, unique=True)
    usuario = models.ForeignKey(Usuario, on_delete=models.CASCADE, related_name='sesiones')
    creada = models.DateTimeField(auto_now_add=True)
    expira = models.DateTimeField()
    revocada = models.BooleanField(default=False)

    class Meta:
        indexes = [models.Index(fields=['usuario', 'expira'], name='sesion_usuario_expira_idx')]

    def __str__(self) -> str:
        return f"sesion u={self.usuario_id} exp={self.expira:%F %T}"


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

class Transporte(models.Model):
    nombre = models.CharField(max_length=50, unique=True)

    def __str__(self) -> str:
        return self.nombre


class EstadoEnvio(models.Model):
    """Shipment state catalog.  ``orden`` defines the forward direction."""
    EMPAQUETANDO = 'Empaquetando'
    EN_CAMINO = 'En camino'
    ENTREGADO = 'Entregado'
    INICIAL = EMPAQUETANDO

    estado = models.CharField(max_length=50, unique=True)
    orden = models.PositiveSmallIntegerField(unique=True)

    def __str__(self) -> str:
        return self.estado


class EstadoDonacion(models.Model):
    DISPONIBLE = 'Disponible'
    SOLICITADA = 'Solicitado'
    ASIGNADA = 'Asignada'
    ENTREGADA = 'Entregada'

    nombre = models.CharField(max_length=50, unique=True)

    def __str__(self) -> str:
        return self.nombre


class Medicamento(models.Model):
    principioactivo = models.CharField(max_length=255)
    formafarmaceutica = models.CharField(max_length=100, blank=True)
    concentracion = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.principioactivo


# ---------------------------------------------------------------------------
# Logistics
# ---------------------------------------------------------------------------

class EncargadoLogistica(models.Model):
    """Person coordinating shipments for a hospital."""
    nombre = models.CharField(max_length=50)
    apellido = models.CharField(max_length=50)
    cedula = models.BigIntegerField()
    correo = models.EmailField(max_length=50, null=True, blank=True)
    celular = models.CharField(max_length=10)
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='encargados_logistica')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['hospital'], name='encargado_unico_por_hospital'),
        ]

    def __str__(self) -> str:
        return f"{self.nombre} {self.apellido}"


class Envio(models.Model):
    """Logistics record moving a donation from its source hospital."""
    transporte = models.ForeignKey(Transporte, on_delete=models.PROTECT, related_name='envios')
    estado_envio = models.ForeignKey(EstadoEnvio, on_delete=models.PROTECT, related_name='envios')
    # PROTECT: a handler with shipments cannot be deleted at the database level
    encargado_logistica = models.ForeignKey(
        EncargadoLogistica, null=True, blank=True, on_delete=models.PROTECT, related_name='envios'
    )
    fecha_recoleccion = models.DateTimeField()
    fecha_entrega_estimada = models.DateTimeField()
    descripcion = models.TextField(null=True, blank=True)
    pin = models.CharField(max_length=4, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"envio #{self.id} ({self.estado_envio_id})"


class Donacion(models.Model):
    """A hospital-submitted offer of medication."""
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='donaciones')
    hospital_destino = models.ForeignKey(
        Hospital, null=True, blank=True, on_delete=models.SET_NULL, related_name='donaciones_recibidas'
    )
    estado_donacion = models.ForeignKey(EstadoDonacion, on_delete=models.PROTECT, related_name='donaciones')
    # One-to-one: the database enforces at most one donation per shipment
    envio = models.OneToOneField(
        Envio, null=True, blank=True, on_delete=models.PROTECT, related_name='donacion'
    )
    principioactivo = models.CharField(max_length=255)
    cantidad = models.PositiveIntegerField()
    lote = models.CharField(max_length=50)
    cum = models.CharField(max_length=50)
    reg_invima = models.CharField(max_length=50)
    fecha_fabricacion = models.DateField()
    fecha_expiracion = models.DateField()
    descripcion = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"donacion #{self.id} {self.principioactivo}"


# ---------------------------------------------------------------------------
# Publications, requests and payments
# ---------------------------------------------------------------------------

class Publicacion(models.Model):
    """A listed medication offer available for request by other hospitals."""
    ESTADO_DISPONIBLE = 'Disponible'
    ESTADO_RESERVADA = 'Reservada'
    ESTADO_CERRADA = 'Cerrada'
    ESTADO_CHOICES = [
        (ESTADO_DISPONIBLE, 'Disponible'),
        (ESTADO_RESERVADA, 'Reservada'),
        (ESTADO_CERRADA, 'Cerrada'),
    ]

    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='publicaciones')
    principioactivo = models.CharField(max_length=255)
    cantidad = models.PositiveIntegerField()
    reg_invima = models.CharField(max_length=50)
    fecha_expiracion = models.DateField()
    descripcion = models.TextField(blank=True)
    cantidadcum = models.CharField(max_length=50)
    unidadmedida = models.CharField(max_length=50)
    formafarmaceutica = models.CharField(max_length=100)
    titular = models.CharField(max_length=255)
    descripcioncomercial = models.CharField(max_length=255)
    estado = models.CharField(max_length=12, choices=ESTADO_CHOICES, default=ESTADO_DISPONIBLE, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.principioactivo} x{self.cantidad}"


class Solicitud(models.Model):
    """A hospital's claim against a published medication listing."""
    ESTADO_PENDIENTE = 'Pendiente'
    ESTADO_APROBADA = 'Aprobada'
    ESTADO_RECHAZADA = 'Rechazada'
    ESTADO_CHOICES = [
        (ESTADO_PENDIENTE, 'Pendiente'),
        (ESTADO_APROBADA, 'Aprobada'),
        (ESTADO_RECHAZADA, 'Rechazada'),
    ]

    publicacion = models.ForeignKey(Publicacion, on_delete=models.CASCADE, related_name='solicitudes')
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='solicitudes')
    cantidad = models.PositiveIntegerField()
    estado = models.CharField(max_length=20, choices=ESTADO_CHOICES, default=ESTADO_PENDIENTE)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"solicitud #{self.id} pub={self.publicacion_id}"


class Pago(models.Model):
    ESTADO_PENDIENTE = 'Pendiente'
    ESTADO_COMPLETADO = 'Completado'
    ESTADO_FALLIDO = 'Fallido'
    ESTADO_CHOICES = [
        (ESTADO_PENDIENTE, 'Pendiente'),
        (ESTADO_COMPLETADO, 'Completado'),
        (ESTADO_FALLIDO, 'Fallido'),
    ]

    solicitud = models.ForeignKey(Solicitud, null=True, blank=True, on_delete=models.SET_NULL, related_name='pagos')
    monto = models.DecimalField(max_digits=14, decimal_places=2)
    transaccion = models.CharField(max_length=40, blank=True, db_index=True)
    estado = models.CharField(max_length=12, choices=ESTADO_CHOICES, default=ESTADO_PENDIENTE, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"pago #{self.id} {self.monto} ({self.estado})"


# ---------------------------------------------------------------------------
# Notifications & notices
# ---------------------------------------------------------------------------

class Notificacion(models.Model):
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='notificaciones')
    titulo = models.CharField(max_length=100)
    mensaje = models.TextField()
    tipo = models.CharField(max_length=50)
    leida = models.BooleanField(default=False)
    referencia_id = models.BigIntegerField(null=True, blank=True)
    referencia_tipo = models.CharField(max_length=50, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['hospital', 'created_at'], name='notif_hospital_created_idx')]

    def __str__(self) -> str:
        return f"{self.titulo} -> {self.hospital_id}"


class Aviso(models.Model):
    """A notice shown to every user until its ``fecha`` passes."""
    MAXIMO = 3

    titulo = models.CharField(max_length=150)
    descripcion = models.TextField()
    fecha = models.DateField(help_text="Last day the notice is shown")
    publicado = models.BooleanField(default=False, db_index=True)
    usuario = models.ForeignKey(Usuario, null=True, on_delete=models.SET_NULL, related_name='avisos')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.titulo


class AuditEvent(models.Model):
    user = models.ForeignKey(Usuario, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.BigIntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]
