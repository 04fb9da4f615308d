import bleach
from rest_framework import serializers

from intercambio.models import Publicacion


def _limpiar(v):
    return bleach.clean((v or '').strip(), tags=set(), strip=True)


class PublicacionCreateSerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1)
    principioactivo = serializers.CharField(max_length=255)
    cantidad = serializers.IntegerField(min_value=1)
    reg_invima = serializers.CharField(max_length=50)
    fecha_expiracion = serializers.DateField()
    descripcion = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    cantidadcum = serializers.CharField(required=False, allow_blank=True, max_length=50)
    unidadmedida = serializers.CharField(required=False, allow_blank=True, max_length=50)
    formafarmaceutica = serializers.CharField(required=False, allow_blank=True, max_length=100)
    titular = serializers.CharField(required=False, allow_blank=True, max_length=255)
    descripcioncomercial = serializers.CharField(required=False, allow_blank=True, max_length=255)

    def validate_principioactivo(self, v):
        v = _limpiar(v)
        if not v:
            raise serializers.ValidationError('El principio activo es requerido')
        return v

    def validate_descripcion(self, v):
        return _limpiar(v)


class PublicacionUpdateSerializer(serializers.Serializer):
    cantidad = serializers.IntegerField(min_value=1, required=False)
    descripcion = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    fecha_expiracion = serializers.DateField(required=False)
    estado = serializers.ChoiceField(choices=[c[0] for c in Publicacion.ESTADO_CHOICES], required=False)

    def validate_descripcion(self, v):
        return _limpiar(v)
