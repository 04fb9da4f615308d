import bleach
from rest_framework import serializers


class EnvioCreateSerializer(serializers.Serializer):
    donacion_id = serializers.IntegerField(min_value=1)
    transporte_id = serializers.IntegerField(min_value=1)
    fecha_recoleccion = serializers.DateTimeField()
    fecha_entrega_estimada = serializers.DateTimeField()
    descripcion = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=2000)
    encargado_logistica_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)

    def validate_descripcion(self, v):
        return bleach.clean(v.strip(), tags=set(), strip=True) if v else v

    def validate(self, attrs):
        if attrs['fecha_entrega_estimada'] < attrs['fecha_recoleccion']:
            raise serializers.ValidationError(
                {'fecha_entrega_estimada': ['Debe ser posterior a la fecha de recolección']}
            )
        return attrs


class CambiarEstadoSerializer(serializers.Serializer):
    nuevoEstadoNombre = serializers.CharField(max_length=50)
    pin = serializers.RegexField(r'^\d{4}$', required=False, allow_blank=True, allow_null=True)
