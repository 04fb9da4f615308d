import bleach
from rest_framework import serializers


class DonacionCreateSerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1)
    hospital_destino_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    principioactivo = serializers.CharField(max_length=255)
    cantidad = serializers.IntegerField(min_value=1)
    lote = serializers.CharField(max_length=50)
    cum = serializers.CharField(max_length=50)
    reg_invima = serializers.CharField(max_length=50)
    fecha_fabricacion = serializers.DateField()
    fecha_expiracion = serializers.DateField()
    descripcion = serializers.CharField(required=False, allow_blank=True, max_length=2000)

    def validate_principioactivo(self, v):
        return bleach.clean(v.strip(), tags=set(), strip=True)

    def validate_descripcion(self, v):
        return bleach.clean((v or '').strip(), tags=set(), strip=True)

    def validate(self, attrs):
        if attrs['fecha_expiracion'] <= attrs['fecha_fabricacion']:
            raise serializers.ValidationError(
                {'fecha_expiracion': ['Debe ser posterior a la fecha de fabricación']}
            )
        return attrs


class DonacionSolicitarSerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1)
