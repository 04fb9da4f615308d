import bleach
from rest_framework import serializers

TIPOS = ['pin_envio', 'estado_envio', 'solicitud', 'donacion', 'general']


class NotificacionCreateSerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1)
    titulo = serializers.CharField(max_length=100)
    mensaje = serializers.CharField(max_length=1000)
    tipo = serializers.ChoiceField(choices=TIPOS, required=False, default='general')
    referencia_id = serializers.IntegerField(required=False, allow_null=True)
    referencia_tipo = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=50)

    def validate_titulo(self, v):
        return bleach.clean(v.strip(), tags=set(), strip=True)

    def validate_mensaje(self, v):
        return bleach.clean(v.strip(), tags=set(), strip=True)


class NotificacionQuerySerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1)
