import bleach
from rest_framework import serializers


class AvisoSerializer(serializers.Serializer):
    titulo = serializers.CharField(min_length=1, max_length=100)
    descripcion = serializers.CharField(min_length=1, max_length=2000)
    fecha = serializers.DateField()
    publicado = serializers.BooleanField(required=False)

    def validate_titulo(self, v):
        return bleach.clean(v.strip(), tags=set(), strip=True)

    def validate_descripcion(self, v):
        return bleach.clean(v.strip(), tags=set(), strip=True)
