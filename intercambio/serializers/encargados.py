import re

import bleach
from rest_framework import serializers

SOLO_DIGITOS = re.compile(r'^[0-9]+$')


class EncargadoSerializer(serializers.Serializer):
    nombre = serializers.CharField(min_length=1, max_length=50)
    apellido = serializers.CharField(min_length=1, max_length=50)
    cedula = serializers.IntegerField(min_value=1)
    correo = serializers.EmailField(max_length=50, required=False, allow_blank=True, allow_null=True)
    celular = serializers.CharField(min_length=1, max_length=10)
    hospital_id = serializers.IntegerField(min_value=1)

    def validate_nombre(self, v):
        v = bleach.clean(v.strip(), tags=set(), strip=True)
        if not v:
            raise serializers.ValidationError('El nombre es requerido')
        return v

    def validate_apellido(self, v):
        v = bleach.clean(v.strip(), tags=set(), strip=True)
        if not v:
            raise serializers.ValidationError('El apellido es requerido')
        return v

    def validate_celular(self, v):
        v = v.strip()
        if not SOLO_DIGITOS.match(v):
            raise serializers.ValidationError('Solo se permiten números')
        return v

    def validate_correo(self, v):
        return v.strip().lower() if v else None
