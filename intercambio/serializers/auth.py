import re
from datetime import date

import bleach
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from intercambio.models import Hospital

SOLO_DIGITOS = re.compile(r'^[0-9]+$')
CONTRASENA_FUERTE = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)')


class RegistroSerializer(serializers.Serializer):
    nombres = serializers.CharField(min_length=2, max_length=50)
    apellidos = serializers.CharField(min_length=2, max_length=50)
    fecha_nacimiento = serializers.DateField(required=False, allow_null=True)
    sexo = serializers.ChoiceField(choices=['Hombre', 'Mujer', 'Otro'], required=False)
    cedula = serializers.CharField(min_length=8, max_length=12)
    correo_corporativo = serializers.EmailField(max_length=100)
    celular = serializers.CharField(required=False, allow_blank=True, min_length=10, max_length=10)
    numero_tarjeta_profesional = serializers.CharField(required=False, allow_blank=True, max_length=50)
    hospital_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    contrasena = serializers.CharField(min_length=8, write_only=True)
    confirmar_contrasena = serializers.CharField(write_only=True)

    def validate_nombres(self, v):
        return bleach.clean(v.strip(), tags=set(), strip=True)

    def validate_apellidos(self, v):
        return bleach.clean(v.strip(), tags=set(), strip=True)

    def validate_cedula(self, v):
        if not SOLO_DIGITOS.match(v):
            raise serializers.ValidationError('Solo se permiten números')
        return v

    def validate_celular(self, v):
        if v and not SOLO_DIGITOS.match(v):
            raise serializers.ValidationError('Solo se permiten números')
        return v

    def validate_correo_corporativo(self, v):
        return v.strip().lower()

    def validate_fecha_nacimiento(self, v):
        if v is None:
            return v
        hoy = date.today()
        edad = hoy.year - v.year - ((hoy.month, hoy.day) < (v.month, v.day))
        if edad < 18 or edad > 100:
            raise serializers.ValidationError('Debe ser mayor de 18 años')
        return v

    def validate_hospital_id(self, v):
        if v is not None and not Hospital.objects.filter(id=v).exists():
            raise serializers.ValidationError('Hospital no encontrado')
        return v

    def validate_contrasena(self, v):
        if not CONTRASENA_FUERTE.match(v):
            raise serializers.ValidationError('al menos una mayúscula, una minúscula y un número')
        return v

    def validate(self, attrs):
        if attrs['contrasena'] != attrs['confirmar_contrasena']:
            raise serializers.ValidationError({'confirmar_contrasena': ['Las contraseñas no coinciden']})
        try:
            validate_password(attrs['contrasena'])
        except DjangoValidationError as e:
            raise serializers.ValidationError({'contrasena': e.messages})
        return attrs


class InicioSesionSerializer(serializers.Serializer):
    correo_corporativo = serializers.EmailField()
    contrasena = serializers.CharField()
    recordar = serializers.BooleanField(required=False, default=False)

    def validate_correo_corporativo(self, v):
        v = (v or '').strip().lower()
        if not v:
            raise serializers.ValidationError('El correo es requerido')
        return v
