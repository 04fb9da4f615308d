from rest_framework import serializers

from intercambio.models import Solicitud


class SolicitudCreateSerializer(serializers.Serializer):
    publicacion_id = serializers.IntegerField(min_value=1)
    hospital_id = serializers.IntegerField(min_value=1)
    cantidad = serializers.IntegerField(min_value=1)


class SolicitudEstadoSerializer(serializers.Serializer):
    nuevoEstado = serializers.ChoiceField(choices=[Solicitud.ESTADO_APROBADA, Solicitud.ESTADO_RECHAZADA])


class SolicitudQuerySerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1, required=False)
    publicacion_hospital_id = serializers.IntegerField(min_value=1, required=False)
    estado = serializers.ChoiceField(choices=[c[0] for c in Solicitud.ESTADO_CHOICES], required=False)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    pageSize = serializers.IntegerField(min_value=1, max_value=200, required=False, default=10)
