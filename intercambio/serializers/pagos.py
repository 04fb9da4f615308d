from decimal import Decimal

from rest_framework import serializers

from intercambio.models import Pago
from intercambio.services.pagos import REALIZADOS, RECIBIDOS


class PagoCreateSerializer(serializers.Serializer):
    solicitud_id = serializers.IntegerField(min_value=1)
    monto = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))


class PagoEstadoSerializer(serializers.Serializer):
    estado = serializers.ChoiceField(choices=[c[0] for c in Pago.ESTADO_CHOICES])


class PagoQuerySerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1, required=False)
    tipo = serializers.ChoiceField(choices=[REALIZADOS, RECIBIDOS], required=False, default=REALIZADOS)
    estado = serializers.ChoiceField(choices=[c[0] for c in Pago.ESTADO_CHOICES], required=False)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    pageSize = serializers.IntegerField(min_value=1, max_value=200, required=False, default=10)
