from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.serializers.envios import CambiarEstadoSerializer
from intercambio.services.audit import registrar_evento
from intercambio.services.envios import cambiar_estado, formatear_envio, listar_envios


class EnvioListQuerySerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1, required=False)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def envios_list(request):
    q = EnvioListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    envios = listar_envios(q.validated_data.get('hospital_id'))
    return Response({'ok': True, 'data': [formatear_envio(e) for e in envios]})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def envio_cambiar_estado(request, envio_id: int):
    s = CambiarEstadoSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    envio, pin = cambiar_estado(envio_id, s.validated_data['nuevoEstadoNombre'], s.validated_data.get('pin'))
    registrar_evento(request, 'envio.estado', 'envio', envio.id, estado=envio.estado_envio.estado)
    payload = {'ok': True, 'message': f"Estado actualizado a '{envio.estado_envio.estado}'", 'envio': formatear_envio(envio)}
    if pin:
        payload['pin'] = pin
    return Response(payload)
