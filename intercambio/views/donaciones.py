"""
Donation views.

Donations are listed and created directly; attaching a shipment to a
donation goes through :func:`intercambio.services.envios.crear_envio`,
which guarantees at most one shipment per donation.
"""
from __future__ import annotations

from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.serializers.donaciones import DonacionCreateSerializer, DonacionSolicitarSerializer
from intercambio.serializers.envios import EnvioCreateSerializer
from intercambio.services.audit import registrar_evento
from intercambio.services.donaciones import crear_donacion, formatear_donacion, listar_donaciones, solicitar_donacion
from intercambio.services.envios import crear_envio, formatear_envio


class DonacionListQuerySerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1, required=False)
    page = serializers.IntegerField(min_value=1, required=False)
    pageSize = serializers.IntegerField(min_value=1, max_value=200, required=False)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def donaciones_list(request):
    if request.method == 'GET':
        q = DonacionListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        page = q.validated_data.get('page', 1)
        page_size = q.validated_data.get('pageSize', 20)
        qs = listar_donaciones(q.validated_data.get('hospital_id'))
        total = qs.count()
        start = (page - 1) * page_size
        data = [formatear_donacion(d) for d in qs[start:start + page_size]]
        return Response({'ok': True, 'data': data,
                         'pagination': {'total': total, 'page': page, 'pageSize': page_size}})

    s = DonacionCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    donacion = crear_donacion(**s.validated_data)
    registrar_evento(request, 'donacion.crear', 'donacion', donacion.id)
    return Response({'ok': True, 'donacion': formatear_donacion(donacion)}, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def donacion_envio(request):
    s = EnvioCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    envio = crear_envio(**s.validated_data)
    registrar_evento(request, 'envio.crear', 'envio', envio.id, donacion_id=s.validated_data['donacion_id'])
    return Response({'ok': True, 'message': 'Envío creado exitosamente', 'envio': formatear_envio(envio)},
                    status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def donacion_solicitar(request, donacion_id: int):
    s = DonacionSolicitarSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    donacion = solicitar_donacion(donacion_id, s.validated_data['hospital_id'])
    registrar_evento(request, 'donacion.solicitar', 'donacion', donacion.id, hospital_id=donacion.hospital_destino_id)
    return Response({'ok': True, 'message': 'Donación solicitada exitosamente', 'donacion': formatear_donacion(donacion)})
