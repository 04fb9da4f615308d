from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.serializers.encargados import EncargadoSerializer
from intercambio.services.audit import registrar_evento
from intercambio.services.encargados import (
    actualizar_encargado,
    crear_encargado,
    eliminar_encargado,
    formatear_encargado,
    obtener_por_hospital,
)


class EncargadoQuerySerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def encargados_list(request):
    if request.method == 'GET':
        q = EncargadoQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        encargado = obtener_por_hospital(q.validated_data['hospital_id'])
        return Response({'ok': True, 'encargado': formatear_encargado(encargado) if encargado else None})

    s = EncargadoSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    encargado = crear_encargado(**s.validated_data)
    registrar_evento(request, 'encargado.crear', 'encargado', encargado.id)
    return Response({'ok': True, 'encargado': formatear_encargado(encargado)}, status=status.HTTP_201_CREATED)


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def encargado_detail(request, encargado_id: int):
    if request.method == 'DELETE':
        eliminar_encargado(encargado_id)
        registrar_evento(request, 'encargado.eliminar', 'encargado', encargado_id)
        return Response({'ok': True, 'message': 'Encargado eliminado'})

    s = EncargadoSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    encargado = actualizar_encargado(encargado_id, **s.validated_data)
    registrar_evento(request, 'encargado.actualizar', 'encargado', encargado.id)
    return Response({'ok': True, 'encargado': formatear_encargado(encargado)})
