from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.serializers.notificaciones import NotificacionCreateSerializer, NotificacionQuerySerializer
from intercambio.services.notificaciones import (
    crear_notificacion,
    eliminar_notificacion,
    formatear_notificacion,
    listar_notificaciones,
    marcar_leida,
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def notificaciones_list(request):
    if request.method == 'GET':
        q = NotificacionQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        data = [formatear_notificacion(n) for n in listar_notificaciones(q.validated_data['hospital_id'])]
        return Response({'ok': True, 'data': data})

    s = NotificacionCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    n = crear_notificacion(**s.validated_data)
    return Response({'ok': True, 'notificacion': formatear_notificacion(n)}, status=status.HTTP_201_CREATED)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def notificacion_detail(request, notificacion_id: int):
    if request.method == 'DELETE':
        eliminar_notificacion(notificacion_id)
        return Response({'ok': True, 'message': 'Notificación eliminada'})
    n = marcar_leida(notificacion_id)
    return Response({'ok': True, 'notificacion': formatear_notificacion(n)})
