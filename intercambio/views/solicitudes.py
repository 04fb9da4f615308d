"""
Request views.

A hospital requests medication from another hospital's publication;
the publishing hospital approves or rejects it.  ``hospital_id`` lists
the requests a hospital made, ``publicacion_hospital_id`` the ones it
received.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.serializers.solicitudes import (
    SolicitudCreateSerializer,
    SolicitudEstadoSerializer,
    SolicitudQuerySerializer,
)
from intercambio.services.audit import registrar_evento
from intercambio.services.solicitudes import (
    cambiar_estado_solicitud,
    crear_solicitud,
    formatear_solicitud,
    listar_solicitudes,
    obtener_solicitud,
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def solicitudes_list(request):
    if request.method == 'GET':
        q = SolicitudQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        vd = q.validated_data
        qs = listar_solicitudes(vd.get('hospital_id'), vd.get('publicacion_hospital_id'), vd.get('estado'))
        total = qs.count()
        start = (vd['page'] - 1) * vd['pageSize']
        data = [formatear_solicitud(s) for s in qs[start:start + vd['pageSize']]]
        return Response({'ok': True, 'data': data,
                         'pagination': {'total': total, 'page': vd['page'], 'pageSize': vd['pageSize']}})

    s = SolicitudCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    solicitud = crear_solicitud(**s.validated_data)
    registrar_evento(request, 'solicitud.crear', 'solicitud', solicitud.id)
    return Response({'ok': True, 'solicitud': formatear_solicitud(solicitud)}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def solicitud_detail(request, solicitud_id: int):
    return Response({'ok': True, 'solicitud': formatear_solicitud(obtener_solicitud(solicitud_id))})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def solicitud_estado(request, solicitud_id: int):
    s = SolicitudEstadoSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    solicitud = cambiar_estado_solicitud(solicitud_id, s.validated_data['nuevoEstado'])
    registrar_evento(request, 'solicitud.estado', 'solicitud', solicitud.id, estado=solicitud.estado)
    return Response({'ok': True, 'solicitud': formatear_solicitud(solicitud)})
