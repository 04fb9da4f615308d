"""
Notice board views.

At most three notices exist at any time.  ``GET /api/avisos/publicados``
first unpublishes notices whose date has passed and then returns the
ones still in force; the ``barrer_avisos`` management command runs the
same sweep on a schedule so the list stays correct between requests.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.permissions import IsAdminOrReadOnly
from intercambio.serializers.avisos import AvisoSerializer
from intercambio.services.audit import registrar_evento
from intercambio.services.avisos import (
    actualizar_aviso,
    barrer_avisos_vencidos,
    crear_aviso,
    eliminar_aviso,
    formatear_aviso,
    listar_avisos,
    listar_avisos_activos,
    obtener_aviso,
)


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def avisos_list(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': [formatear_aviso(a) for a in listar_avisos()]})

    s = AvisoSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    aviso = crear_aviso(titulo=vd['titulo'], descripcion=vd['descripcion'], fecha=vd['fecha'], usuario=request.user)
    registrar_evento(request, 'aviso.crear', 'aviso', aviso.id)
    return Response({'ok': True, 'aviso': formatear_aviso(aviso)}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def aviso_detail(request, aviso_id: int):
    if request.method == 'GET':
        return Response({'ok': True, 'aviso': formatear_aviso(obtener_aviso(aviso_id))})

    if request.method == 'DELETE':
        eliminar_aviso(aviso_id)
        registrar_evento(request, 'aviso.eliminar', 'aviso', aviso_id)
        return Response({'ok': True, 'message': 'Aviso eliminado'})

    s = AvisoSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    aviso = actualizar_aviso(aviso_id, s.validated_data)
    registrar_evento(request, 'aviso.actualizar', 'aviso', aviso.id, publicado=aviso.publicado)
    return Response({'ok': True, 'aviso': formatear_aviso(aviso)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def avisos_publicados(request):
    # side effect: expired notices are unpublished before listing
    barrer_avisos_vencidos()
    data = [formatear_aviso(a, con_usuario=False) for a in listar_avisos_activos()]
    return Response({'ok': True, 'data': data})
