"""
Publication views.

Hospitals list medication they can offer; other hospitals browse the
listing and request from it.  These are thin CRUD handlers over the ORM.
"""
from __future__ import annotations

from django.db import transaction
from rest_framework import serializers, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.exceptions import NotFound
from intercambio.models import Hospital, Publicacion
from intercambio.serializers.publicaciones import PublicacionCreateSerializer, PublicacionUpdateSerializer
from intercambio.services.audit import registrar_evento


def _serialize(p: Publicacion) -> dict:
    return {
        'id': p.id,
        'hospital_id': p.hospital_id,
        'hospital': p.hospital.nombre if p.hospital_id else None,
        'principioactivo': p.principioactivo,
        'cantidad': p.cantidad,
        'reg_invima': p.reg_invima,
        'fecha_expiracion': p.fecha_expiracion.isoformat() if p.fecha_expiracion else None,
        'descripcion': p.descripcion,
        'cantidadcum': p.cantidadcum,
        'unidadmedida': p.unidadmedida,
        'formafarmaceutica': p.formafarmaceutica,
        'titular': p.titular,
        'descripcioncomercial': p.descripcioncomercial,
        'estado': p.estado,
        'created_at': p.created_at.isoformat() if p.created_at else None,
        'updated_at': p.updated_at.isoformat() if p.updated_at else None,
    }


class PublicacionListQuerySerializer(serializers.Serializer):
    hospital_id = serializers.IntegerField(min_value=1, required=False)
    estado = serializers.ChoiceField(choices=[c[0] for c in Publicacion.ESTADO_CHOICES], required=False)


def _publicacion_o_404(publicacion_id: int) -> Publicacion:
    p = Publicacion.objects.select_related('hospital').filter(id=publicacion_id).first()
    if p is None:
        raise NotFound('Publicación no encontrada')
    return p


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def publicaciones_list(request):
    if request.method == 'GET':
        q = PublicacionListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = Publicacion.objects.select_related('hospital')
        if q.validated_data.get('hospital_id'):
            qs = qs.filter(hospital_id=q.validated_data['hospital_id'])
        if q.validated_data.get('estado'):
            qs = qs.filter(estado=q.validated_data['estado'])
        return Response({'ok': True, 'data': [_serialize(p) for p in qs.order_by('-created_at', '-id')]})

    s = PublicacionCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    with transaction.atomic():
        if not Hospital.objects.filter(id=vd['hospital_id']).exists():
            raise NotFound('Hospital no encontrado')
        p = Publicacion.objects.create(**vd)
    registrar_evento(request, 'publicacion.crear', 'publicacion', p.id)
    return Response({'ok': True, 'publicacion': _serialize(p)}, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def publicacion_detail(request, publicacion_id: int):
    p = _publicacion_o_404(publicacion_id)
    if request.method == 'GET':
        return Response({'ok': True, 'publicacion': _serialize(p)})

    s = PublicacionUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    for campo, valor in s.validated_data.items():
        setattr(p, campo, valor)
    p.save()
    registrar_evento(request, 'publicacion.actualizar', 'publicacion', p.id, campos=sorted(s.validated_data))
    return Response({'ok': True, 'publicacion': _serialize(p)})
