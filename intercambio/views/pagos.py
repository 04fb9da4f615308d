from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.serializers.pagos import PagoCreateSerializer, PagoEstadoSerializer, PagoQuerySerializer
from intercambio.services.audit import registrar_evento
from intercambio.services.pagos import (
    cambiar_estado_pago,
    crear_pago,
    estadisticas,
    formatear_pago,
    pagos_de_hospital,
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def pagos_list(request):
    if request.method == 'GET':
        q = PagoQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        vd = q.validated_data
        base = pagos_de_hospital(vd.get('hospital_id'), vd['tipo'])
        qs = base.filter(estado=vd['estado']) if vd.get('estado') else base
        total = qs.count()
        start = (vd['page'] - 1) * vd['pageSize']
        return Response({
            'ok': True,
            'data': [formatear_pago(p) for p in qs[start:start + vd['pageSize']]],
            'estadisticas': estadisticas(base),
            'pagination': {'total': total, 'page': vd['page'], 'pageSize': vd['pageSize']},
        })

    s = PagoCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    pago = crear_pago(**s.validated_data)
    registrar_evento(request, 'pago.crear', 'pago', pago.id, transaccion=pago.transaccion)
    return Response({'ok': True, 'message': 'Pago registrado exitosamente', 'pago': formatear_pago(pago)},
                    status=status.HTTP_201_CREATED)


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def pago_detail(request, pago_id: int):
    s = PagoEstadoSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    pago = cambiar_estado_pago(pago_id, s.validated_data['estado'])
    registrar_evento(request, 'pago.estado', 'pago', pago.id, estado=pago.estado)
    return Response({'ok': True, 'pago': formatear_pago(pago)})
