from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.models import EstadoEnvio, Transporte


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def transportes_list(request):
    data = [{'id': t.id, 'nombre': t.nombre} for t in Transporte.objects.order_by('nombre')]
    return Response({'ok': True, 'data': data})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def estados_envio_list(request):
    """Shipment states in the order a shipment moves through them."""
    data = [{'id': e.id, 'estado': e.estado, 'orden': e.orden} for e in EstadoEnvio.objects.order_by('orden')]
    return Response({'ok': True, 'data': data})
