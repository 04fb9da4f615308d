from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from intercambio.services.metricas import calcular_metricas


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_metricas(request):
    """Counters plus the publication and shipment series for the last 12 months."""
    return Response(calcular_metricas())
