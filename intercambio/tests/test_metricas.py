from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from intercambio.models import EstadoEnvio, Envio, Pago, Publicacion, Solicitud, Transporte
from intercambio.services.metricas import calcular_metricas, inicio_ventana

pytestmark = pytest.mark.django_db


def _publicacion(hospital, **extra):
    datos = dict(hospital=hospital, principioactivo='Amoxicilina', cantidad=30, reg_invima='INVIMA 2018M-1',
                 fecha_expiracion=date(2027, 3, 1), cantidadcum='500', unidadmedida='mg',
                 formafarmaceutica='Cápsula', titular='Genfar', descripcioncomercial='Amoxicilina 500 mg')
    datos.update(extra)
    return Publicacion.objects.create(**datos)


def _envio(estado):
    ahora = timezone.now()
    return Envio.objects.create(
        transporte=Transporte.objects.first(),
        estado_envio=EstadoEnvio.objects.get(estado=estado),
        fecha_recoleccion=ahora,
        fecha_entrega_estimada=ahora,
    )


def _mes_actual():
    return timezone.localtime().strftime('%Y-%m')


def test_window_start_clamps_to_month_end():
    tz = timezone.get_current_timezone()
    ahora = datetime(2024, 3, 31, 10, 0, tzinfo=tz)
    assert inicio_ventana(ahora, 1) == datetime(2024, 2, 29, 10, 0, tzinfo=tz)
    assert inicio_ventana(datetime(2025, 1, 15, tzinfo=tz), 12) == datetime(2024, 1, 15, tzinfo=tz)


def test_single_month_bucket_and_empty_months_omitted(hospital):
    _publicacion(hospital)
    _publicacion(hospital)
    data = calcular_metricas()
    assert data['publicacionesPorMes'] == [{'mes': _mes_actual(), 'total': 2}]


def test_activity_outside_window_is_ignored(hospital):
    vieja = _publicacion(hospital)
    Publicacion.objects.filter(id=vieja.id).update(created_at=timezone.now() - timedelta(days=800))
    data = calcular_metricas()
    assert data['publicacionesPorMes'] == []
    assert data['metricas']['totalPublicaciones'] == 1


def test_delivered_versus_received(db):
    _envio(EstadoEnvio.ENTREGADO)
    _envio(EstadoEnvio.EN_CAMINO)
    _envio(EstadoEnvio.EMPAQUETANDO)
    comparacion = calcular_metricas()['comparacion']
    assert comparacion['enviosEntregados'] == [{'mes': _mes_actual(), 'total': 1}]
    assert comparacion['enviosRecibidos'] == [{'mes': _mes_actual(), 'total': 3}]


def test_counters(hospital, usuario):
    p = _publicacion(hospital)
    s = Solicitud.objects.create(publicacion=p, hospital=hospital, cantidad=5)
    Solicitud.objects.create(publicacion=p, hospital=hospital, cantidad=2)
    Pago.objects.create(solicitud=s, monto=Decimal('1500.50'), estado=Pago.ESTADO_COMPLETADO)
    Pago.objects.create(solicitud=s, monto=Decimal('100.00'), estado=Pago.ESTADO_PENDIENTE)

    m = calcular_metricas()['metricas']
    assert m['totalUsuarios'] == 1
    assert m['totalHospitales'] == 1
    assert m['totalFacturado'] == 1500.5
    assert m['totalSolicitudes'] == 2
    # publications minus requests, not a count of available listings
    assert m['publicacionesDisponibles'] == -1


def test_dashboard_endpoint_shape(api):
    r = api.get(reverse('dashboard-metricas'))
    assert r.status_code == 200
    assert set(r.data) == {'metricas', 'publicacionesPorMes', 'comparacion'}
    assert set(r.data['comparacion']) == {'enviosEntregados', 'enviosRecibidos'}
    assert r.data['metricas']['totalFacturado'] == 0.0
