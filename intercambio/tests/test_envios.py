import pytest
from django.urls import reverse
from django.utils import timezone

from intercambio.exceptions import Conflict
from intercambio.models import EstadoDonacion, EstadoEnvio, Envio, Hospital, Notificacion
from intercambio.services import envios as envios_svc

pytestmark = pytest.mark.django_db


def _crear(api, payload):
    return api.post(reverse('donacion-envio'), payload, format='json')


def test_shipment_is_created_once_per_donation(api, donacion, envio_payload):
    r = _crear(api, envio_payload)
    assert r.status_code == 201
    assert r.data['ok'] is True
    envio = r.data['envio']
    assert isinstance(envio['id'], int)
    assert isinstance(envio['transporte_id'], int)
    assert envio['estado'] == EstadoEnvio.EMPAQUETANDO
    assert envio['estado_envio_id'] == EstadoEnvio.objects.get(estado=EstadoEnvio.EMPAQUETANDO).id

    donacion.refresh_from_db()
    assert donacion.envio_id == envio['id']

    r2 = _crear(api, envio_payload)
    assert r2.status_code == 400
    assert r2.data['ok'] is False
    assert r2.data['error']['code'] == 'conflict'
    assert Envio.objects.count() == 1


def test_service_refuses_second_shipment(donacion, transporte):
    ahora = timezone.now()
    kwargs = dict(donacion_id=donacion.id, transporte_id=transporte.id,
                  fecha_recoleccion=ahora, fecha_entrega_estimada=ahora)
    envios_svc.crear_envio(**kwargs)
    with pytest.raises(Conflict):
        envios_svc.crear_envio(**kwargs)
    assert Envio.objects.count() == 1


def test_unknown_donation_is_not_found(api, envio_payload):
    envio_payload['donacion_id'] = 999999
    r = _crear(api, envio_payload)
    assert r.status_code == 404
    assert r.data['error']['code'] == 'not_found'
    assert Envio.objects.count() == 0


def test_unknown_transport_is_not_found(api, donacion, envio_payload):
    envio_payload['transporte_id'] = 999999
    r = _crear(api, envio_payload)
    assert r.status_code == 404
    donacion.refresh_from_db()
    assert donacion.envio_id is None
    assert Envio.objects.count() == 0


def test_missing_initial_state_is_internal_error(api, donacion, envio_payload):
    EstadoEnvio.objects.filter(estado=EstadoEnvio.EMPAQUETANDO).delete()
    r = _crear(api, envio_payload)
    assert r.status_code == 500
    assert r.data['error']['code'] == 'invariant_violation'
    donacion.refresh_from_db()
    assert donacion.envio_id is None
    assert Envio.objects.count() == 0


def test_validation_errors_list_fields(api, envio_payload):
    del envio_payload['transporte_id']
    envio_payload['fecha_recoleccion'] = 'ayer'
    r = _crear(api, envio_payload)
    assert r.status_code == 400
    assert r.data['error']['code'] == 'validation_error'
    campos = {f['field'] for f in r.data['error']['fields']}
    assert {'transporte_id', 'fecha_recoleccion'} <= campos


def test_delivery_date_before_pickup_is_rejected(api, envio_payload):
    envio_payload['fecha_entrega_estimada'], envio_payload['fecha_recoleccion'] = (
        envio_payload['fecha_recoleccion'], envio_payload['fecha_entrega_estimada'],
    )
    r = _crear(api, envio_payload)
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'fecha_entrega_estimada'


def test_state_moves_forward_with_delivery_pin(api, donacion, envio_payload, hospital_destino):
    envio_id = _crear(api, envio_payload).data['envio']['id']
    url = reverse('envio-cambiar-estado', args=[envio_id])

    r = api.post(url, {'nuevoEstadoNombre': 'en camino'}, format='json')
    assert r.status_code == 200
    assert r.data['envio']['estado'] == EstadoEnvio.EN_CAMINO
    pin = r.data['pin']
    assert len(pin) == 4 and pin.isdigit()
    assert Notificacion.objects.filter(hospital=hospital_destino, tipo='pin_envio', referencia_id=envio_id).exists()
    donacion.refresh_from_db()
    assert donacion.estado_donacion.nombre == EstadoDonacion.ASIGNADA

    r = api.post(url, {'nuevoEstadoNombre': 'Entregado'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'pin'

    r = api.post(url, {'nuevoEstadoNombre': 'Entregado', 'pin': '0000'}, format='json')
    assert r.status_code == 401
    assert r.data['error']['code'] == 'pin_incorrecto'
    assert Envio.objects.get(id=envio_id).estado_envio.estado == EstadoEnvio.EN_CAMINO

    r = api.post(url, {'nuevoEstadoNombre': 'Entregado', 'pin': pin}, format='json')
    assert r.status_code == 200
    assert 'pin' not in r.data
    envio = Envio.objects.get(id=envio_id)
    assert envio.estado_envio.estado == EstadoEnvio.ENTREGADO
    assert envio.pin is None
    donacion.refresh_from_db()
    assert donacion.estado_donacion.nombre == EstadoDonacion.ENTREGADA


def test_state_cannot_move_backwards(api, envio_payload):
    envio_id = _crear(api, envio_payload).data['envio']['id']
    url = reverse('envio-cambiar-estado', args=[envio_id])
    assert api.post(url, {'nuevoEstadoNombre': 'En camino'}, format='json').status_code == 200

    r = api.post(url, {'nuevoEstadoNombre': 'Empaquetando'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'conflict'

    r = api.post(url, {'nuevoEstadoNombre': 'En camino'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'conflict'


def test_unknown_state_name_lists_valid_states(api, envio_payload):
    envio_id = _crear(api, envio_payload).data['envio']['id']
    r = api.post(reverse('envio-cambiar-estado', args=[envio_id]), {'nuevoEstadoNombre': 'Perdido'}, format='json')
    assert r.status_code == 400
    assert 'Empaquetando' in r.data['error']['fields'][0]['message']


def test_unknown_shipment_state_change_is_not_found(api):
    r = api.post(reverse('envio-cambiar-estado', args=[424242]), {'nuevoEstadoNombre': 'En camino'}, format='json')
    assert r.status_code == 404


def test_list_shipments_by_hospital(api, envio_payload, hospital_destino):
    _crear(api, envio_payload)
    r = api.get(reverse('envios'), {'hospital_id': hospital_destino.id})
    assert r.status_code == 200
    assert len(r.data['data']) == 1

    ajeno = Hospital.objects.create(nombre='Hospital Ajeno')
    r = api.get(reverse('envios'), {'hospital_id': ajeno.id})
    assert r.data['data'] == []


def test_donation_shipment_then_metrics(api, hospital, hospital_destino, transporte):
    r = api.post(reverse('donaciones'), {
        'hospital_id': hospital.id,
        'hospital_destino_id': hospital_destino.id,
        'principioactivo': 'Ibuprofeno',
        'cantidad': 40,
        'lote': 'IB-77',
        'cum': '20010101-2',
        'reg_invima': 'INVIMA 2020M-0099',
        'fecha_fabricacion': '2024-05-01',
        'fecha_expiracion': '2026-05-01',
    }, format='json')
    assert r.status_code == 201
    donacion_id = r.data['donacion']['id']
    assert r.data['donacion']['estado_donacion'] == EstadoDonacion.DISPONIBLE

    ahora = timezone.now()
    r = api.post(reverse('donacion-envio'), {
        'donacion_id': donacion_id,
        'transporte_id': transporte.id,
        'fecha_recoleccion': ahora.isoformat(),
        'fecha_entrega_estimada': ahora.isoformat(),
    }, format='json')
    assert r.status_code == 201
    assert r.data['envio']['estado'] == EstadoEnvio.EMPAQUETANDO

    r = api.get(reverse('dashboard-metricas'))
    assert r.status_code == 200
    mes = timezone.localtime(ahora).strftime('%Y-%m')
    assert r.data['comparacion']['enviosRecibidos'] == [{'mes': mes, 'total': 1}]
    assert r.data['comparacion']['enviosEntregados'] == []
    assert r.data['metricas']['totalDonaciones'] == 1
