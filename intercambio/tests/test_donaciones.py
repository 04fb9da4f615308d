import pytest
from django.urls import reverse

from intercambio import exceptions
from intercambio.models import EstadoDonacion, Notificacion, Publicacion

pytestmark = pytest.mark.django_db


def _donacion_payload(hospital, **extra):
    datos = {
        'hospital_id': hospital.id,
        'principioactivo': 'Losartán',
        'cantidad': 60,
        'lote': 'LS-301',
        'cum': '20055511-3',
        'reg_invima': 'INVIMA 2017M-0101',
        'fecha_fabricacion': '2024-02-01',
        'fecha_expiracion': '2026-02-01',
    }
    datos.update(extra)
    return datos


def test_list_donations_paginated(api, hospital, donacion):
    r = api.get(reverse('donaciones'), {'hospital_id': hospital.id, 'pageSize': 10})
    assert r.status_code == 200
    assert r.data['pagination'] == {'total': 1, 'page': 1, 'pageSize': 10}
    item = r.data['data'][0]
    assert item['id'] == donacion.id
    assert item['envio_id'] is None
    assert item['hospital_destino']['nombre'] == 'Hospital Regional de Duitama'


def test_create_donation_starts_available(api, hospital):
    r = api.post(reverse('donaciones'), _donacion_payload(hospital, descripcion='<b>Caja</b> <i>sellada</i>'),
                 format='json')
    assert r.status_code == 201
    assert r.data['donacion']['estado_donacion'] == EstadoDonacion.DISPONIBLE
    assert r.data['donacion']['descripcion'] == 'Caja sellada'


def test_create_donation_unknown_hospital(api, hospital):
    r = api.post(reverse('donaciones'), _donacion_payload(hospital, hospital_destino_id=987654), format='json')
    assert r.status_code == 404


def test_create_donation_rejects_expiry_before_manufacture(api, hospital):
    r = api.post(reverse('donaciones'), _donacion_payload(hospital, fecha_expiracion='2023-01-01'), format='json')
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'fecha_expiracion'


def test_missing_available_state_is_internal_error(api, hospital, monkeypatch):
    registrados = []
    monkeypatch.setattr(exceptions.logger, 'error', lambda msg, *args: registrados.append(msg % args))
    EstadoDonacion.objects.filter(nombre=EstadoDonacion.DISPONIBLE).delete()
    r = api.post(reverse('donaciones'), _donacion_payload(hospital), format='json')
    assert r.status_code == 500
    assert r.data['error'] == {'code': 'invariant_violation', 'message': 'Error interno del servidor'}
    assert any('Disponible' in linea for linea in registrados)


def _publicacion_payload(hospital, **extra):
    datos = {
        'hospital_id': hospital.id,
        'principioactivo': 'Metformina',
        'cantidad': 100,
        'reg_invima': 'INVIMA 2016M-0042',
        'fecha_expiracion': '2027-08-01',
        'cantidadcum': '850',
        'unidadmedida': 'mg',
        'formafarmaceutica': 'Tableta',
        'titular': 'Tecnoquímicas',
        'descripcioncomercial': 'Metformina 850 mg',
    }
    datos.update(extra)
    return datos


def test_publication_crud(api, hospital):
    r = api.post(reverse('publicaciones'), _publicacion_payload(hospital), format='json')
    assert r.status_code == 201
    pub_id = r.data['publicacion']['id']
    assert r.data['publicacion']['estado'] == Publicacion.ESTADO_DISPONIBLE

    url = reverse('publicacion-detail', args=[pub_id])
    assert api.get(url).data['publicacion']['principioactivo'] == 'Metformina'

    r = api.put(url, {'cantidad': 80, 'estado': Publicacion.ESTADO_RESERVADA}, format='json')
    assert r.status_code == 200
    assert r.data['publicacion']['cantidad'] == 80
    assert r.data['publicacion']['estado'] == Publicacion.ESTADO_RESERVADA

    r = api.get(reverse('publicaciones'), {'estado': Publicacion.ESTADO_DISPONIBLE})
    assert r.data['data'] == []


def test_publication_validation_and_not_found(api, hospital):
    r = api.post(reverse('publicaciones'), _publicacion_payload(hospital, cantidad=0), format='json')
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'cantidad'

    r = api.put(reverse('publicacion-detail', args=[777]), {'cantidad': 1}, format='json')
    assert r.status_code == 404

    r = api.put(reverse('publicaciones'), {}, format='json')
    assert r.status_code == 405


@pytest.fixture
def donacion_libre(donacion):
    donacion.hospital_destino = None
    donacion.save(update_fields=['hospital_destino'])
    return donacion


def test_claim_moves_donation_to_requested(api, hospital, hospital_destino, donacion_libre):
    r = api.post(reverse('donacion-solicitar', args=[donacion_libre.id]), {'hospital_id': hospital_destino.id},
                 format='json')
    assert r.status_code == 200
    assert r.data['donacion']['estado_donacion'] == EstadoDonacion.SOLICITADA
    assert r.data['donacion']['hospital_destino']['id'] == hospital_destino.id

    donacion_libre.refresh_from_db()
    assert donacion_libre.hospital_destino_id == hospital_destino.id
    aviso = Notificacion.objects.get(hospital=hospital, tipo='donacion')
    assert aviso.referencia_id == donacion_libre.id
    assert 'Hospital Regional de Duitama' in aviso.mensaje


def test_claim_twice_is_conflict(api, hospital_destino, donacion_libre):
    url = reverse('donacion-solicitar', args=[donacion_libre.id])
    assert api.post(url, {'hospital_id': hospital_destino.id}, format='json').status_code == 200
    r = api.post(url, {'hospital_id': hospital_destino.id}, format='json')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'conflict'


def test_donor_cannot_claim_own_donation(api, hospital, donacion_libre):
    r = api.post(reverse('donacion-solicitar', args=[donacion_libre.id]), {'hospital_id': hospital.id},
                 format='json')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'conflict'
    donacion_libre.refresh_from_db()
    assert donacion_libre.estado_donacion.nombre == EstadoDonacion.DISPONIBLE
    assert not Notificacion.objects.exists()


def test_claim_unknown_donation_or_hospital(api, hospital_destino, donacion_libre):
    r = api.post(reverse('donacion-solicitar', args=[424242]), {'hospital_id': hospital_destino.id}, format='json')
    assert r.status_code == 404
    r = api.post(reverse('donacion-solicitar', args=[donacion_libre.id]), {'hospital_id': 424242}, format='json')
    assert r.status_code == 404
    r = api.post(reverse('donacion-solicitar', args=[donacion_libre.id]), {}, format='json')
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'hospital_id'
