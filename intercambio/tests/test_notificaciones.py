from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.management import call_command
from django.urls import reverse
from django.utils import timezone

from intercambio.models import Notificacion
from intercambio.services.notificaciones import (
    MAX_POR_HOSPITAL,
    crear_notificacion,
    depurar_notificaciones,
    grupo_hospital,
)

pytestmark = pytest.mark.django_db


def _notificacion(hospital, **extra):
    datos = dict(hospital=hospital, titulo='Envío en camino', mensaje='Tu envío salió', tipo='estado_envio')
    datos.update(extra)
    return Notificacion.objects.create(**datos)


def test_mark_read_is_idempotent(api, hospital):
    n = _notificacion(hospital)
    url = reverse('notificacion-detail', args=[n.id])
    for _ in range(2):
        r = api.patch(url)
        assert r.status_code == 200
        assert r.data['notificacion']['leida'] is True
    n.refresh_from_db()
    assert n.leida is True


def test_mark_read_unknown_is_not_found(api):
    r = api.patch(reverse('notificacion-detail', args=[5555]))
    assert r.status_code == 404
    assert r.data['error']['code'] == 'not_found'


def test_delete_notification(api, hospital):
    n = _notificacion(hospital)
    url = reverse('notificacion-detail', args=[n.id])
    assert api.delete(url).status_code == 200
    r = api.delete(url)
    assert r.status_code == 404
    assert r.data['error']['code'] == 'not_found'


def test_list_returns_latest_seven(api, hospital, hospital_destino):
    for i in range(9):
        _notificacion(hospital, titulo=f'n{i}')
    _notificacion(hospital_destino, titulo='ajena')
    r = api.get(reverse('notificaciones'), {'hospital_id': hospital.id})
    assert r.status_code == 200
    titulos = [n['titulo'] for n in r.data['data']]
    assert len(titulos) == 7
    assert titulos[0] == 'n8'
    assert 'ajena' not in titulos


def test_list_requires_hospital(api):
    r = api.get(reverse('notificaciones'))
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'hospital_id'


def test_create_through_api(api, hospital):
    r = api.post(reverse('notificaciones'), {
        'hospital_id': hospital.id, 'titulo': '<b>Aviso</b>', 'mensaje': 'Revisar inventario',
    }, format='json')
    assert r.status_code == 201
    assert r.data['notificacion']['titulo'] == 'Aviso'
    assert r.data['notificacion']['tipo'] == 'general'


def test_new_notification_is_pushed_after_commit(hospital, django_capture_on_commit_callbacks):
    layer = get_channel_layer()
    canal = async_to_sync(layer.new_channel)()
    async_to_sync(layer.group_add)(grupo_hospital(hospital.id), canal)

    with django_capture_on_commit_callbacks(execute=True):
        n = crear_notificacion(hospital_id=hospital.id, titulo='Envío entregado',
                               mensaje='Recibido', tipo='estado_envio', referencia_id=7, referencia_tipo='envio')

    mensaje = async_to_sync(layer.receive)(canal)
    assert mensaje['type'] == 'notificacion.nueva'
    assert mensaje['id'] == n.id
    assert mensaje['referencia_id'] == 7


def test_cleanup_removes_stale_and_caps_per_hospital(hospital):
    ahora = timezone.now()
    leida_vieja = _notificacion(hospital, leida=True)
    muy_vieja = _notificacion(hospital)
    Notificacion.objects.filter(id=leida_vieja.id).update(created_at=ahora - timedelta(days=6))
    Notificacion.objects.filter(id=muy_vieja.id).update(created_at=ahora - timedelta(days=31))
    reciente_leida = _notificacion(hospital, leida=True)

    assert depurar_notificaciones(hospital.id, ahora=ahora) == 2
    assert Notificacion.objects.filter(id=reciente_leida.id).exists()

    for i in range(MAX_POR_HOSPITAL + 4):
        _notificacion(hospital, titulo=f'n{i}')
    depurar_notificaciones(ahora=ahora)
    assert Notificacion.objects.filter(hospital=hospital).count() == MAX_POR_HOSPITAL
    assert not Notificacion.objects.filter(id=reciente_leida.id).exists()


def test_sweep_command_purges_notifications(hospital):
    n = _notificacion(hospital)
    Notificacion.objects.filter(id=n.id).update(created_at=timezone.now() - timedelta(days=40))
    call_command('barrer_avisos')
    assert not Notificacion.objects.filter(id=n.id).exists()


def test_create_for_unknown_hospital_is_not_found(api):
    r = api.post(reverse('notificaciones'), {
        'hospital_id': 987654, 'titulo': 'Aviso', 'mensaje': 'Revisar inventario',
    }, format='json')
    assert r.status_code == 404
    assert r.data['error']['code'] == 'not_found'
    assert not Notificacion.objects.exists()
