from datetime import timedelta

import pytest
from django.conf import settings
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from intercambio.models import AuditEvent, Sesion, Usuario
from intercambio.tests.helpers import PASSWORD, abrir_sesion, crear_usuario
from intercambio.throttling import LoginRateThrottle

pytestmark = pytest.mark.django_db

COOKIE = settings.SESION_COOKIE_NOMBRE


def login(client, correo, password=PASSWORD, **extra):
    return client.post(reverse('auth-login'), {'correo_corporativo': correo, 'contrasena': password, **extra},
                       format='json')


def test_login_sets_httponly_session_cookie(usuario):
    client = APIClient()
    r = login(client, 'Ana.Perez@SanRafael.co')
    assert r.status_code == 200
    assert r.data['usuario']['id'] == usuario.id
    assert r.data['jwt_access'] and r.data['jwt_refresh']
    assert r.cookies[COOKIE]['httponly']
    sesion = Sesion.objects.get(token=r.cookies[COOKIE].value)
    assert sesion.usuario_id == usuario.id
    assert sesion.expira - timezone.now() <= timedelta(hours=settings.SESION_DURACION_HORAS)
    usuario.refresh_from_db()
    assert usuario.ultimo_ingreso is not None

    # the cookie jar now carries the session
    assert client.get(reverse('dashboard-metricas')).status_code == 200


def test_remember_me_extends_session(usuario):
    r = login(APIClient(), usuario.correo_corporativo, recordar=True)
    sesion = Sesion.objects.get(token=r.cookies[COOKIE].value)
    assert sesion.expira - timezone.now() > timedelta(days=settings.SESION_RECORDAR_DIAS - 1)


def test_wrong_password_is_rejected(usuario):
    r = login(APIClient(), usuario.correo_corporativo, 'otraClave99')
    assert r.status_code == 401
    assert r.data['error']['code'] == 'authentication_failed'
    assert COOKIE not in r.cookies
    assert AuditEvent.objects.filter(action='login', detail__result='fail').exists()


def test_suspended_user_cannot_login(hospital):
    crear_usuario('suspendido@sanrafael.co', '11223344', hospital, estado=Usuario.ESTADO_SUSPENDIDO)
    r = login(APIClient(), 'suspendido@sanrafael.co')
    assert r.status_code == 403
    assert not Sesion.objects.exists()


def test_away_user_becomes_active_on_login(hospital):
    u = crear_usuario('ausente@sanrafael.co', '55667788', hospital, estado=Usuario.ESTADO_AUSENTE)
    assert login(APIClient(), 'ausente@sanrafael.co').status_code == 200
    u.refresh_from_db()
    assert u.estado == Usuario.ESTADO_ACTIVO


def test_gate_rejects_requests_without_credentials(db):
    r = APIClient().get(reverse('donaciones'))
    assert r.status_code == 401
    assert r.json()['error']['code'] == 'not_authenticated'


def test_expired_session_is_rejected(usuario):
    sesion = abrir_sesion(usuario)
    Sesion.objects.filter(id=sesion.id).update(expira=timezone.now() - timedelta(minutes=1))
    client = APIClient()
    client.cookies[COOKIE] = sesion.token
    r = client.get(reverse('donaciones'))
    assert r.status_code == 401
    assert r.data['error']['code'] == 'authentication_failed'


def test_session_header_is_accepted(usuario):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Sesion {abrir_sesion(usuario).token}')
    assert client.get(reverse('donaciones')).status_code == 200


def test_jwt_bearer_is_accepted(usuario):
    r = login(APIClient(), usuario.correo_corporativo)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['jwt_access']}")
    assert client.get(reverse('envios')).status_code == 200


def test_logout_revokes_session(usuario):
    client = APIClient()
    token = login(client, usuario.correo_corporativo).cookies[COOKIE].value
    r = client.post(reverse('auth-logout'))
    assert r.status_code == 200
    assert Sesion.objects.get(token=token).revocada is True

    stale = APIClient()
    stale.cookies[COOKIE] = token
    assert stale.get(reverse('donaciones')).status_code == 401


def test_verify_session(usuario):
    client = APIClient()
    r = client.get(reverse('auth-verificar-sesion'))
    assert r.status_code == 200
    assert r.data['usuario'] is None

    login(client, usuario.correo_corporativo)
    r = client.get(reverse('auth-verificar-sesion'))
    assert r.data['usuario']['correo_corporativo'] == usuario.correo_corporativo


def test_stale_cookie_does_not_block_login(usuario):
    client = APIClient()
    client.cookies[COOKIE] = 'no-existe'
    assert login(client, usuario.correo_corporativo).status_code == 200


def _registro(**extra):
    datos = {
        'nombres': 'Carlos', 'apellidos': 'Mendoza', 'cedula': '79123456',
        'correo_corporativo': 'carlos.mendoza@sanrafael.co', 'celular': '3201112233',
        'fecha_nacimiento': '1985-06-15', 'sexo': 'Hombre',
        'contrasena': 'Farmacia2024', 'confirmar_contrasena': 'Farmacia2024',
    }
    datos.update(extra)
    return datos


def test_register_creates_active_user(hospital):
    r = APIClient().post(reverse('auth-register'), _registro(hospital_id=hospital.id), format='json')
    assert r.status_code == 201
    u = Usuario.objects.get(correo_corporativo='carlos.mendoza@sanrafael.co')
    assert u.rol == Usuario.ROL_USUARIO
    assert u.estado == Usuario.ESTADO_ACTIVO
    assert u.hospital_id == hospital.id
    assert u.check_password('Farmacia2024')


def test_register_rejects_duplicates(usuario):
    r = APIClient().post(reverse('auth-register'), _registro(correo_corporativo=usuario.correo_corporativo),
                         format='json')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'conflict'

    r = APIClient().post(reverse('auth-register'), _registro(cedula=usuario.cedula), format='json')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'conflict'


def test_register_validates_password_and_age(db):
    r = APIClient().post(reverse('auth-register'), _registro(confirmar_contrasena='Otra2024x'), format='json')
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'confirmar_contrasena'

    r = APIClient().post(reverse('auth-register'),
                         _registro(contrasena='solominusculas', confirmar_contrasena='solominusculas',
                                   fecha_nacimiento='2016-01-01'),
                         format='json')
    campos = {f['field'] for f in r.data['error']['fields']}
    assert {'contrasena', 'fecha_nacimiento'} <= campos


def test_health_is_public(db):
    r = APIClient().get(reverse('health'))
    assert r.status_code == 200
    assert r.json()['ok'] is True


def test_suspending_a_user_ends_open_sessions(usuario):
    client = APIClient()
    client.cookies[COOKIE] = abrir_sesion(usuario).token
    assert client.get(reverse('donaciones')).status_code == 200
    Usuario.objects.filter(id=usuario.id).update(estado=Usuario.ESTADO_SUSPENDIDO)
    assert client.get(reverse('donaciones')).status_code == 401


def test_login_attempts_are_rate_limited(usuario, monkeypatch):
    monkeypatch.setattr(LoginRateThrottle, 'rate', '2/min', raising=False)
    client = APIClient()
    for _ in range(2):
        assert login(client, usuario.correo_corporativo, 'otraClave99').status_code == 401
    r = login(client, usuario.correo_corporativo)
    assert r.status_code == 429
    assert r.data['error']['code'] == 'throttled'
    assert COOKIE not in r.cookies
