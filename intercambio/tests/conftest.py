from datetime import date, timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone

from intercambio.models import Donacion, EstadoDonacion, Hospital, Transporte, Usuario
from intercambio.tests.helpers import cliente_con_sesion, crear_usuario


@pytest.fixture(autouse=True)
def _sin_throttle_previo():
    # throttle counters live in the cache and would leak between tests
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def hospital(db):
    return Hospital.objects.create(nombre='Hospital San Rafael', nit='900123456', municipio='Tunja')


@pytest.fixture
def hospital_destino(db):
    return Hospital.objects.create(nombre='Hospital Regional de Duitama', nit='900654321', municipio='Duitama')


@pytest.fixture
def usuario(hospital):
    return crear_usuario('ana.perez@sanrafael.co', '1020304050', hospital)


@pytest.fixture
def admin_usuario(hospital):
    return crear_usuario('admin@sanrafael.co', '9080706050', hospital, rol=Usuario.ROL_ADMIN)


@pytest.fixture
def api(usuario):
    return cliente_con_sesion(usuario)


@pytest.fixture
def api_admin(admin_usuario):
    return cliente_con_sesion(admin_usuario)


@pytest.fixture
def transporte(db):
    return Transporte.objects.get(nombre='Terrestre')


@pytest.fixture
def donacion(hospital, hospital_destino):
    return Donacion.objects.create(
        hospital=hospital,
        hospital_destino=hospital_destino,
        estado_donacion=EstadoDonacion.objects.get(nombre=EstadoDonacion.DISPONIBLE),
        principioactivo='Acetaminofén',
        cantidad=120,
        lote='L-2291',
        cum='19931219-1',
        reg_invima='INVIMA 2019M-0012345',
        fecha_fabricacion=date(2024, 1, 10),
        fecha_expiracion=date(2027, 1, 10),
    )


@pytest.fixture
def envio_payload(donacion, transporte):
    ahora = timezone.now()
    return {
        'donacion_id': donacion.id,
        'transporte_id': transporte.id,
        'fecha_recoleccion': ahora.isoformat(),
        'fecha_entrega_estimada': (ahora + timedelta(days=2)).isoformat(),
        'descripcion': 'Cadena de frío no requerida',
    }
