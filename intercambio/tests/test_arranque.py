import os
import subprocess
import sys
from io import StringIO

import pytest
from django.conf import settings
from django.core.management import call_command


def _importar_en_limpio(modulo):
    codigo = f"import django; django.setup(); import {modulo}"
    env = {**os.environ, 'DJANGO_SETTINGS_MODULE': 'redmed.settings'}
    return subprocess.run([sys.executable, '-c', codigo], cwd=settings.BASE_DIR, env=env,
                          capture_output=True, text=True, timeout=60)


@pytest.mark.parametrize('modulo', [
    'intercambio.management.commands.barrer_avisos',
    'intercambio.management.commands.seed_catalogos',
    'intercambio.exceptions',
    'intercambio.authentication',
    'redmed.asgi',
])
def test_entry_points_import_in_a_fresh_interpreter(modulo):
    r = _importar_en_limpio(modulo)
    assert r.returncode == 0, r.stderr


@pytest.mark.django_db
def test_sweep_command_runs():
    out = StringIO()
    call_command('barrer_avisos', stdout=out)
    assert 'avisos despublicados: 0' in out.getvalue()
    assert 'notificaciones eliminadas: 0' in out.getvalue()


@pytest.mark.django_db
def test_seed_command_is_idempotent():
    out = StringIO()
    call_command('seed_catalogos', stdout=out)
    assert 'ok: estado donacion Solicitado' in out.getvalue()
    assert 'created' not in out.getvalue()
