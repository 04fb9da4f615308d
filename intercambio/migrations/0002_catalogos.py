from django.db import migrations

ESTADOS_ENVIO = [('Empaquetando', 1), ('En camino', 2), ('Entregado', 3)]
ESTADOS_DONACION = ['Disponible', 'Asignada', 'Entregada']
TRANSPORTES = ['Terrestre', 'Aéreo', 'Mensajería']


def seed(apps, schema_editor):
    EstadoEnvio = apps.get_model('intercambio', 'EstadoEnvio')
    EstadoDonacion = apps.get_model('intercambio', 'EstadoDonacion')
    Transporte = apps.get_model('intercambio', 'Transporte')
    for estado, orden in ESTADOS_ENVIO:
        EstadoEnvio.objects.get_or_create(estado=estado, defaults={'orden': orden})
    for nombre in ESTADOS_DONACION:
        EstadoDonacion.objects.get_or_create(nombre=nombre)
    for nombre in TRANSPORTES:
        Transporte.objects.get_or_create(nombre=nombre)


class Migration(migrations.Migration):

    dependencies = [
        ('intercambio', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed, migrations.RunPython.noop),
    ]
