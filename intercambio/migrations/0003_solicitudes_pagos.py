from django.db import migrations, models


def seed_solicitado(apps, schema_editor):
    EstadoDonacion = apps.get_model('intercambio', 'EstadoDonacion')
    EstadoDonacion.objects.get_or_create(nombre='Solicitado')


class Migration(migrations.Migration):

    dependencies = [
        ('intercambio', '0002_catalogos'),
    ]

    operations = [
        migrations.AddConstraint(
            model_name='encargadologistica',
            constraint=models.UniqueConstraint(fields=('hospital',), name='encargado_unico_por_hospital'),
        ),
        migrations.AlterField(
            model_name='solicitud',
            name='estado',
            field=models.CharField(
                choices=[('Pendiente', 'Pendiente'), ('Aprobada', 'Aprobada'), ('Rechazada', 'Rechazada')],
                default='Pendiente', max_length=20,
            ),
        ),
        migrations.AddField(
            model_name='pago',
            name='transaccion',
            field=models.CharField(blank=True, db_index=True, default='', max_length=40),
            preserve_default=False,
        ),
        migrations.RunPython(seed_solicitado, migrations.RunPython.noop),
    ]
