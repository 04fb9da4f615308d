from django.core.management.base import BaseCommand, CommandError

from intercambio.models import Usuario


class Command(BaseCommand):
    help = "Create or reset an administrator account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('correo')
        parser.add_argument('cedula')
        parser.add_argument('--password', required=True)

    def handle(self, *args, **opts):
        correo = opts['correo'].strip().lower()
        if len(opts['password']) < 8:
            raise CommandError("password must be at least 8 characters")
        u, created = Usuario.objects.get_or_create(
            correo_corporativo=correo,
            defaults={'username': correo, 'email': correo, 'cedula': opts['cedula'],
                      'rol': Usuario.ROL_ADMIN, 'is_staff': True},
        )
        # force role, state and password even on an existing account
        u.set_password(opts['password'])
        u.rol = Usuario.ROL_ADMIN
        u.estado = Usuario.ESTADO_ACTIVO
        u.is_active = True
        u.is_staff = True
        u.save()
        self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'updated'}: {correo} (admin)"))
