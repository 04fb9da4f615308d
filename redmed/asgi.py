"""
ASGI config for the redmed project.

Wires both HTTP (Django) and WebSocket (Channels).
Order matters: configure Django before importing any Django-dependent modules.
"""
import os

# 1) Configure settings before any Django import
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "redmed.settings")

# 2) Ensure Django is fully set up (so models/auth work during imports)
import django  # noqa: E402
django.setup()  # noqa: E402

# 3) Now import ASGI/Channels components and app consumers
from django.core.asgi import get_asgi_application  # noqa: E402
from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from django.urls import path  # noqa: E402

from intercambio.realtime.consumers import NotificacionesConsumer  # noqa: E402
from intercambio.realtime.middleware import SesionAuthMiddleware  # noqa: E402

django_asgi_app = get_asgi_application()

websocket_urlpatterns = [
    path("ws/notificaciones/<int:hospital_id>/", NotificacionesConsumer.as_asgi()),
]

application = ProtocolTypeRouter({
    "http": django_asgi_app,
    "websocket": SesionAuthMiddleware(URLRouter(websocket_urlpatterns)),
})
