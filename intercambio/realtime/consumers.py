import json

from channels.generic.websocket import AsyncWebsocketConsumer

from intercambio.models import Usuario
from intercambio.services.notificaciones import grupo_hospital


class NotificacionesConsumer(AsyncWebsocketConsumer):
    """Live notification stream for one hospital.

    Only users of that hospital (or administrators) may subscribe.
    Close codes: 4001 no session, 4003 other hospital.
    """

    async def connect(self):
        self.hospital_id = int(self.scope["url_route"]["kwargs"]["hospital_id"])
        user = self.scope.get("user")
        if user is None:
            await self.close(code=4001)
            return
        if user.rol != Usuario.ROL_ADMIN and user.hospital_id != self.hospital_id:
            await self.close(code=4003)
            return

        self.group_name = grupo_hospital(self.hospital_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def notificacion_nueva(self, event):
        # event: {"type": "notificacion.nueva", "id": ..., "titulo": ..., ...}
        payload = {k: v for k, v in event.items() if k != "type"}
        await self.send(json.dumps({"type": "notificacion", "data": payload}))
