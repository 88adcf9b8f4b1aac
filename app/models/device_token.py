from pydantic import BaseModel


class DeviceTokenRecord(BaseModel):
    """Token FCM de un dispositivo registrado (coleccion "fcmTokens")."""

    id: str
    token: str

    @classmethod
    def from_snapshot(cls, snapshot):
        data = snapshot.to_dict() or {}
        return cls(id=snapshot.id, token=data.get("token", ""))
