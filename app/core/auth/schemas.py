# app/core/auth/schemas.py
from pydantic import BaseModel

from .permissions import Capability, Role, has_permission


class CurrentUser(BaseModel):
    """Principal autenticado, tomado de los claims del token"""
    id: str
    name: str
    role: Role = Role.vendedor
    active: bool = True

    @property
    def is_admin(self) -> bool:
        return self.role == Role.administrador

    def has_permission(self, capability: Capability) -> bool:
        return has_permission(self.role, capability)
