# app/core/auth/dependencies.py
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import AuthenticationError, PermissionDeniedError
from .permissions import Capability
from .schemas import CurrentUser
from .security import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> CurrentUser:
    """Obtener el usuario autenticado a partir del token Bearer"""
    if credentials is None:
        raise AuthenticationError("Falta el token de autenticación")

    try:
        payload = decode_access_token(credentials.credentials)
        user = CurrentUser(
            id=str(payload["sub"]),
            name=payload.get("name") or str(payload["sub"]),
            role=payload.get("role", "vendedor"),
            active=payload.get("active", True)
        )
    except (ValueError, KeyError, PydanticValidationError):
        raise AuthenticationError("Token de autenticación inválido")

    if not user.active:
        raise PermissionDeniedError("Usuario desactivado. Contacte al administrador.")

    return user


def require_permission(capability: Capability):
    """Dependency factory: exige una capacidad al usuario actual"""

    def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not current_user.has_permission(capability):
            logger.info(f"Permiso denegado: {current_user.id} ({current_user.role.value}) -> {capability.value}")
            raise PermissionDeniedError()
        return current_user

    return checker
