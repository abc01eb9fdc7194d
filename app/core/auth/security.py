# app/core/auth/security.py
"""
Verificación de tokens emitidos por el proveedor de identidad

El login y la emisión de tokens viven fuera de esta API; aquí solo se
decodifican y se validan los claims.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from app.config.settings import settings


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc


def create_access_token(
    subject: str,
    name: str,
    role: str,
    active: bool = True,
    expires_minutes: Optional[int] = 60
) -> str:
    """Emitir un token con los claims esperados (herramientas de desarrollo y tests)"""
    payload: Dict[str, Any] = {"sub": subject, "name": name, "role": role, "active": active}
    if expires_minutes is not None:
        payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)
