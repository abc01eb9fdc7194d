# app/core/exceptions.py
"""
Errores de negocio del POS

Los servicios lanzan estas excepciones y los handlers registrados en
setup_exception_handlers las convierten en respuestas {"detail": mensaje}.
"""


class POSError(Exception):
    status_code = 500
    default_message = "Error interno del sistema"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(POSError):
    """Datos de negocio inválidos: carrito vacío, total cero, stock insuficiente"""
    status_code = 400
    default_message = "Datos inválidos"


class StockConflictError(ValidationError):
    """El stock cambió entre la validación y el descuento"""
    status_code = 409
    default_message = "El stock del producto cambió. Revise el carrito e intente nuevamente."


class NotFoundError(POSError):
    status_code = 404
    default_message = "Recurso no encontrado"


class ConflictError(POSError):
    status_code = 409
    default_message = "El recurso ya existe"


class CheckoutInProgressError(ConflictError):
    default_message = "Ya hay una venta en proceso para este carrito"


class PersistenceError(POSError):
    """Base de datos inaccesible o escritura rechazada"""
    status_code = 503
    default_message = "Error al guardar los datos. Intente nuevamente."


class AuthenticationError(POSError):
    status_code = 401
    default_message = "Credenciales de autenticación inválidas"


class PermissionDeniedError(POSError):
    status_code = 403
    default_message = "No tienes permisos para realizar esta acción"
