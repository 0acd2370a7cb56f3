# pocketbook/core/errors.py


class PocketbookError(Exception):
    """Error base del núcleo de reportes."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(PocketbookError):
    """Argumentos de filtro o de periodo mal formados (violación del contrato del llamador)."""


class NotFoundError(PocketbookError):
    """El registro no existe o pertenece a otro usuario."""


class StoreReadError(PocketbookError):
    """La base de datos no pudo responder una consulta. Siempre fatal para la operación."""


class StoreWriteError(PocketbookError):
    """Falló una escritura; la sesión ya fue revertida."""
