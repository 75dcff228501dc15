"""Excepciones del dominio de consulta de facturas."""


class PortalError(Exception):
    """Error base del scraper del portal PITC."""


class ValidationError(PortalError):
    """Entrada inválida del usuario (se responde con 400)."""


class ReferenceNumberError(ValidationError):
    """Número de referencia ausente o con formato inválido."""


class StructuralError(PortalError):
    """El HTML del portal no tiene la forma esperada."""


class TokensMissingError(StructuralError):
    """Faltan los tokens ocultos de ASP.NET en la página inicial."""

    def __init__(self, message: str = "Failed to extract required tokens from PITC portal"):
        super().__init__(message)
