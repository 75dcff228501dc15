"""Validación del número de referencia impreso en la factura."""

import re
from typing import Any, Optional, Pattern

from scraper.errors import ReferenceNumberError

REFERENCE_NUMBER_PATTERN = re.compile(r"^\d{10,14}$", re.ASCII)

REQUIRED_MESSAGE = "Reference number is required"
FORMAT_MESSAGE = "Reference number must be 10-14 digits"


def validate_reference_number(raw: Any, pattern: Optional[Pattern] = None) -> str:
    """
    Valida y normaliza un número de referencia.

    Args:
        raw: Valor recibido (query string, body JSON o CLI)
        pattern: Formato de la distribuidora (default: 10-14 dígitos)

    Returns:
        El número sin espacios alrededor

    Raises:
        ReferenceNumberError: Si falta o no tiene 10-14 dígitos
    """
    # Como en el formulario web: 0, false o vacío cuentan como ausentes
    if raw is None or raw == "" or raw == 0:
        raise ReferenceNumberError(REQUIRED_MESSAGE)

    ref_no = str(raw).strip()
    if not (pattern or REFERENCE_NUMBER_PATTERN).match(ref_no):
        raise ReferenceNumberError(FORMAT_MESSAGE)

    return ref_no
