"""
Registro de distribuidoras eléctricas soportadas por el portal PITC.

El registro se construye una sola vez al importar el módulo y es de solo
lectura.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from config.pitc_selectors import BILL_PATH_TEMPLATE, PITC_BASE_URL
from scraper.models import CompanyDescriptor


def _company(code: str, name: str) -> CompanyDescriptor:
    return CompanyDescriptor(
        code=code,
        name=name,
        url=PITC_BASE_URL + BILL_PATH_TEMPLATE.format(code=code),
    )


COMPANIES: Mapping[str, CompanyDescriptor] = MappingProxyType({
    "HESCO": _company("hesco", "Hyderabad Electric Supply Company"),
    "LESCO": _company("lesco", "Lahore Electric Supply Company"),
    "FESCO": _company("fesco", "Faisalabad Electric Supply Company"),
    "IESCO": _company("iesco", "Islamabad Electric Supply Company"),
    "MEPCO": _company("mepco", "Multan Electric Power Company"),
    "GEPCO": _company("gepco", "Gujranwala Electric Power Company"),
    "PESCO": _company("pesco", "Peshawar Electric Supply Company"),
    "QESCO": _company("qesco", "Quetta Electric Supply Company"),
    "SEPCO": _company("sepco", "Sukkur Electric Power Company"),
})


def resolve_company(code: Optional[str]) -> Optional[CompanyDescriptor]:
    """
    Busca una distribuidora por código (sin distinguir mayúsculas).

    Args:
        code: Código corto (hesco, lesco, ...)

    Returns:
        CompanyDescriptor o None si el código no existe
    """
    if not code:
        return None
    return COMPANIES.get(code.strip().upper())


def supported_codes() -> List[str]:
    return [company.code for company in COMPANIES.values()]


def supported_companies() -> List[Dict[str, str]]:
    """Lista de distribuidoras como [{code, name}] en orden de registro."""
    return [{"code": company.code, "name": company.name} for company in COMPANIES.values()]


def invalid_company_message() -> str:
    return f"Invalid company code. Supported: {', '.join(supported_codes())}"
