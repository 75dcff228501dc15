"""
Modelos de datos (DTOs) para la API REST.
Define request/response schemas usando Pydantic.
"""

from typing import Dict, List, Optional, Union

from pydantic import Field

from scraper.models import CamelModel


class CheckBillRequest(CamelModel):
    """Request body para POST /api/check-bill."""

    ref_no: Optional[Union[str, int, bool]] = Field(None, description="Número de referencia de 10-14 dígitos")
    company: Optional[str] = Field(None, description="Código de distribuidora (default: hesco)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "refNo": "06113530462901",
                "company": "lesco"
            }
        }
    }


class ErrorResponse(CamelModel):
    """Response estándar de error."""

    success: bool = False
    error: str = Field(..., description="Mensaje de error")
    ref_no: Optional[str] = None
    company: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "error": "Reference number must be 10-14 digits"
            }
        }
    }


class CompanyInfo(CamelModel):
    code: str
    name: str


class CompaniesResponse(CamelModel):
    """Response de /api/companies."""

    success: bool = True
    companies: List[CompanyInfo]


class HealthResponse(CamelModel):
    """Response del endpoint /health."""

    status: str = Field(..., description="Estado del servicio")
    timestamp: str = Field(..., description="Fecha y hora ISO-8601")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "healthy",
                "timestamp": "2025-01-15T10:30:00+00:00"
            }
        }
    }


class ServiceInfoResponse(CamelModel):
    """Response del endpoint raíz."""

    status: str
    service: str
    version: str
    description: str
    supported_companies: List[CompanyInfo]
    endpoints: Dict[str, str]
