"""
FastAPI application principal.

Expone endpoints REST para:
- Health check
- Listado de distribuidoras soportadas
- Consulta de facturas en el portal PITC (GET y POST)
"""

from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import settings
from api.models import (
    CheckBillRequest, CompaniesResponse, ErrorResponse,
    HealthResponse, ServiceInfoResponse,
)
from api import __version__
from scraper.companies import invalid_company_message, resolve_company, supported_companies
from scraper.errors import ValidationError
from scraper.models import LookupSuccess
from scraper.orchestrator import BillLookupOrchestrator
from scraper.pitc import PITCBillScraper
from scraper.validation import validate_reference_number
import logging

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /api/check-bill?refNo={reference-number}&company={company-code}",
    "POST /api/check-bill with body: { refNo: '...', company: '...' }",
    "GET /api/companies - Get list of supported companies",
]

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

# Inicializar FastAPI
app = FastAPI(
    title="PITC Bill Checker API",
    description="Consulta de facturas eléctricas de las distribuidoras de Pakistán (portal PITC)",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)


# Dependency: orquestador por request (sin estado compartido)
def get_orchestrator() -> BillLookupOrchestrator:
    """Construye el orquestador con la configuración del portal."""
    scraper = PITCBillScraper(
        user_agent=settings.user_agent,
        timeout=settings.request_timeout_seconds,
        max_redirects=settings.max_redirects,
        proxy_url=settings.proxy_url,
    )
    return BillLookupOrchestrator(scraper=scraper)


def _error(status_code: int, error: str, **extra: Any) -> JSONResponse:
    body = ErrorResponse(error=error, **extra)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True)
    )


async def _check_bill(
    raw_ref_no: Any,
    company_code: Optional[str],
    orchestrator: BillLookupOrchestrator
) -> JSONResponse:
    """
    Flujo común de GET y POST /api/check-bill.

    Returns:
        200 con la factura, 400 si la entrada es inválida, 404 si el portal
        reporta un error de negocio, 500 ante errores inesperados
    """
    try:
        ref_no = validate_reference_number(raw_ref_no)
    except ValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    if company_code is None:
        company_code = settings.default_company

    company = resolve_company(company_code)
    if company is None:
        return _error(status.HTTP_400_BAD_REQUEST, invalid_company_message())

    try:
        result = await orchestrator.get_bill(ref_no, company.code)
    except Exception:
        logger.exception(f"❌ Error inesperado consultando {company.code} {ref_no}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    if not result.success:
        # Referencia inexistente o de otra distribuidora
        return _error(
            status.HTTP_404_NOT_FOUND,
            result.error,
            ref_no=result.ref_no,
            company=result.company
        )

    return JSONResponse(content=result.model_dump(by_alias=True, exclude_none=True))


# Root endpoint
@app.get("/", response_model=ServiceInfoResponse, tags=["Info"])
async def root():
    """Metadata del servicio y distribuidoras soportadas."""
    return ServiceInfoResponse(
        status="online",
        service="PITC Bill Checker API",
        version=__version__,
        description="Check electricity bills from all major Pakistani DISCOs",
        supported_companies=supported_companies(),
        endpoints={
            "checkBill": "/api/check-bill?refNo={reference-number}&company={company-code}",
            "checkBillLegacy": "/api/check-bill?refNo={reference-number} (HESCO only)",
            "companies": "/api/companies",
            "health": "/health",
        },
    )


# Healthcheck endpoint
@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check"
)
async def health_check():
    """Verifica que la API está funcionando."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat()
    )


@app.get(
    "/api/companies",
    response_model=CompaniesResponse,
    tags=["Bills"],
    summary="Distribuidoras soportadas"
)
async def list_companies():
    """Lista de distribuidoras como [{code, name}]."""
    return CompaniesResponse(companies=supported_companies())


# ====================================================================
# ENDPOINTS PRINCIPALES
# ====================================================================

@app.get(
    "/api/check-bill",
    response_model=LookupSuccess,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Bills"],
    summary="Consulta factura (GET)",
    description="Consulta la factura de una distribuidora. Sin company se usa la distribuidora por defecto (hesco)."
)
async def check_bill(
    ref_no: Optional[str] = Query(None, alias="refNo", description="Número de referencia de 10-14 dígitos"),
    company: Optional[str] = Query(None, description="Código de distribuidora (hesco, lesco, ...)"),
    orchestrator: BillLookupOrchestrator = Depends(get_orchestrator)
):
    return await _check_bill(ref_no, company, orchestrator)


@app.post(
    "/api/check-bill",
    response_model=LookupSuccess,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Bills"],
    summary="Consulta factura (POST)",
    description="Misma semántica que GET, con body JSON o de formulario { refNo, company }.",
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": CheckBillRequest.model_json_schema()},
                "application/x-www-form-urlencoded": {"schema": CheckBillRequest.model_json_schema()},
            }
        }
    }
)
async def check_bill_post(
    request: Request,
    orchestrator: BillLookupOrchestrator = Depends(get_orchestrator)
):
    body = await _read_check_bill_body(request)
    return await _check_bill(body.ref_no, body.company, orchestrator)


async def _read_check_bill_body(request: Request) -> CheckBillRequest:
    """Lee el body de POST /api/check-bill como JSON o formulario."""
    content_type = request.headers.get("content-type", "").lower()
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            return CheckBillRequest.model_validate(dict(form))

        raw = await request.body()
        if not raw.strip():
            return CheckBillRequest()
        return CheckBillRequest.model_validate_json(raw)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors())


# Exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Entrada mal formada → 400."""
    messages = "; ".join(str(error.get("msg", "")) for error in exc.errors())
    return _error(status.HTTP_400_BAD_REQUEST, f"Invalid request: {messages}")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Rutas inexistentes → 404 con la lista de endpoints."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "success": False,
                "error": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            }
        )
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handler para excepciones no controladas (sin detalles internos)."""
    logger.exception(f"❌ Error no controlado en {request.url.path}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
