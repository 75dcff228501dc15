"""Orquestador de la consulta completa: distribuidora → tokens → formulario → extracción."""

import asyncio
import logging
from typing import Optional

import httpx

from scraper.base import ScraperBase
from scraper.companies import invalid_company_message, resolve_company
from scraper.errors import PortalError
from scraper.extractor import BillExtractor
from scraper.models import LookupFailure, LookupResult
from scraper.pitc import PITCBillScraper
from scraper.validation import validate_reference_number

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Connection timeout - PITC server may be geo-restricted or down"
CONNECTION_MESSAGE = "Unable to connect to PITC server"

LEGACY_COMPANY = "hesco"


class BillLookupOrchestrator:
    """Orquesta una consulta de factura. No guarda estado entre consultas."""

    def __init__(
        self,
        scraper: Optional[ScraperBase] = None,
        extractor: Optional[BillExtractor] = None,
    ):
        """
        Args:
            scraper: Cliente del portal (default: PITCBillScraper)
            extractor: Extractor de la respuesta (default: BillExtractor)
        """
        self.scraper = scraper or PITCBillScraper()
        self.extractor = extractor or BillExtractor()

    async def get_bill(self, ref_no: str, company_code: str) -> LookupResult:
        """
        Consulta la factura de una distribuidora.

        Ningún error se propaga: red, estructura y negocio se convierten en
        LookupFailure. No hay reintentos.

        Args:
            ref_no: Número de referencia (10-14 dígitos)
            company_code: Código de la distribuidora (hesco, lesco, ...)

        Returns:
            LookupSuccess o LookupFailure
        """
        company = resolve_company(company_code)
        if company is None:
            return LookupFailure(error=invalid_company_message())

        try:
            ref_no = validate_reference_number(ref_no, company.ref_pattern)

            # Tokens y cookie se usan una sola vez, en el POST que sigue
            tokens, cookie = await self.scraper.fetch_tokens(company.url)
            raw_body = await self.scraper.submit_lookup(company.url, tokens, cookie, ref_no)

            result = self.extractor.interpret(raw_body, ref_no, company)
        except PortalError as e:
            logger.warning(f"❌ {company.code} {ref_no}: {e}")
            return LookupFailure(error=str(e), ref_no=ref_no, company=company.code)
        except httpx.TimeoutException as e:
            logger.error(f"⏰ Timeout consultando {company.code} {ref_no}: {e!r}")
            return LookupFailure(error=TIMEOUT_MESSAGE, ref_no=ref_no, company=company.code)
        except httpx.ConnectError as e:
            logger.error(f"🔌 Sin conexión con {company.url}: {e!r}")
            return LookupFailure(error=CONNECTION_MESSAGE, ref_no=ref_no, company=company.code)
        except Exception as e:
            logger.exception(f"❌ Error consultando {company.code} {ref_no}")
            return LookupFailure(
                error=str(e) or e.__class__.__name__,
                ref_no=ref_no,
                company=company.code,
            )

        if result.success:
            logger.info(f"✅ Factura {company.code} {ref_no} obtenida")
        return result

    async def get_hesco_bill(self, ref_no: str) -> LookupResult:
        """Entrada legacy: consulta siempre HESCO."""
        return await self.get_bill(ref_no, LEGACY_COMPANY)

    def lookup_bill(self, ref_no: str, company_code: str) -> LookupResult:
        """Versión síncrona de get_bill (scripts CLI)."""
        return asyncio.run(self.get_bill(ref_no, company_code))
