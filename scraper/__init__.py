"""
Módulo de scraping y extracción de facturas del portal PITC.

Componentes:
- companies: Registro de distribuidoras (DISCOs)
- validation: Validación del número de referencia
- pitc: Scraper del portal (tokens ASP.NET + formulario)
- extractor: Clasificación de la respuesta y extracción de la factura
- orchestrator: Coordinador de la consulta completa
- models: Modelos de datos
"""

from scraper.pitc import PITCBillScraper
from scraper.extractor import BillExtractor
from scraper.orchestrator import BillLookupOrchestrator
from scraper.models import BillRecord, LookupFailure, LookupResult, LookupSuccess

__all__ = [
    "PITCBillScraper",
    "BillExtractor",
    "BillLookupOrchestrator",
    "BillRecord",
    "LookupFailure",
    "LookupResult",
    "LookupSuccess",
]
