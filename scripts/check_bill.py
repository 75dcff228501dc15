#!/usr/bin/env python3
"""
Script para consultar una factura del portal PITC desde la línea de comandos.

Uso:
    python scripts/check_bill.py 06113530462901 lesco
    python scripts/check_bill.py 12345678901234            # hesco por defecto
    python scripts/check_bill.py 06113530462901 lesco --full-html
"""

import argparse
import json
import sys
from pathlib import Path

# Agregar directorio raíz al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.config import configure_logging, settings
from scraper.companies import supported_companies
from scraper.errors import ValidationError
from scraper.orchestrator import BillLookupOrchestrator
from scraper.pitc import PITCBillScraper
from scraper.validation import validate_reference_number


def print_usage() -> None:
    """Muestra ayuda y distribuidoras soportadas."""
    print("❌ Reference number is required")
    print("\nUso: python scripts/check_bill.py <refNo> [company]\n")
    print("Distribuidoras soportadas:")
    for company in supported_companies():
        print(f"  • {company['code'].upper():<10} - {company['name']}")
    print("\nEjemplos:")
    print("  python scripts/check_bill.py 06113530462901 lesco")
    print("  python scripts/check_bill.py 12345678901234 hesco")


def main(argv=None) -> int:
    """Función principal."""
    parser = argparse.ArgumentParser(
        description="Consulta una factura eléctrica en el portal PITC"
    )
    parser.add_argument("ref_no", nargs="?", help="Número de referencia (10-14 dígitos)")
    parser.add_argument(
        "company",
        nargs="?",
        default=settings.default_company,
        help=f"Código de distribuidora (default: {settings.default_company})"
    )
    parser.add_argument(
        "--full-html",
        action="store_true",
        help="Incluye el HTML crudo completo en la salida"
    )

    args = parser.parse_args(argv)
    configure_logging()

    if not args.ref_no:
        print_usage()
        return 1

    try:
        ref_no = validate_reference_number(args.ref_no)
    except ValidationError as e:
        print(f"❌ {e}")
        return 1

    company = args.company.lower()
    print(f"🔍 Consultando factura {company.upper()} para referencia: {ref_no}")
    print("-" * 51)

    orchestrator = BillLookupOrchestrator(
        scraper=PITCBillScraper(
            user_agent=settings.user_agent,
            timeout=settings.request_timeout_seconds,
            max_redirects=settings.max_redirects,
            proxy_url=settings.proxy_url,
        )
    )
    result = orchestrator.lookup_bill(ref_no, company)

    if not result.success:
        print("❌ No se pudo obtener la factura")
        print(f"Error: {result.error}")
        print("-" * 51)
        return 1

    output = result.model_dump(by_alias=True, exclude_none=True)
    raw_html = output["data"].get("rawHtml")
    if raw_html and not args.full_html:
        output["data"]["rawHtml"] = f"<{len(raw_html)} caracteres, usar --full-html>"

    print("✅ Factura obtenida!")
    print(f"🏢 Distribuidora: {result.company_name}")
    print("\n📄 Datos:")
    print(json.dumps(output, indent=2, ensure_ascii=False))
    print("-" * 51)
    return 0


if __name__ == "__main__":
    sys.exit(main())
