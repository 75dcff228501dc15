"""Extractor de datos de la respuesta del portal - genera BillRecord estructurado."""

import logging
from typing import Optional, Tuple

from bs4 import BeautifulSoup

from config.pitc_selectors import RESULT_SELECTORS
from scraper.models import BillRecord, CompanyDescriptor, LookupFailure, LookupResult, LookupSuccess

logger = logging.getLogger(__name__)


# Reglas etiqueta → campo, evaluadas en orden; gana la primera que coincide.
# (substrings, sección del BillRecord, campo)
LABEL_RULES: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (("consumer", "name"), "consumer_details", "name"),
    (("address",), "consumer_details", "address"),
    (("customer", "id"), "consumer_details", "customer_id"),
    (("tariff",), "bill_details", "tariff"),
    (("due date",), "bill_details", "due_date"),
    (("issue date", "bill date"), "bill_details", "issue_date"),
    (("reading date",), "bill_details", "reading_date"),
    (("current reading",), "bill_details", "current_reading"),
    (("previous reading",), "bill_details", "previous_reading"),
    (("units", "consumption"), "bill_details", "units_consumed"),
    (("amount payable", "total amount"), "charges", "total_amount"),
    (("after due date",), "charges", "amount_after_due_date"),
    (("electricity charges",), "charges", "electricity_charges"),
    (("gst", "tax"), "charges", "gst"),
)


def match_label(label: str) -> Optional[Tuple[str, str]]:
    """
    Busca el campo destino de una etiqueta de tabla.

    Args:
        label: Texto de la primera celda, ya en minúsculas

    Returns:
        (sección, campo) o None si ninguna regla coincide
    """
    for substrings, section, field in LABEL_RULES:
        if any(substring in label for substring in substrings):
            return section, field
    return None


class BillExtractor:
    """Clasifica la respuesta del POST y extrae los datos de la factura."""

    def interpret(self, raw_body: str, ref_no: str, company: CompanyDescriptor) -> LookupResult:
        """
        Interpreta el HTML devuelto por el portal.

        El portal comunica errores de negocio (referencia inexistente o de
        otra distribuidora) como texto en una región del HTML, no como
        status HTTP.

        Args:
            raw_body: HTML crudo de la respuesta
            ref_no: Número de referencia consultado
            company: Distribuidora consultada

        Returns:
            LookupFailure con el texto del portal, o LookupSuccess con la factura
        """
        soup = BeautifulSoup(raw_body, "html.parser")

        error_text = self._error_text(soup)
        if error_text:
            logger.info(f"❌ Portal reportó error para {ref_no}: {error_text}")
            return LookupFailure(error=error_text, ref_no=ref_no, company=company.code)

        record = self.extract_bill(soup, ref_no, company.code)

        return LookupSuccess(
            ref_no=ref_no,
            company=company.code,
            company_name=company.name,
            data=record,
        )

    def _error_text(self, soup: BeautifulSoup) -> str:
        region = soup.select_one(RESULT_SELECTORS["error_region"])
        if region is None:
            return ""
        return region.get_text().strip()

    def extract_bill(self, soup: BeautifulSoup, ref_no: str, company_code: str) -> BillRecord:
        """
        Recorre todas las filas de tablas y mapea etiqueta → campo.

        Un fallo a mitad de la extracción no es fatal: se devuelve lo
        extraído hasta ese punto con parse_error.
        """
        record = BillRecord(reference_number=ref_no, company=company_code)

        try:
            for row in soup.select(RESULT_SELECTORS["table_rows"]):
                cells = row.find_all(RESULT_SELECTORS["cells"])
                if len(cells) < 2:
                    continue

                label = cells[0].get_text().strip().lower()
                value = cells[1].get_text().strip()

                target = match_label(label)
                if target is None:
                    continue

                section, field = target
                setattr(getattr(record, section), field, value)

            amount_element = soup.select_one(RESULT_SELECTORS["display_amount"])
            if amount_element is not None:
                record.charges.display_amount = amount_element.get_text().strip()

            # Respaldo para diagnóstico cuando la extracción no encuentra nada
            record.raw_html = str(soup)
        except Exception as e:
            logger.warning(f"⚠️  Error extrayendo datos de la factura {ref_no}: {e}")
            record.parse_error = str(e)

        return record
