"""Modelos de datos para la consulta de facturas en el portal PITC."""

import re
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base con alias camelCase para la salida JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompanyDescriptor(BaseModel):
    """Distribuidora eléctrica (DISCO) soportada por el portal."""
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    url: str
    ref_pattern: re.Pattern = re.compile(r"^\d{10,14}$", re.ASCII)


class SessionTokens(BaseModel):
    """Tokens ocultos de una carga de página. Se usan una sola vez."""
    model_config = ConfigDict(frozen=True)

    view_state: str
    view_state_generator: str
    event_validation: str
    request_verification_token: str = ""


class ConsumerDetails(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    customer_id: Optional[str] = None


class BillDetails(CamelModel):
    tariff: Optional[str] = None
    due_date: Optional[str] = None
    issue_date: Optional[str] = None
    reading_date: Optional[str] = None
    current_reading: Optional[str] = None
    previous_reading: Optional[str] = None
    units_consumed: Optional[str] = None


class Charges(CamelModel):
    total_amount: Optional[str] = None
    amount_after_due_date: Optional[str] = None
    electricity_charges: Optional[str] = None
    gst: Optional[str] = None
    display_amount: Optional[str] = None


class BillRecord(CamelModel):
    """Factura extraída del HTML de respuesta."""
    reference_number: str
    company: str
    consumer_details: ConsumerDetails = Field(default_factory=ConsumerDetails)
    bill_details: BillDetails = Field(default_factory=BillDetails)
    charges: Charges = Field(default_factory=Charges)
    raw_html: Optional[str] = None
    parse_error: Optional[str] = None


class LookupSuccess(CamelModel):
    """Consulta exitosa."""
    success: Literal[True] = True
    ref_no: str
    company: str
    company_name: str
    data: BillRecord


class LookupFailure(CamelModel):
    """Consulta fallida (error de negocio, red o estructura)."""
    success: Literal[False] = False
    error: str = Field(..., min_length=1)
    ref_no: Optional[str] = None
    company: Optional[str] = None


LookupResult = Union[LookupSuccess, LookupFailure]
