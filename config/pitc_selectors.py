"""
Selectores y configuración para el portal de facturas PITC.
Identificados mediante exploración manual del sitio (ASP.NET WebForms).

Fuente: https://bill.pitc.com.pk/hescobill
"""

# ============================================================================
# PORTAL
# ============================================================================

PITC_BASE_URL = "https://bill.pitc.com.pk"

# Cada distribuidora expone la misma página en /<codigo>bill
BILL_PATH_TEMPLATE = "/{code}bill"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# ============================================================================
# TOKENS OCULTOS (GET)
# ============================================================================

TOKEN_SELECTORS = {
    "viewstate": "#__VIEWSTATE",
    "viewstategenerator": "#__VIEWSTATEGENERATOR",
    "eventvalidation": "#__EVENTVALIDATION",
    # No siempre trae id, se busca por name
    "request_verification_token": "input[name='__RequestVerificationToken']",
}

# ============================================================================
# FORMULARIO DE BÚSQUEDA (POST)
# ============================================================================

FORM_FIELDS = {
    "viewstate": "__VIEWSTATE",
    "viewstategenerator": "__VIEWSTATEGENERATOR",
    "eventvalidation": "__EVENTVALIDATION",
    "request_verification_token": "__RequestVerificationToken",
    "search_mode": "rbSearchByList",
    "search_text": "searchTextBox",
    "ru_code": "ruCodeTextBox",
    "submit": "btnSearch",
}

SEARCH_BY_REFERENCE = "refno"
SUBMIT_VALUE = "Search"
# 'U' urbano o 'R' rural; vacío = urbano
DEFAULT_RU_CODE = ""

# ============================================================================
# RESPUESTA (POST)
# ============================================================================

RESULT_SELECTORS = {
    # El portal informa errores de negocio como texto en este div
    "error_region": "#ua",
    "table_rows": "table tr",
    "cells": "td",
    "display_amount": "[id*='amount'], [class*='amount']",
}
