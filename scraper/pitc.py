"""
Scraper para el portal de facturas PITC (bill.pitc.com.pk).
Implementa el flujo de dos pasos: GET de tokens → POST del formulario.

Cada llamada abre su propio cliente HTTP; tokens y cookies viven solo
durante una consulta y nunca se reutilizan.
"""

import logging
from typing import Optional, Tuple

import httpx
from bs4 import BeautifulSoup

from config.pitc_selectors import (
    DEFAULT_RU_CODE, FORM_FIELDS, SEARCH_BY_REFERENCE, SUBMIT_VALUE,
    TOKEN_SELECTORS, USER_AGENT,
)
from scraper.base import ScraperBase
from scraper.errors import TokensMissingError
from scraper.models import SessionTokens

logger = logging.getLogger(__name__)


class PITCBillScraper(ScraperBase):
    """Scraper para el portal PITC de todas las distribuidoras."""

    site_id = "pitc"

    def __init__(
        self,
        user_agent: str = USER_AGENT,
        timeout: float = 30.0,
        max_redirects: int = 5,
        proxy_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            user_agent: User-Agent de navegador enviado en ambas peticiones
            timeout: Timeout en segundos de cada petición
            max_redirects: Máximo de redirecciones a seguir
            proxy_url: Proxy de salida (despliegues con restricción geográfica)
            transport: Transporte httpx alternativo (tests)
        """
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.proxy_url = proxy_url
        self.transport = transport

    def _client(self, follow_redirects: bool = True) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=follow_redirects,
            max_redirects=self.max_redirects,
            proxy=self.proxy_url,
            transport=self.transport,
        )

    async def fetch_tokens(self, url: str) -> Tuple[SessionTokens, str]:
        """
        Carga la página del formulario y extrae los tokens ASP.NET.

        Raises:
            TokensMissingError: Si falta __VIEWSTATE, __VIEWSTATEGENERATOR o
                __EVENTVALIDATION
            httpx.HTTPError: Errores de red o status HTTP no exitoso
        """
        logger.info(f"🔍 Obteniendo tokens de {url}")

        async with self._client() as client:
            response = await client.get(url, headers={"User-Agent": self.user_agent})
            response.raise_for_status()

        tokens = parse_session_tokens(response.text)
        cookie = "; ".join(response.headers.get_list("set-cookie"))

        if not tokens.request_verification_token:
            logger.debug("Página sin __RequestVerificationToken, se envía vacío")

        return tokens, cookie

    async def submit_lookup(
        self,
        url: str,
        tokens: SessionTokens,
        cookie: str,
        ref_no: str,
    ) -> str:
        """
        Envía la búsqueda por número de referencia.

        Las redirecciones se siguen a mano: httpx descarta el header Cookie
        en cada salto, y la página de resultado exige la sesión.

        Raises:
            httpx.TooManyRedirects: Si se superan max_redirects saltos
            httpx.HTTPError: Errores de red o status HTTP no exitoso
        """
        logger.info(f"📤 Enviando búsqueda de {ref_no} a {url}")

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": self.user_agent,
            "Referer": url,
            "Cookie": cookie,
        }

        async with self._client(follow_redirects=False) as client:
            response = await client.post(url, data=build_form_data(tokens, ref_no), headers=headers)

            hops = 0
            while response.next_request is not None:
                if hops >= self.max_redirects:
                    raise httpx.TooManyRedirects(
                        "Exceeded maximum allowed redirects.",
                        request=response.next_request
                    )
                request = response.next_request
                # La sesión solo viaja dentro del mismo host
                if cookie and request.url.host == response.request.url.host:
                    request.headers["Cookie"] = cookie
                logger.debug(f"↪️ Redirección {hops + 1} a {request.url}")
                response = await client.send(request)
                hops += 1

            response.raise_for_status()

        return response.text


def parse_session_tokens(html: str) -> SessionTokens:
    """
    Extrae los cuatro tokens ocultos de la página del formulario.

    Raises:
        TokensMissingError: Si falta alguno de los tres tokens obligatorios
    """
    soup = BeautifulSoup(html, "html.parser")

    def value_of(selector: str) -> str:
        element = soup.select_one(selector)
        if element is None:
            return ""
        return element.get("value") or ""

    view_state = value_of(TOKEN_SELECTORS["viewstate"])
    view_state_generator = value_of(TOKEN_SELECTORS["viewstategenerator"])
    event_validation = value_of(TOKEN_SELECTORS["eventvalidation"])

    if not view_state or not view_state_generator or not event_validation:
        raise TokensMissingError()

    return SessionTokens(
        view_state=view_state,
        view_state_generator=view_state_generator,
        event_validation=event_validation,
        request_verification_token=value_of(TOKEN_SELECTORS["request_verification_token"]),
    )


def build_form_data(tokens: SessionTokens, ref_no: str) -> dict:
    """Cuerpo url-encoded de la búsqueda, con exactamente estos campos."""
    return {
        FORM_FIELDS["viewstate"]: tokens.view_state,
        FORM_FIELDS["viewstategenerator"]: tokens.view_state_generator,
        FORM_FIELDS["eventvalidation"]: tokens.event_validation,
        FORM_FIELDS["request_verification_token"]: tokens.request_verification_token,
        FORM_FIELDS["search_mode"]: SEARCH_BY_REFERENCE,
        FORM_FIELDS["search_text"]: ref_no,
        FORM_FIELDS["ru_code"]: DEFAULT_RU_CODE,
        FORM_FIELDS["submit"]: SUBMIT_VALUE,
    }
