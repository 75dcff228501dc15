"""
Clase base para scrapers de portales ASP.NET WebForms.
Define la interfaz común: GET de tokens → POST del formulario.
"""

from typing import Tuple

from scraper.models import SessionTokens


class ScraperBase:
    """Clase base para todos los scrapers de portales con ViewState."""

    site_id: str

    async def fetch_tokens(self, url: str) -> Tuple[SessionTokens, str]:
        """
        Carga la página y extrae los tokens ocultos del formulario.

        Args:
            url: URL de la página del formulario

        Returns:
            Tupla (tokens, cookie de sesión)
        """
        raise NotImplementedError("Cada scraper debe implementar fetch_tokens")

    async def submit_lookup(
        self,
        url: str,
        tokens: SessionTokens,
        cookie: str,
        ref_no: str,
    ) -> str:
        """
        Envía el formulario de búsqueda con los tokens de la misma sesión.

        Args:
            url: URL de la página del formulario
            tokens: Tokens obtenidos en fetch_tokens
            cookie: Cookie de sesión de la respuesta GET
            ref_no: Número de referencia

        Returns:
            HTML crudo de la respuesta
        """
        raise NotImplementedError("Cada scraper debe implementar submit_lookup")
