"""
Configuración del servicio usando Pydantic Settings.
Lee variables de entorno o .env file.
"""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from config.pitc_selectors import USER_AGENT


class Settings(BaseSettings):
    """Settings del servicio de consulta de facturas."""

    # Servidor
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Portal PITC
    proxy_url: Optional[str] = None  # Proxy de salida si el portal restringe por país
    default_company: str = "hesco"
    request_timeout_seconds: float = 30.0
    max_redirects: int = 5
    user_agent: str = USER_AGENT

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Singleton
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configura el logging raíz (servidor y scripts)."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
