#!/usr/bin/env python3
"""
Script de inicio del servidor de la API con uvicorn.
"""

import uvicorn

from api.config import configure_logging, settings

configure_logging()

print(f"🚀 PITC Bill Checker API en http://{settings.host}:{settings.port}", flush=True)
print(f"📍 Consulta: http://localhost:{settings.port}/api/check-bill", flush=True)
print(f"🏢 Distribuidoras: http://localhost:{settings.port}/api/companies", flush=True)
print(f"💚 Health check: http://localhost:{settings.port}/health", flush=True)
if settings.proxy_url:
    print("🌐 Usando proxy de salida para el portal PITC", flush=True)

uvicorn.run(
    "api.main:app",
    host=settings.host,
    port=settings.port,
    log_level=settings.log_level.lower()
)
