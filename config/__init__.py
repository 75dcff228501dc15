"""Configuración estática de los portales scrapeados."""
