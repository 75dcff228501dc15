"""
API REST para el servicio de consulta de facturas PITC.

Este paquete expone endpoints REST sobre el scraper del portal:
tokens → formulario → extracción de la factura.
"""

__version__ = "2.0.0"
