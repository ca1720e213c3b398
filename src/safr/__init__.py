"""
SAFR - Alquiler de casas de verano en Kurdistán.

Listado, reservas, descuentos, reseñas, favoritos y notificaciones
sobre un store key-value.
"""

__version__ = "0.1.0"
