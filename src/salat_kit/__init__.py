"""Salat-Kit - Kıble yönü ve namaz vakti yardımcıları."""

__version__ = "0.1.0"
