"""
Cotizador — quote totals and Mexican-peso amounts in words.

Flow: Line items → Totals (subtotal, IVA, total) → Total in words → Quote summary
"""

__version__ = "1.0.0"
