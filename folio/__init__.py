"""
Folio - Portable Text rendering for the portfolio site.
"""

__version__ = "0.1.0"
