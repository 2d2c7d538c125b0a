"""RupeeRadar: bank SMS to transaction records."""

__version__ = "1.0.0"
