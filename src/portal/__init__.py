"""DentalAI multi-role demo portal."""

__version__ = "0.1.0"
