"""A grid-based tower defense game with bullet, splash and slow towers."""

__version__ = "1.0.0"