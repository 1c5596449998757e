"""Neighbourhood society management: residents, committee, complaints, billing and notices."""

__version__ = "1.0.0"
