"""Minam data-to-API registry: datasets, model profiles, proposals, products."""

__version__ = "0.1.0"
