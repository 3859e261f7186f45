"""Package catalog services.

This module exports the catalog service interface and the implementation
that drives the external package tool.
"""

from pkgdeck.catalog.base import CatalogService, CommandResponse, CommandSteps
from pkgdeck.catalog.command import CommandCatalogService

__all__ = [
    "CatalogService",
    "CommandCatalogService",
    "CommandResponse",
    "CommandSteps",
]
