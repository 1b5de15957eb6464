"""Capability interfaces and registry."""

from .base import Capability, CatalogEntry, SubAgent, Tool
from .registry import CapabilityRegistry

__all__ = ["Capability", "CatalogEntry", "CapabilityRegistry", "SubAgent", "Tool"]
