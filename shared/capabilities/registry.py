"""Name-keyed capability registry."""

from __future__ import annotations

from typing import Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from shared.capabilities.base import Capability, CatalogEntry
from shared.errors import ContractViolation

C = TypeVar("C", bound=Capability)


class CapabilityRegistry(Generic[C]):
    """Read-only mapping from capability name to capability.

    Built once per driver. Duplicate names are rejected at construction.
    """

    def __init__(self, capabilities: Iterable[C]) -> None:
        self._capabilities: Dict[str, C] = {}
        for capability in capabilities:
            if not capability.name:
                raise ContractViolation(f"Capability {type(capability).__name__} has no name")
            if capability.name in self._capabilities:
                raise ContractViolation(f"Duplicate capability name: {capability.name}")
            self._capabilities[capability.name] = capability

    def get(self, name: str) -> Optional[C]:
        return self._capabilities.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities

    def __len__(self) -> int:
        return len(self._capabilities)

    def __iter__(self) -> Iterator[C]:
        return iter(self._capabilities.values())

    def names(self) -> List[str]:
        return list(self._capabilities)

    def catalog(self) -> List[CatalogEntry]:
        return [capability.catalog_entry() for capability in self._capabilities.values()]
