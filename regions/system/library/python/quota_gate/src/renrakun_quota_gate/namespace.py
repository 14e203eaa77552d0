"""Name-addressed registry of gate instances."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from dataclasses import dataclass

from .gate import QuotaGate
from .memory import InMemoryStorage
from .store import DurableStorage

GLOBAL_GATE = "global"


@dataclass(frozen=True)
class GateId:
    """Stable identifier derived from a gate name."""

    name: str
    hex: str

    def __str__(self) -> str:
        return self.hex


class QuotaGateNamespace:
    """Hands out exactly one QuotaGate per name.

    Callers address an instance with ``get(id_from_name("global"))``; repeated
    lookups return the same object, so all callers in the process share its
    lock and storage scope.
    """

    def __init__(
        self,
        storage_factory: Callable[[str], DurableStorage] | None = None,
    ) -> None:
        self._storage_factory = storage_factory or (lambda _scope: InMemoryStorage())
        self._gates: dict[str, QuotaGate] = {}

    def id_from_name(self, name: str) -> GateId:
        if not name:
            raise ValueError("gate name must not be empty")
        return GateId(name=name, hex=hashlib.sha256(name.encode()).hexdigest())

    def get(self, gate_id: GateId) -> QuotaGate:
        gate = self._gates.get(gate_id.hex)
        if gate is None:
            gate = QuotaGate(self._storage_factory(gate_id.hex), name=gate_id.name)
            self._gates[gate_id.hex] = gate
        return gate

    def __len__(self) -> int:
        return len(self._gates)
