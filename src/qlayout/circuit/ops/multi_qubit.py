"""Three-qubit and n-qubit gates."""

from __future__ import annotations

from dataclasses import dataclass

from qlayout.circuit.ops._base import MultiQubitOperation, Param, ThreeQubitOperation

__all__ = [
    "ControlledControlledPauliZ",
    "ControlledControlledPhaseShift",
    "MultiQubitMS",
    "MultiQubitZZ",
    "Toffoli",
]


@dataclass(frozen=True)
class Toffoli(ThreeQubitOperation):
    """Doubly controlled NOT gate."""


@dataclass(frozen=True)
class ControlledControlledPauliZ(ThreeQubitOperation):
    """Doubly controlled Pauli Z gate."""


@dataclass(frozen=True)
class ControlledControlledPhaseShift(ThreeQubitOperation):
    """Doubly controlled phase shift."""

    theta: Param
    "Phase."


@dataclass(frozen=True)
class MultiQubitMS(MultiQubitOperation):
    """Molmer-Sorensen gate on any number of qubits."""

    theta: Param
    "Rotation angle."


@dataclass(frozen=True)
class MultiQubitZZ(MultiQubitOperation):
    """ZZ rotation on any number of qubits."""

    theta: Param
    "Rotation angle."
