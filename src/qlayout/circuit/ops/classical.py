"""Classical register definitions, inputs and qubit measurement."""

from __future__ import annotations

from dataclasses import dataclass, field

from qlayout.circuit.ops._base import InvolvedQubits, Operation, SingleQubitOperation

__all__ = [
    "DefinitionBit",
    "DefinitionComplex",
    "DefinitionFloat",
    "DefinitionUsize",
    "InputBit",
    "InputSymbolic",
    "MeasureQubit",
]


@dataclass(frozen=True)
class _Definition(Operation):
    # An explicit field() shadows the inherited ABCMeta.register as default value
    register: str = field()
    "Name of the register."
    length: int
    "Number of entries of the register."
    is_output: bool = False
    "Whether the register is returned as output."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset()


@dataclass(frozen=True)
class DefinitionBit(_Definition):
    """Definition of a bit register."""


@dataclass(frozen=True)
class DefinitionFloat(_Definition):
    """Definition of a float register."""


@dataclass(frozen=True)
class DefinitionComplex(_Definition):
    """Definition of a complex register."""


@dataclass(frozen=True)
class DefinitionUsize(_Definition):
    """Definition of an unsigned integer register."""


@dataclass(frozen=True)
class InputBit(Operation):
    """Set one entry of a bit register."""

    register: str = field()
    "Name of the register."
    index: int
    "Index of the entry."
    value: bool
    "Value of the entry."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset()


@dataclass(frozen=True)
class InputSymbolic(Operation):
    """Bind a value to a symbolic parameter."""

    symbol: str
    "Name of the symbolic parameter."
    value: float
    "Value bound to the parameter."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset()


@dataclass(frozen=True)
class MeasureQubit(SingleQubitOperation):
    """Measure a qubit into an entry of a bit register."""

    readout: str
    "Name of the readout register."
    readout_index: int
    "Index in the readout register."
