"""Pragma operations.

Pragmas annotate a circuit for simulators and devices. The layout engine draws
them as gray boxes, slices across the diagram, or dotted brackets around the
operations they group.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from qlayout.circuit.ops._base import (
    ALL_QUBITS,
    InvolvedQubits,
    MultiQubitOperation,
    Operation,
    Param,
    SingleQubitOperation,
    _ArrayEqualityMixin,
    union_qubits,
)

if TYPE_CHECKING:
    from qlayout.circuit.program import Circuit

__all__ = [
    "PragmaActiveReset",
    "PragmaAnnotatedOp",
    "PragmaBoostNoise",
    "PragmaChangeDevice",
    "PragmaConditional",
    "PragmaControlledCircuit",
    "PragmaDamping",
    "PragmaDephasing",
    "PragmaDepolarising",
    "PragmaGeneralNoise",
    "PragmaGetDensityMatrix",
    "PragmaGetOccupationProbability",
    "PragmaGetPauliProduct",
    "PragmaGetStateVector",
    "PragmaGlobalPhase",
    "PragmaLoop",
    "PragmaOverrotation",
    "PragmaRandomNoise",
    "PragmaRepeatGate",
    "PragmaRepeatedMeasurement",
    "PragmaSetDensityMatrix",
    "PragmaSetNumberOfMeasurements",
    "PragmaSetStateVector",
    "PragmaSleep",
    "PragmaStartDecompositionBlock",
    "PragmaStopDecompositionBlock",
    "PragmaStopParallelBlock",
]


# Global markers


@dataclass(frozen=True)
class PragmaSetNumberOfMeasurements(Operation):
    """Set the number of measurement repetitions of a readout register."""

    number_measurements: int
    "Number of repetitions."
    readout: str
    "Name of the readout register."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset()


@dataclass(frozen=True, eq=False)
class PragmaSetStateVector(_ArrayEqualityMixin, Operation):
    """Overwrite the state vector of the simulator."""

    statevector: np.ndarray
    "State vector."

    def __post_init__(self) -> None:
        """Store the state vector as a complex array."""
        object.__setattr__(self, "statevector", np.asarray(self.statevector, dtype=np.complex128))

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS


@dataclass(frozen=True, eq=False)
class PragmaSetDensityMatrix(_ArrayEqualityMixin, Operation):
    """Overwrite the density matrix of the simulator."""

    density_matrix: np.ndarray
    "Density matrix."

    def __post_init__(self) -> None:
        """Store the density matrix as a complex array."""
        object.__setattr__(self, "density_matrix", np.asarray(self.density_matrix, dtype=np.complex128))

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS


@dataclass(frozen=True)
class PragmaRepeatGate(Operation):
    """Repeat the next gate."""

    repetition_coefficient: int
    "Number of repetitions."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS


@dataclass(frozen=True)
class PragmaBoostNoise(Operation):
    """Boost the noise of the following gates."""

    noise_coefficient: Param
    "Noise multiplier."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset()


@dataclass(frozen=True)
class PragmaGlobalPhase(Operation):
    """Global phase of the circuit."""

    phase: Param
    "Phase."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset()


@dataclass(frozen=True)
class PragmaChangeDevice(Operation):
    """Change the device of the following operations."""

    wrapped_hqslang: str
    "Kind name of the wrapped device change."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS


# Multi-qubit annotations


@dataclass(frozen=True)
class PragmaOverrotation(MultiQubitOperation):
    """Statistical overrotation of a gate."""

    gate_hqslang: str
    "Kind name of the overrotated gate."
    amplitude: float
    "Amplitude of the overrotation."
    variance: float
    "Variance of the overrotation."


@dataclass(frozen=True)
class PragmaStopParallelBlock(MultiQubitOperation):
    """End of a block of parallel gates."""

    execution_time: Param
    "Execution time of the block."


@dataclass(frozen=True)
class PragmaStartDecompositionBlock(MultiQubitOperation):
    """Start of a block decomposed as a whole."""

    reordering_dictionary: dict[int, int] = field(default_factory=dict)
    "Reordering of the qubits inside the block."


@dataclass(frozen=True)
class PragmaStopDecompositionBlock(MultiQubitOperation):
    """End of a block decomposed as a whole."""


@dataclass(frozen=True)
class PragmaSleep(MultiQubitOperation):
    """Idle the qubits for a given time."""

    sleep_time: Param
    "Idle time."


# Single-qubit noise


@dataclass(frozen=True)
class PragmaActiveReset(SingleQubitOperation):
    """Reset the qubit to the state `|0>`."""


@dataclass(frozen=True)
class PragmaDamping(SingleQubitOperation):
    """Amplitude damping."""

    gate_time: Param
    "Duration of the noise."
    rate: Param
    "Damping rate."


@dataclass(frozen=True)
class PragmaDepolarising(SingleQubitOperation):
    """Depolarising noise."""

    gate_time: Param
    "Duration of the noise."
    rate: Param
    "Depolarising rate."


@dataclass(frozen=True)
class PragmaDephasing(SingleQubitOperation):
    """Dephasing noise."""

    gate_time: Param
    "Duration of the noise."
    rate: Param
    "Dephasing rate."


@dataclass(frozen=True)
class PragmaRandomNoise(SingleQubitOperation):
    """Stochastic depolarising and dephasing noise."""

    gate_time: Param
    "Duration of the noise."
    depolarising_rate: Param
    "Depolarising rate."
    dephasing_rate: Param
    "Dephasing rate."


@dataclass(frozen=True, eq=False)
class PragmaGeneralNoise(_ArrayEqualityMixin, SingleQubitOperation):
    """Noise given by a rate matrix."""

    gate_time: Param
    "Duration of the noise."
    rates: np.ndarray
    "Rate matrix."

    def __post_init__(self) -> None:
        """Store the rates as a float array."""
        object.__setattr__(self, "rates", np.asarray(self.rates, dtype=np.float64))


# Grouping operations


@dataclass(frozen=True)
class PragmaConditional(Operation):
    """Run a circuit if a bit of a classical register is set."""

    condition_register: str
    "Name of the condition register."
    condition_index: int
    "Index of the condition bit."
    circuit: Circuit
    "Conditionally executed circuit."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return self.circuit.involved_qubits()


@dataclass(frozen=True)
class PragmaLoop(Operation):
    """Repeat a circuit."""

    repetitions: Param
    "Number of repetitions."
    circuit: Circuit
    "Repeated circuit."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return self.circuit.involved_qubits()


@dataclass(frozen=True)
class PragmaControlledCircuit(Operation):
    """Run a circuit controlled by a qubit."""

    controlling_qubit: int
    "Index of the controlling qubit."
    circuit: Circuit
    "Controlled circuit."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return union_qubits([frozenset({self.controlling_qubit}), self.circuit.involved_qubits()])


@dataclass(frozen=True)
class PragmaAnnotatedOp(Operation):
    """Operation with a free-text annotation."""

    operation: Operation
    "Annotated operation."
    annotation: str
    "Annotation."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return self.operation.involved_qubits()


@dataclass(frozen=True)
class PragmaRepeatedMeasurement(Operation):
    """Measure qubits repeatedly into a readout register."""

    readout: str
    "Name of the readout register."
    number_measurements: int
    "Number of repetitions."
    qubit_mapping: dict[int, int] | None = None
    "Mapping from qubit to register index. Every qubit maps to itself when omitted."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS


@dataclass(frozen=True)
class PragmaGetStateVector(Operation):
    """Read the state vector after running a circuit."""

    readout: str
    "Name of the readout register."
    circuit: Circuit | None = None
    "Circuit run before reading the state."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS


@dataclass(frozen=True)
class PragmaGetDensityMatrix(Operation):
    """Read the density matrix after running a circuit."""

    readout: str
    "Name of the readout register."
    circuit: Circuit | None = None
    "Circuit run before reading the state."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS


@dataclass(frozen=True)
class PragmaGetOccupationProbability(Operation):
    """Read the occupation probabilities after running a circuit."""

    readout: str
    "Name of the readout register."
    circuit: Circuit | None = None
    "Circuit run before reading the state."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS


#: Pauli operators of `PragmaGetPauliProduct`: 0 identity, 1 X, 2 Y, 3 Z
PAULI_INDICES = (0, 1, 2, 3)


@dataclass(frozen=True)
class PragmaGetPauliProduct(Operation):
    """Read the expectation value of a Pauli product after running a circuit."""

    qubit_paulis: dict[int, int]
    "Pauli operator measured on each qubit (0 identity, 1 X, 2 Y, 3 Z)."
    readout: str
    "Name of the readout register."
    circuit: Circuit
    "Circuit run before the measurement."

    def __post_init__(self) -> None:
        """Validate the Pauli indices.

        Raises:
            ValueError: If a Pauli index is not 0, 1, 2 or 3.
        """
        for qubit, pauli in self.qubit_paulis.items():
            if pauli not in PAULI_INDICES:
                msg = f"Invalid Pauli index {pauli} for qubit {qubit}."
                raise ValueError(msg)

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return ALL_QUBITS
