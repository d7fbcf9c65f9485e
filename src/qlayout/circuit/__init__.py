"""qlayout.circuit module."""

from qlayout.circuit.ops._base import ALL_QUBITS, InvolvedQubits, Operation, Param
from qlayout.circuit.program import Circuit
from qlayout.circuit.simplify import remove_two_qubit_gates_identities

__all__ = ["ALL_QUBITS", "Circuit", "InvolvedQubits", "Operation", "Param", "remove_two_qubit_gates_identities"]
