"""Circuit of qubit, bosonic and classical operations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import overload

from qlayout.circuit.ops._base import InvolvedQubits, Operation, union_qubits


class Circuit:
    """Ordered list of operations.

    Examples:
        >>> from qlayout.circuit import Circuit
        >>> from qlayout.circuit.ops import single_qubit, two_qubit
        >>> circuit = Circuit()
        >>> circuit += single_qubit.Hadamard(0)
        >>> circuit += two_qubit.CNOT(0, 1)
        >>> len(circuit)
        2
    """

    def __init__(self, operations: Iterable[Operation] = ()) -> None:
        """Construct a circuit.

        Args:
            operations (Iterable[Operation]): Initial operations.
        """
        self._ops: list[Operation] = []
        for op in operations:
            self.add(op)

    def add(self, op: Operation) -> Circuit:
        """Append an operation.

        Args:
            op (Operation): Operation to append.

        Returns:
            Circuit: The circuit itself.

        Raises:
            TypeError: If `op` is not an operation.
        """
        if not isinstance(op, Operation):
            msg = f"Only operations can be added to a circuit, got {type(op).__name__}."
            raise TypeError(msg)
        self._ops.append(op)
        return self

    def __iadd__(self, other: Operation | Iterable[Operation]) -> Circuit:
        """Append an operation or every operation of an iterable.

        Args:
            other (Operation | Iterable[Operation]): Operations to append.

        Returns:
            Circuit: The circuit itself.
        """
        if isinstance(other, Operation):
            return self.add(other)
        for op in other:
            self.add(op)
        return self

    def __add__(self, other: Operation | Iterable[Operation]) -> Circuit:
        """Concatenate into a new circuit.

        Args:
            other (Operation | Iterable[Operation]): Operations to append.

        Returns:
            Circuit: New circuit.
        """
        ret = Circuit(self._ops)
        ret += other
        return ret

    @property
    def n_operations(self) -> int:
        """Get the number of operations in the circuit.

        Returns:
            int: The number of operations.
        """
        return len(self._ops)

    def get_operation(self, i: int) -> Operation:
        """Get the operation.

        Args:
            i (int): Index of the operation.

        Returns:
            Operation: Operation.
        """
        return self._ops[i]

    def is_empty(self) -> bool:
        """Check whether the circuit has no operation.

        Returns:
            bool: True if the circuit is empty.
        """
        return not self._ops

    def involved_qubits(self) -> InvolvedQubits:
        """Get the qubits touched by any operation of the circuit.

        Returns:
            InvolvedQubits: Union of the involved qubits of the operations.

        Examples:
            >>> from qlayout.circuit import Circuit
            >>> from qlayout.circuit.ops import single_qubit, two_qubit
            >>> Circuit([single_qubit.Hadamard(3), two_qubit.CNOT(0, 1)]).involved_qubits()
            frozenset({0, 1, 3})
        """
        return union_qubits(op.involved_qubits() for op in self._ops)

    def __len__(self) -> int:
        """Return the number of operations in the circuit.

        Returns:
            int: The number of operations.
        """
        return len(self._ops)

    def __iter__(self) -> Iterator[Operation]:
        """Iterate over operations in the circuit.

        Yields:
            Operation: Operation.
        """
        yield from self._ops

    @overload
    def __getitem__(self, index: int) -> Operation: ...

    @overload
    def __getitem__(self, index: slice) -> Circuit: ...

    def __getitem__(self, index: int | slice) -> Operation | Circuit:
        """Get an operation, or a sub-circuit for a slice.

        Returns:
            Operation | Circuit: Operation or sub-circuit.
        """
        if isinstance(index, slice):
            return Circuit(self._ops[index])
        return self._ops[index]

    def __eq__(self, other: object) -> bool:
        """Compare the operation lists.

        Returns:
            bool: True if both circuits hold equal operations in the same order.
        """
        if not isinstance(other, Circuit):
            return NotImplemented
        return self._ops == other._ops

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        """Get the operation list as a string.

        Returns:
            str: Operation list.
        """
        ret = ""
        for op in self._ops:
            ret += str(op) + "\n"
        return ret.rstrip()

    def __repr__(self) -> str:
        """Get the string representation of the circuit.

        Returns:
            str: String representation.
        """
        return f"Circuit({self._ops!r})"
