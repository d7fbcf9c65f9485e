"""Base operation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, ClassVar, TypeAlias

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterable


class AllQubits:
    """Sentinel for operations acting on every qubit of the circuit."""

    _instance: ClassVar[AllQubits | None] = None

    def __new__(cls) -> AllQubits:  # noqa: D102
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:  # noqa: D105
        return "ALL_QUBITS"


#: Involved qubits of an operation acting on every qubit
ALL_QUBITS = AllQubits()

Param: TypeAlias = float | str  # noqa: UP040
InvolvedQubits: TypeAlias = frozenset[int] | AllQubits  # noqa: UP040


def union_qubits(sets: Iterable[InvolvedQubits]) -> InvolvedQubits:
    """Union of involved qubit sets, `ALL_QUBITS` being absorbing.

    Args:
        sets (Iterable[InvolvedQubits]): Sets to merge.

    Returns:
        InvolvedQubits: The union.

    Examples:
        >>> union_qubits([frozenset({0}), frozenset({2})])
        frozenset({0, 2})
        >>> union_qubits([frozenset({0}), ALL_QUBITS])
        ALL_QUBITS
    """
    result: set[int] = set()
    for qubits in sets:
        if isinstance(qubits, AllQubits):
            return ALL_QUBITS
        result |= qubits
    return frozenset(result)


class Operation(ABC):
    """Operation of a qubit, bosonic or classical circuit.

    Concrete operations are frozen dataclasses. See the
    :mod:`~qlayout.circuit.ops.single_qubit`, :mod:`~qlayout.circuit.ops.two_qubit`,
    :mod:`~qlayout.circuit.ops.multi_qubit`, :mod:`~qlayout.circuit.ops.bosonic`,
    :mod:`~qlayout.circuit.ops.classical` and :mod:`~qlayout.circuit.ops.pragma`
    modules for concrete implementations.
    """

    #: Names of the dataclass fields holding operand indices
    _operands: ClassVar[tuple[str, ...]] = ()

    def name(self) -> str:
        """Get the kind name of the operation.

        Returns:
            str: The kind name of the operation.

        Examples:
            >>> from qlayout.circuit.ops import two_qubit
            >>> two_qubit.CNOT(0, 1).name()
            'CNOT'
        """
        return type(self).__name__

    @abstractmethod
    def involved_qubits(self) -> InvolvedQubits:
        """Get the qubits the operation acts on.

        Returns:
            InvolvedQubits: Qubit indices, or `ALL_QUBITS`.
        """
        raise NotImplementedError

    def parameters(self) -> list:
        """Get the parameters of the operation.

        Returns:
            list: Every field of the operation that is not an operand index.

        Examples:
            >>> from qlayout.circuit.ops import single_qubit
            >>> single_qubit.RotateX(0, 0.5).parameters()
            [0.5]
        """
        return [getattr(self, f.name) for f in fields(self) if f.name not in self._operands]  # type: ignore[arg-type]

    def operands(self) -> list[int]:
        """Get the operand indices of the operation.

        Returns:
            list[int]: Operand indices in declaration order.
        """
        ret: list[int] = []
        for field_name in self._operands:
            value = getattr(self, field_name)
            if isinstance(value, tuple):
                ret.extend(value)
            else:
                ret.append(value)
        return ret

    def is_pragma(self) -> bool:
        """Check whether the operation is a pragma.

        Returns:
            bool: True if the kind name starts with `Pragma`.
        """
        return self.name().startswith("Pragma")

    def __str__(self) -> str:
        """Return a string representation of the operation.

        Returns:
            str: String representation of the operation.
        """
        return f"[{self.name()}] {self.parameters()} {self.operands()}"


class _ArrayEqualityMixin:
    """Structural equality for operations holding numpy arrays."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        for f in fields(self):  # type: ignore[arg-type]
            mine = getattr(self, f.name)
            theirs = getattr(other, f.name)
            if isinstance(mine, np.ndarray) or isinstance(theirs, np.ndarray):
                if not np.array_equal(mine, theirs):
                    return False
            elif mine != theirs:
                return False
        return True

    def __hash__(self) -> int:
        values = []
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            values.append(value.tobytes() if isinstance(value, np.ndarray) else value)
        return hash((type(self).__name__, *values))


@dataclass(frozen=True)
class SingleQubitOperation(Operation):
    """Operation acting on one qubit."""

    _operands: ClassVar[tuple[str, ...]] = ("qubit",)

    qubit: int
    "Index of the qubit."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset({self.qubit})


@dataclass(frozen=True)
class TwoQubitOperation(Operation):
    """Operation acting on a control and a target qubit."""

    _operands: ClassVar[tuple[str, ...]] = ("control", "target")

    control: int
    "Index of the control qubit."
    target: int
    "Index of the target qubit."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset({self.control, self.target})


@dataclass(frozen=True)
class ThreeQubitOperation(Operation):
    """Operation acting on two control qubits and a target qubit."""

    _operands: ClassVar[tuple[str, ...]] = ("control_0", "control_1", "target")

    control_0: int
    "Index of the first control qubit."
    control_1: int
    "Index of the second control qubit."
    target: int
    "Index of the target qubit."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset({self.control_0, self.control_1, self.target})


@dataclass(frozen=True)
class MultiQubitOperation(Operation):
    """Operation acting on an arbitrary list of qubits."""

    _operands: ClassVar[tuple[str, ...]] = ("qubits",)

    qubits: tuple[int, ...]
    "Indices of the qubits."

    def __post_init__(self) -> None:
        """Store the qubits as a tuple."""
        object.__setattr__(self, "qubits", tuple(self.qubits))

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset(self.qubits)


@dataclass(frozen=True)
class SingleModeOperation(Operation):
    """Operation acting on one bosonic mode."""

    _operands: ClassVar[tuple[str, ...]] = ("mode",)

    mode: int
    "Index of the bosonic mode."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset()


@dataclass(frozen=True)
class TwoModeOperation(Operation):
    """Operation acting on two bosonic modes."""

    _operands: ClassVar[tuple[str, ...]] = ("mode_0", "mode_1")

    mode_0: int
    "Index of the first bosonic mode."
    mode_1: int
    "Index of the second bosonic mode."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset()


@dataclass(frozen=True)
class QubitModeOperation(Operation):
    """Operation coupling one qubit to one bosonic mode."""

    _operands: ClassVar[tuple[str, ...]] = ("qubit", "mode")

    qubit: int
    "Index of the qubit."
    mode: int
    "Index of the bosonic mode."

    def involved_qubits(self) -> InvolvedQubits:  # noqa: D102
        return frozenset({self.qubit})
