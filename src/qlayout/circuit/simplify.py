"""Cancellation of adjacent self-inverse two-qubit gates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from qlayout.circuit.ops._base import AllQubits, TwoQubitOperation
from qlayout.circuit.program import Circuit

if TYPE_CHECKING:
    from qlayout.circuit.ops._base import Operation

logger = logging.getLogger(__name__)

#: Kind names of the self-inverse gates removed by the pass
CANCELLABLE_GATES: frozenset[str] = frozenset({"CNOT", "SWAP", "ControlledPauliZ"})

#: Cancellable gates whose action does not depend on the operand order
SYMMETRIC_GATES: frozenset[str] = frozenset({"SWAP", "ControlledPauliZ"})


def _is_cancellable(op: Operation) -> bool:
    return isinstance(op, TwoQubitOperation) and op.name() in CANCELLABLE_GATES


def _cancels(pending: TwoQubitOperation, op: TwoQubitOperation) -> bool:
    if pending.name() != op.name():
        return False
    if op.name() in SYMMETRIC_GATES:
        return True
    return (pending.control, pending.target) == (op.control, op.target)


def _remove_identities_once(circuit: Circuit) -> Circuit:
    pending: dict[frozenset[int], TwoQubitOperation] = {}
    ret = Circuit()

    def flush(qubits: frozenset[int] | None) -> None:
        for pair in [pair for pair in pending if qubits is None or pair & qubits]:
            ret.add(pending.pop(pair))

    for op in circuit:
        if _is_cancellable(op):
            pair = frozenset({op.control, op.target})  # type: ignore[attr-defined]
            last = pending.get(pair)
            if last is not None and _cancels(last, op):  # type: ignore[arg-type]
                logger.debug("Removed %s and %s.", last, op)
                del pending[pair]
                continue
            flush(pair)
            pending[pair] = op  # type: ignore[assignment]
        else:
            involved = op.involved_qubits()
            flush(None if isinstance(involved, AllQubits) else involved)
            ret.add(op)
    flush(None)
    return ret


def remove_two_qubit_gates_identities(circuit: Circuit) -> Circuit:
    """Remove pairs of adjacent identical self-inverse two-qubit gates.

    Two CNOT, SWAP or ControlledPauliZ gates on the same pair of qubits cancel when no
    operation touching either qubit lies between them. CNOT cancels only with the same
    orientation. The pass is repeated until the circuit no longer changes.

    Args:
        circuit (Circuit): Input circuit. It is not modified.

    Returns:
        Circuit: Simplified circuit.

    Examples:
        >>> from qlayout.circuit import Circuit
        >>> from qlayout.circuit.ops import single_qubit, two_qubit
        >>> circuit = Circuit([two_qubit.CNOT(0, 1), two_qubit.CNOT(0, 1), single_qubit.Hadamard(0)])
        >>> print(remove_two_qubit_gates_identities(circuit))
        [Hadamard] [] [0]
    """
    current = circuit
    while True:
        simplified = _remove_identities_once(current)
        if simplified == current:
            return simplified
        current = simplified
