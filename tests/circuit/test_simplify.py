"""Test cancellation of adjacent self-inverse two-qubit gates."""

import pytest

from qlayout.circuit import Circuit, remove_two_qubit_gates_identities
from qlayout.circuit.ops import classical, pragma, single_qubit, two_qubit


def test_adjacent_cnots_cancel():
    c = Circuit([two_qubit.CNOT(0, 1), two_qubit.CNOT(0, 1)])
    assert remove_two_qubit_gates_identities(c) == Circuit()


@pytest.mark.parametrize("gate", [two_qubit.SWAP, two_qubit.ControlledPauliZ])
def test_symmetric_gates_cancel_in_any_orientation(gate):
    c = Circuit([gate(0, 1), gate(1, 0)])
    assert remove_two_qubit_gates_identities(c) == Circuit()


def test_reversed_cnot_does_not_cancel():
    c = Circuit([two_qubit.CNOT(0, 1), two_qubit.CNOT(1, 0)])
    assert remove_two_qubit_gates_identities(c) == c


def test_different_kinds_do_not_cancel():
    c = Circuit([two_qubit.CNOT(0, 1), two_qubit.ControlledPauliZ(0, 1), two_qubit.CNOT(0, 1)])
    assert remove_two_qubit_gates_identities(c) == c


def test_iswap_is_not_cancelled():
    c = Circuit([two_qubit.ISwap(0, 1), two_qubit.ISwap(0, 1)])
    assert remove_two_qubit_gates_identities(c) == c


def test_gate_on_shared_qubit_blocks_cancellation():
    c = Circuit([two_qubit.CNOT(0, 1), single_qubit.Hadamard(1), two_qubit.CNOT(0, 1)])
    assert remove_two_qubit_gates_identities(c) == c


def test_unrelated_gate_does_not_block_cancellation():
    c = Circuit([two_qubit.CNOT(0, 1), single_qubit.Hadamard(2), two_qubit.CNOT(0, 1)])
    assert remove_two_qubit_gates_identities(c) == Circuit([single_qubit.Hadamard(2)])


def test_overlapping_pair_flushes_pending_gate():
    c = Circuit([two_qubit.CNOT(0, 1), two_qubit.CNOT(1, 2), two_qubit.CNOT(0, 1)])
    assert remove_two_qubit_gates_identities(c) == c


def test_nested_cancellation_reaches_fixed_point():
    c = Circuit(
        [
            two_qubit.CNOT(0, 1),
            two_qubit.SWAP(0, 1),
            two_qubit.SWAP(0, 1),
            two_qubit.CNOT(0, 1),
            single_qubit.PauliX(0),
        ],
    )
    assert remove_two_qubit_gates_identities(c) == Circuit([single_qubit.PauliX(0)])


def test_global_operation_flushes_every_pending_gate():
    c = Circuit([two_qubit.CNOT(0, 1), pragma.PragmaRepeatGate(2), two_qubit.CNOT(0, 1)])
    assert remove_two_qubit_gates_identities(c) == c


def test_pending_gates_are_emitted_in_recording_order():
    c = Circuit([two_qubit.CNOT(0, 1), two_qubit.CNOT(2, 3), classical.DefinitionBit("ro", 1)])
    result = remove_two_qubit_gates_identities(c)
    assert list(result) == [classical.DefinitionBit("ro", 1), two_qubit.CNOT(0, 1), two_qubit.CNOT(2, 3)]


def test_input_is_not_modified():
    c = Circuit([two_qubit.CNOT(0, 1), two_qubit.CNOT(0, 1)])
    remove_two_qubit_gates_identities(c)
    assert len(c) == 2


def test_idempotent():
    c = Circuit(
        [two_qubit.CNOT(0, 1), single_qubit.Hadamard(0), two_qubit.SWAP(1, 2), two_qubit.SWAP(2, 1), two_qubit.CNOT(0, 1)],
    )
    once = remove_two_qubit_gates_identities(c)
    assert remove_two_qubit_gates_identities(once) == once
