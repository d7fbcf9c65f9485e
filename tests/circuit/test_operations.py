"""Test operations."""

import numpy as np
import pytest

from qlayout.circuit import ALL_QUBITS, Circuit
from qlayout.circuit.ops import bosonic, classical, multi_qubit, pragma, single_qubit, two_qubit


def test_name_and_parameters():
    op = single_qubit.RotateXY(2, 0.5, "theta")
    assert op.name() == "RotateXY"
    assert op.parameters() == [0.5, "theta"]
    assert op.operands() == [2]
    assert not op.is_pragma()

    op = multi_qubit.MultiQubitMS([0, 2, 3], 1.0)
    assert op.qubits == (0, 2, 3)
    assert op.operands() == [0, 2, 3]
    assert op.parameters() == [1.0]


def test_register_operations():
    definition = classical.DefinitionBit("ro", 2)
    assert definition.register == "ro"
    assert definition.length == 2
    assert not definition.is_output
    assert definition.parameters() == ["ro", 2, False]
    assert classical.DefinitionFloat("f", 1, is_output=True) == classical.DefinitionFloat("f", 1, True)

    input_bit = classical.InputBit(register="flags", index=1, value=True)
    assert input_bit.register == "flags"
    assert input_bit.parameters() == ["flags", 1, True]
    assert input_bit == classical.InputBit("flags", 1, True)

    with pytest.raises(TypeError):
        classical.DefinitionBit()  # type: ignore[call-arg]


def test_operations_are_immutable():
    op = two_qubit.CNOT(0, 1)
    with pytest.raises(AttributeError):
        op.control = 2  # type: ignore[misc]


def test_structural_equality_and_hash():
    assert two_qubit.CNOT(0, 1) == two_qubit.CNOT(0, 1)
    assert two_qubit.CNOT(0, 1) != two_qubit.CNOT(1, 0)
    assert two_qubit.CNOT(0, 1) != two_qubit.ControlledPauliZ(0, 1)
    assert len({single_qubit.Hadamard(0), single_qubit.Hadamard(0), single_qubit.Hadamard(1)}) == 2


def test_array_parameters_compare_by_value():
    a = pragma.PragmaSetStateVector(np.array([1, 0]))
    b = pragma.PragmaSetStateVector([1.0, 0.0])
    c = pragma.PragmaSetStateVector([0, 1])
    assert a == b
    assert a != c
    assert hash(a) == hash(b)

    noise = pragma.PragmaGeneralNoise(0, 1.0, np.eye(3))
    assert noise == pragma.PragmaGeneralNoise(0, 1.0, np.eye(3))
    assert noise != pragma.PragmaGeneralNoise(1, 1.0, np.eye(3))


@pytest.mark.parametrize(
    ("op", "expected"),
    [
        (single_qubit.Hadamard(4), frozenset({4})),
        (two_qubit.SWAP(3, 1), frozenset({1, 3})),
        (multi_qubit.Toffoli(0, 1, 5), frozenset({0, 1, 5})),
        (pragma.PragmaSleep([2, 0], 1.0), frozenset({0, 2})),
        (bosonic.BeamSplitter(0, 1, 0.1, 0.2), frozenset()),
        (bosonic.QuantumRabi(2, 0, 0.1), frozenset({2})),
        (classical.DefinitionBit("ro", 2, is_output=True), frozenset()),
        (classical.MeasureQubit(1, "ro", 0), frozenset({1})),
        (pragma.PragmaGlobalPhase(0.5), frozenset()),
        (pragma.PragmaRepeatGate(3), ALL_QUBITS),
        (pragma.PragmaGetStateVector("sv"), ALL_QUBITS),
        (pragma.PragmaAnnotatedOp(two_qubit.CNOT(1, 2), "note"), frozenset({1, 2})),
    ],
)
def test_involved_qubits(op, expected):
    assert op.involved_qubits() == expected


def test_nested_involved_qubits():
    inner = Circuit([single_qubit.Hadamard(1), two_qubit.CNOT(1, 3)])
    assert pragma.PragmaLoop(2, inner).involved_qubits() == frozenset({1, 3})
    assert pragma.PragmaConditional("ro", 0, inner).involved_qubits() == frozenset({1, 3})
    assert pragma.PragmaControlledCircuit(0, inner).involved_qubits() == frozenset({0, 1, 3})

    global_inner = Circuit([pragma.PragmaRepeatGate(2)])
    assert pragma.PragmaLoop(2, global_inner).involved_qubits() is ALL_QUBITS


def test_is_pragma():
    assert pragma.PragmaActiveReset(0).is_pragma()
    assert pragma.PragmaLoop(1, Circuit()).is_pragma()
    assert not classical.InputBit("ro", 0, value=True).is_pragma()


def test_invalid_pauli_index():
    with pytest.raises(ValueError, match=r"Invalid Pauli index 4 for qubit 0\."):
        pragma.PragmaGetPauliProduct({0: 4}, "ro", Circuit())


def test_str():
    assert str(single_qubit.RotateX(0, 0.5)) == "[RotateX] [0.5] [0]"
    assert str(two_qubit.CNOT(0, 1)) == "[CNOT] [] [0, 1]"
