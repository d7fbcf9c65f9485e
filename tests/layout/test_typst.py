"""Test serialization of layouts into Typst documents."""

import pytest

from qlayout.circuit import Circuit
from qlayout.circuit.ops import bosonic, classical, pragma, single_qubit, two_qubit
from qlayout.layout.cells import ClassicalOffset, Meter
from qlayout.layout.convert import Layout, circuit_to_layout
from qlayout.layout.tracks import Track
from qlayout.layout.typst import DOCUMENT_FOOTER, DOCUMENT_HEADER, circuit_to_typst_str, layout_to_typst


def rows(document: str) -> list[str]:
    assert document.startswith(DOCUMENT_HEADER)
    assert document.endswith(DOCUMENT_FOOTER)
    return document[len(DOCUMENT_HEADER) : -len(DOCUMENT_FOOTER)].splitlines()


def test_header():
    assert DOCUMENT_HEADER.splitlines() == [
        "#set page(width: auto, height: auto, margin: 5pt)",
        '#show math.equation: set text(font: "Fira Math")',
        "#{ ",
        '    import "@preview/quill:0.2.1": *',
        "    quantum-circuit(",
    ]


def test_single_gate_document():
    document = circuit_to_typst_str(Circuit([single_qubit.Hadamard(0)]))
    assert document == DOCUMENT_HEADER + '       lstick($|0>$, label: "Qubits"), $ H $, 1,\n' + ")\n}\n"


def test_empty_circuit_document():
    assert circuit_to_typst_str(Circuit()) == DOCUMENT_HEADER + DOCUMENT_FOOTER


def test_row_separators_and_qubit_names():
    document = circuit_to_typst_str(Circuit([two_qubit.CNOT(0, 1)]), initialization_mode="qubit")
    assert rows(document) == [
        r'       lstick($q[0]$, label: "Qubits"), ctrl(1), 1, [\ ],',
        r"       lstick($q[1]$), targ(), 1,",
    ]


def test_rows_of_every_domain():
    circuit = Circuit(
        [
            classical.DefinitionBit("ro", 1),
            classical.MeasureQubit(0, "ro", 0),
            bosonic.Squeezing(0, 0.5, 0.0),
        ],
    )
    assert rows(circuit_to_typst_str(circuit)) == [
        r'       lstick($|0>$, label: "Qubits"), meter(target: 2), 1, 1, [\ ],',
        r'       lstick($|0>$, label: "Bosons"), 1, gate($ "Squeezing"(0.5,0) $), 1, [\ ],',
        r'       lstick($ "ro : " $), setwire(2), ctrl(0, label: (content: $ 0 $, pos: bottom)), 1, 1,',
    ]


def test_slices_and_groups_are_serialized():
    circuit = Circuit(
        [
            single_qubit.Hadamard(0),
            pragma.PragmaGlobalPhase(0.5),
            pragma.PragmaLoop(2, Circuit([single_qubit.PauliX(0)])),
        ],
    )
    (row,) = rows(circuit_to_typst_str(circuit))
    assert 'slice(label: $ "GlobalPhase"\\ p=0.5 $)' in row
    assert 'gategroup(1, 1, label: "Loop: 2 times", stroke: (dash: "dotted"))' in row
    assert row.endswith("$ X $, 1,")


def test_hidden_pragmas_are_not_serialized():
    circuit = Circuit([single_qubit.Hadamard(0), pragma.PragmaGlobalPhase(0.5)])
    assert "slice" not in circuit_to_typst_str(circuit, render_pragmas="none")


def test_unresolved_layout_cannot_be_serialized():
    layout = Layout(qubits=[Track(0, [Meter(ClassicalOffset(0, 0))])], bosons=[], classical=[])
    with pytest.raises(RuntimeError, match=r"Unresolved reference"):
        layout_to_typst(layout)


def test_serialization_is_deterministic():
    circuit = Circuit([single_qubit.Hadamard(0), two_qubit.CNOT(0, 3), pragma.PragmaRepeatGate(2)])
    assert layout_to_typst(circuit_to_layout(circuit)) == circuit_to_typst_str(circuit)
