"""Test conversion of circuits into layouts."""

import pytest

from qlayout.circuit import Circuit
from qlayout.circuit.ops import bosonic, classical, multi_qubit, pragma, single_qubit, two_qubit
from qlayout.errors import OperationNotSupportedError
from qlayout.layout.cells import Control, Filler, GateBox, Glyph, HybridGateBox, Meter, Swap, Target
from qlayout.layout.convert import (
    InitializationMode,
    Layout,
    LayoutConfig,
    RenderPragmas,
    RenderPragmasMode,
    circuit_to_layout,
)
from qlayout.layout.tracks import Domain, Track


def cell_at(track: Track, column: int):
    return [cell for cell in track if not cell.zero_width][column]


def assert_lines_cross_fillers(layout: Layout) -> None:
    for row, track in enumerate(layout.qubits):
        column = 0
        for cell in track:
            if cell.zero_width:
                continue
            if isinstance(cell, Control | Swap) and isinstance(cell.offset, int):
                low, high = sorted((row, row + cell.offset))
                for crossed in range(low + 1, high):
                    assert isinstance(cell_at(layout.qubits[crossed], column), Filler | Control), (row, column, crossed)
            column += 1


def test_render_pragmas_from_str():
    assert RenderPragmas.from_str("all") == RenderPragmas.all()
    assert RenderPragmas.from_str("NONE") == RenderPragmas.none()

    selection = RenderPragmas.from_str("PragmaLoop, Hadamard,PragmaSleep")
    assert selection.mode is RenderPragmasMode.PARTIAL
    assert selection.names == frozenset({"PragmaLoop", "PragmaSleep"})


def test_render_pragmas_keep():
    selection = RenderPragmas.partial(["PragmaGlobalPhase"])
    assert selection.keep(single_qubit.Hadamard(0))
    assert selection.keep(pragma.PragmaGlobalPhase(0.5))
    assert not selection.keep(pragma.PragmaSleep([0], 1.0))

    assert RenderPragmas.none().keep(two_qubit.CNOT(0, 1))
    assert not RenderPragmas.none().keep(pragma.PragmaActiveReset(0))
    assert RenderPragmas.all().keep(pragma.PragmaActiveReset(0))


def test_initialization_mode_from_str():
    assert InitializationMode.from_str("STATE") is InitializationMode.STATE
    assert InitializationMode.from_str("qubit") is InitializationMode.QUBIT
    with pytest.raises(ValueError, match=r"Invalid initialization mode: 'ket'"):
        InitializationMode.from_str("ket")


def test_layout_config_parses_strings():
    config = LayoutConfig(render_pragmas="none", initialization_mode="Qubit")
    assert config.render_pragmas == RenderPragmas.none()
    assert config.initialization_mode is InitializationMode.QUBIT

    config = LayoutConfig()
    assert config.render_pragmas == RenderPragmas.all()
    assert config.initialization_mode is InitializationMode.STATE


def test_empty_circuit():
    layout = circuit_to_layout(Circuit())
    assert layout.is_empty()
    assert layout.n_columns == 0


def test_hidden_pragmas_are_skipped():
    circuit = Circuit([single_qubit.Hadamard(0), pragma.PragmaSleep([0, 1], 1.0), pragma.PragmaGlobalPhase(0.5)])

    layout = circuit_to_layout(circuit, render_pragmas="none")
    assert layout.n_qubits == 1
    assert layout.qubits[0].cells == [Glyph("H")]

    layout = circuit_to_layout(circuit, render_pragmas=RenderPragmas.partial(["PragmaSleep"]))
    assert layout.n_qubits == 2
    assert layout.n_columns == 2


def test_initialization_mode_is_kept():
    layout = circuit_to_layout(Circuit([single_qubit.Hadamard(0)]), initialization_mode="qubit")
    assert layout.initialization_mode is InitializationMode.QUBIT


def test_intermediate_track_filled_once():
    layout = circuit_to_layout(Circuit([two_qubit.CNOT(0, 2)]))
    assert layout.qubits[0].cells == [Control(2)]
    assert layout.qubits[1].cells == [Filler()]
    assert layout.qubits[2].cells == [Target()]


def test_gate_after_cnot_moves_past_the_line():
    layout = circuit_to_layout(Circuit([two_qubit.CNOT(0, 2), single_qubit.Hadamard(1)]))
    assert layout.qubits[1].cells == [Filler(), Glyph("H")]
    assert layout.qubits[0].cells == [Control(2), Filler()]
    assert layout.qubits[2].cells == [Target(), Filler()]


def test_hybrid_line_blocks_qubits_created_later():
    layout = circuit_to_layout(Circuit([bosonic.QuantumRabi(0, 0, 0.5), single_qubit.Hadamard(1)]))
    assert layout.qubits[1].cells == [Filler(), Glyph("H")]
    assert layout.bosons[0].cells == [GateBox("0.5*(b^(dagger)+b)"), Filler()]


def test_finalize_aligns_domains_and_resolves_references():
    circuit = Circuit(
        [
            classical.DefinitionBit("ro", 1),
            single_qubit.Hadamard(0),
            bosonic.QuantumRabi(1, 0, 0.5),
            classical.MeasureQubit(0, "ro", 0),
        ],
    )
    layout = circuit_to_layout(circuit)

    assert (layout.n_qubits, layout.n_bosons, layout.n_classical) == (2, 1, 1)
    assert layout.qubits[0].cells == [Glyph("H"), Meter(3)]
    assert layout.qubits[1].cells == [HybridGateBox("0.5 * X", 1, extent="1.4em"), Filler()]
    assert layout.n_columns == 2
    assert all(track.effective_length() == 2 for track in layout.all_tracks())
    assert all(cell.is_resolved() for track in layout.all_tracks() for cell in track)
    assert layout.tracks(Domain.CLASSICAL) is layout.classical


@pytest.mark.parametrize(
    "circuit",
    [
        Circuit(
            [
                single_qubit.Hadamard(1),
                two_qubit.CNOT(0, 3),
                single_qubit.Hadamard(1),
                single_qubit.Hadamard(2),
            ],
        ),
        Circuit(
            [
                multi_qubit.Toffoli(0, 2, 4),
                single_qubit.Hadamard(1),
                single_qubit.Hadamard(3),
                two_qubit.ControlledPauliZ(1, 3),
                two_qubit.SWAP(0, 4),
            ],
        ),
        Circuit(
            [
                pragma.PragmaLoop(2, Circuit([two_qubit.CNOT(0, 2), single_qubit.PauliX(1)])),
                two_qubit.CNOT(2, 0),
                single_qubit.Hadamard(1),
            ],
        ),
    ],
)
def test_lines_cross_only_fillers(circuit):
    layout = circuit_to_layout(circuit)
    lengths = {track.effective_length() for track in layout.all_tracks()}
    assert len(lengths) == 1
    assert_lines_cross_fillers(layout)


def test_unsupported_operation_aborts_conversion():
    circuit = Circuit([single_qubit.Hadamard(0), pragma.PragmaLoop(1, Circuit([classical.DefinitionFloat("f", 1)]))])
    layout = circuit_to_layout(circuit)
    assert layout.n_qubits == 1

    class Custom(single_qubit.Hadamard):
        pass

    with pytest.raises(OperationNotSupportedError):
        circuit_to_layout(Circuit([Custom(0)]))
