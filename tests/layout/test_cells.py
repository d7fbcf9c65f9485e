"""Test cells and deferred references."""

import pytest

from qlayout.layout.cells import (
    BosonOffset,
    ClassicalControl,
    ClassicalOffset,
    Control,
    Filler,
    GateBox,
    GateGroup,
    Glyph,
    HybridGateBox,
    Meter,
    MultiGateBox,
    RowLabel,
    SetWire,
    Slice,
    Swap,
    Target,
    TargetX,
)


@pytest.mark.parametrize(
    ("cell", "expected"),
    [
        (Filler(), "1"),
        (Glyph("H"), "$ H $"),
        (GateBox('"Rx"(pi/2)'), 'gate($ "Rx"(pi/2) $)'),
        (GateBox('"p1"(0.5)', label="PhaseShiftState1"), 'gate($ "p1"(0.5) $, label: "PhaseShiftState1")'),
        (GateBox('"Reset"', fill="gray"), 'gate($ "Reset" $, fill: gray)'),
        (
            MultiGateBox('"XY"(1)', 3, 5, ((0, "x"), (2, "x"))),
            'mqgate($ "XY"(1) $, n: 3, width: 5em, inputs: ((qubit: 0, label: "x"), (qubit: 2, label: "x")))',
        ),
        (MultiGateBox('"Sleep"(1)', 1, 7, fill="gray"), 'mqgate($ "Sleep"(1) $, n: 1, width: 7em, fill: gray)'),
        (HybridGateBox("0.5 * X", 3, extent="1.4em"), "mqgate($ 0.5 * X $, extent: 1.4em, target: 3)"),
        (Control(2), "ctrl(2)"),
        (Target(), "targ()"),
        (TargetX(), "targX()"),
        (Swap(1), "swap(1)"),
        (Swap(2, '"ISwap"'), 'swap(2, label: "ISwap")'),
        (Meter(), "meter()"),
        (Meter(4), "meter(target: 4)"),
        (ClassicalControl("0"), "ctrl(0, label: (content: $ 0 $, pos: bottom))"),
        (
            GateGroup(2, 3, "Loop: 2 times"),
            'gategroup(2, 3, label: "Loop: 2 times", stroke: (dash: "dotted"))',
        ),
        (Slice('"GlobalPhase"\\ p=pi'), 'slice(label: $ "GlobalPhase"\\ p=pi $)'),
        (RowLabel("ro"), 'lstick($ "ro : " $)'),
        (SetWire(2), "setwire(2)"),
    ],
)
def test_to_typst(cell, expected):
    assert cell.to_typst() == expected


def test_zero_width_cells():
    assert GateGroup(1, None, "g").zero_width
    assert Slice("x").zero_width
    assert RowLabel("ro").zero_width
    assert SetWire().zero_width
    assert not Filler().zero_width
    assert not Meter().zero_width


def test_reference_resolution():
    assert BosonOffset(mode=1, qubit=0).resolve(n_qubits=3, n_bosons=2) == 4
    assert ClassicalOffset(register=0, qubit=2).resolve(n_qubits=3, n_bosons=2) == 3

    meter = Meter(ClassicalOffset(1, 0))
    assert not meter.is_resolved()
    resolved = meter.resolve(2, 1)
    assert resolved == Meter(4)
    assert resolved.is_resolved()

    control = Control(BosonOffset(0, 1))
    assert control.resolve(2, 1) == Control(1)
    assert HybridGateBox("x", BosonOffset(0, 0)).resolve(1, 1).to_typst() == "mqgate($ x $, target: 1)"


def test_unresolved_reference_cannot_be_serialized():
    with pytest.raises(RuntimeError, match=r"Unresolved reference"):
        Meter(ClassicalOffset(0, 0)).to_typst()


def test_unpatched_group_cannot_be_serialized():
    group = GateGroup(2, None, "GetStateVector: sv")
    assert not group.is_resolved()
    with pytest.raises(RuntimeError, match=r"was never set"):
        group.to_typst()
