"""Placement of operations onto the tracks of a diagram.

Every operation kind maps to one placement rule. A rule appends cells to the tracks
it touches and keeps the tracks column-aligned through the :class:`TrackModel`:

- tracks an operation spans are flattened to a shared column first,
- tracks crossed by a vertical line are locked at the line's column so that later
  content on them is shifted past it,
- nested circuits are placed recursively inside a dotted bracket whose width is
  patched once the nested operations are known.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING, Any, TypeAlias

from qlayout.circuit.ops import bosonic, classical, multi_qubit, pragma, single_qubit, two_qubit
from qlayout.circuit.ops._base import AllQubits, Operation
from qlayout.circuit.program import Circuit
from qlayout.errors import NoQubitError, OperationNotSupportedError
from qlayout.formatting import format_complex, format_matrix, format_param
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
from qlayout.layout.tracks import Domain, TrackModel

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from qlayout.circuit.ops._base import InvolvedQubits, Param
    from qlayout.layout.cells import Cell

logger = logging.getLogger(__name__)

PlacementRule: TypeAlias = Callable[[TrackModel, Any], None]  # noqa: UP040

_RULES: dict[type[Operation], PlacementRule] = {}

QUBIT = Domain.QUBIT
BOSON = Domain.BOSON
CLASSICAL = Domain.CLASSICAL

#: Operations accepted without drawing anything
SILENT_OPERATIONS: tuple[type[Operation], ...] = (
    classical.DefinitionFloat,
    classical.DefinitionComplex,
    classical.DefinitionUsize,
)

#: Fill color of pragma boxes
PRAGMA_FILL = "gray"

#: Stroke of slices overwriting the simulator state
SOLID_STROKE = '(paint: black, thickness: 1pt, dash: "solid")'

#: Stroke of the slice repeating the next gate
DASH_DOTTED_STROKE = '(paint: black, thickness: 1pt, dash: "densely-dash-dotted")'


def _rule(*kinds: type[Operation]) -> Callable[[PlacementRule], PlacementRule]:
    def register(func: PlacementRule) -> PlacementRule:
        for kind in kinds:
            _RULES[kind] = func
        return func

    return register


def supported_operations() -> frozenset[type[Operation]]:
    """Get the operation classes with a placement rule.

    Returns:
        frozenset[type[Operation]]: Operation classes drawn by :func:`add_gate`.
    """
    return frozenset(_RULES)


def _call(name: str, params: Sequence[Param] = ()) -> str:
    if not params:
        return f'"{name}"'
    return f'"{name}"({",".join(format_param(param) for param in params)})'


def _used_qubits(model: TrackModel, involved: InvolvedQubits) -> list[int]:
    if isinstance(involved, AllQubits):
        return list(range(model.n_tracks(QUBIT)))
    return sorted(involved)


def add_gate(model: TrackModel, operation: Operation) -> None:
    """Place one operation onto the tracks.

    The qubits involved in the operation are created if needed and brought to a shared,
    unlocked column before the operation's placement rule runs.

    Args:
        model (TrackModel): Tracks under construction.
        operation (Operation): Operation to place.

    Raises:
        OperationNotSupportedError: If the operation has no placement rule.
        NoQubitError: If the operation requires qubits but has none.

    Examples:
        >>> from qlayout.circuit.ops import single_qubit
        >>> from qlayout.layout.tracks import Domain, TrackModel
        >>> model = TrackModel()
        >>> add_gate(model, single_qubit.Hadamard(0))
        >>> [cell.to_typst() for cell in model.track(Domain.QUBIT, 0)]
        ['$ H $']
    """
    used = _used_qubits(model, operation.involved_qubits())
    model.ensure_tracks(QUBIT, used)
    model.level((QUBIT, used))

    rule = _RULES.get(type(operation))
    if rule is None:
        if isinstance(operation, SILENT_OPERATIONS):
            logger.debug("Skipped %s.", operation.name())
            return
        msg = f"Operation not supported by the layout engine: {operation.name()}."
        logger.error(msg)
        raise OperationNotSupportedError(operation.name())
    rule(model, operation)


def _require_qubits(operation: Operation, qubits: Sequence[int]) -> None:
    if not qubits:
        msg = f"Operations with no qubit in the input: {operation}"
        logger.error(msg)
        raise NoQubitError(str(operation))


# Single-qubit gates

#: Gates drawn as a bare symbol
GLYPHS: dict[type[Operation], str] = {
    single_qubit.Hadamard: "H",
    single_qubit.PauliX: "X",
    single_qubit.PauliY: "Y",
    single_qubit.PauliZ: "Z",
    single_qubit.SqrtPauliX: "sqrt(X)",
    single_qubit.InvSqrtPauliX: "sqrt(X)^(dagger)",
    single_qubit.SGate: "S",
    single_qubit.TGate: "T",
    single_qubit.Identity: "I",
}

#: Parametrized single-qubit gates as pairs of displayed name and side label
SINGLE_QUBIT_BOXES: dict[type[Operation], tuple[str, str | None]] = {
    single_qubit.RotateX: ("Rx", None),
    single_qubit.RotateY: ("Ry", None),
    single_qubit.RotateZ: ("Rz", None),
    single_qubit.RotateXY: ("Rxy", None),
    single_qubit.PhaseShiftState0: ("p0", "PhaseShiftState0"),
    single_qubit.PhaseShiftState1: ("p1", "PhaseShiftState1"),
    single_qubit.RotateAroundSphericalAxis: ("Rsph", "RotateAroundSphericalAxis"),
    single_qubit.GPi: ("GPi", None),
    single_qubit.GPi2: ("GPi2", None),
}

#: Single-qubit noise pragmas and their displayed names
NOISE_BOXES: dict[type[Operation], str] = {
    pragma.PragmaActiveReset: "Reset",
    pragma.PragmaDamping: "Damping",
    pragma.PragmaDepolarising: "Depolarising",
    pragma.PragmaDephasing: "Dephasing",
    pragma.PragmaRandomNoise: "RandomNoise",
}


@_rule(*GLYPHS)
def _place_glyph(model: TrackModel, op: single_qubit.SingleQubitOperation) -> None:
    model.track(QUBIT, op.qubit).push(Glyph(GLYPHS[type(op)]))


@_rule(*SINGLE_QUBIT_BOXES)
def _place_single_qubit_box(model: TrackModel, op: single_qubit.SingleQubitOperation) -> None:
    name, label = SINGLE_QUBIT_BOXES[type(op)]
    model.track(QUBIT, op.qubit).push(GateBox(_call(name, op.parameters()), label=label))


@_rule(single_qubit.SingleQubitGate)
def _place_single_qubit_gate(model: TrackModel, op: single_qubit.SingleQubitGate) -> None:
    body = (
        f"U({format_param(op.alpha_r)}+{format_param(op.alpha_i)}i,"
        f"{format_param(op.beta_r)}+{format_param(op.beta_i)}i,"
        f"{format_param(op.global_phase)})"
    )
    model.track(QUBIT, op.qubit).push(GateBox(body, label="SingleQubitGate"))


@_rule(*NOISE_BOXES)
def _place_noise(model: TrackModel, op: single_qubit.SingleQubitOperation) -> None:
    body = _call(NOISE_BOXES[type(op)], op.parameters())
    model.track(QUBIT, op.qubit).push(GateBox(body, fill=PRAGMA_FILL))


@_rule(pragma.PragmaGeneralNoise)
def _place_general_noise(model: TrackModel, op: pragma.PragmaGeneralNoise) -> None:
    body = f'"GeneralNoise"({format_param(op.gate_time)},mat({format_matrix(op.rates)}))'
    model.track(QUBIT, op.qubit).push(GateBox(body, fill=PRAGMA_FILL))


# Controlled gates


def prepare_for_control(model: TrackModel, qubits: Sequence[int]) -> None:
    """Align the operands of a controlled gate and lock the tracks its line crosses.

    Tracks strictly between the lowest and the highest operand that are not operands
    themselves are drained and caught up with the lowest operand. Afterwards the operands
    share one column, and every crossed track is locked at that column.

    Args:
        model (TrackModel): Tracks under construction.
        qubits (Sequence[int]): Operand qubits.
    """
    low, high = min(qubits), max(qubits)
    model.ensure_tracks(QUBIT, range(low, high + 1))
    model.level((QUBIT, qubits))
    crossed = [qubit for qubit in range(low + 1, high) if qubit not in qubits]
    for qubit in crossed:
        model.catch_up(QUBIT, qubit, QUBIT, low)
    model.level((QUBIT, qubits))

    column = model.effective_length(QUBIT, low)
    for qubit in crossed:
        model.lock(QUBIT, qubit, column)


#: Target cells of controlled gates, by displayed name, None for a NOT target
CONTROLLED_TARGETS: dict[type[Operation], str | None] = {
    two_qubit.CNOT: None,
    two_qubit.ControlledPauliY: "Y",
    two_qubit.ControlledPauliZ: "Z",
    two_qubit.ControlledPhaseShift: "PhaseShift",
    two_qubit.ControlledRotateX: "Rx",
    two_qubit.ControlledRotateXY: "Rxy",
    two_qubit.EchoCrossResonance: "EchoCrossResonance",
}


@_rule(*CONTROLLED_TARGETS)
def _place_controlled(model: TrackModel, op: two_qubit.TwoQubitOperation) -> None:
    prepare_for_control(model, [op.control, op.target])
    name = CONTROLLED_TARGETS[type(op)]
    target: Cell = Target() if name is None else GateBox(_call(name, op.parameters()))
    model.track(QUBIT, op.control).push(Control(op.target - op.control))
    model.track(QUBIT, op.target).push(target)


@_rule(multi_qubit.Toffoli, multi_qubit.ControlledControlledPauliZ, multi_qubit.ControlledControlledPhaseShift)
def _place_doubly_controlled(model: TrackModel, op: multi_qubit.ThreeQubitOperation) -> None:
    prepare_for_control(model, [op.control_0, op.control_1, op.target])
    target: Cell
    if isinstance(op, multi_qubit.Toffoli):
        target = Target()
    elif isinstance(op, multi_qubit.ControlledControlledPauliZ):
        target = GateBox("Z")
    else:
        target = GateBox(_call("PhaseShift", op.parameters()))
    model.track(QUBIT, op.control_0).push(Control(op.target - op.control_0))
    model.track(QUBIT, op.control_1).push(Control(op.target - op.control_1))
    model.track(QUBIT, op.target).push(target)


# Symmetric gates

#: Swap labels, as a quoted string or a math expression
SWAP_LABELS: dict[type[Operation], str | None] = {
    two_qubit.SWAP: None,
    two_qubit.ISwap: '"ISwap"',
    two_qubit.FSwap: '"FSwap"',
    two_qubit.SqrtISwap: '$ sqrt("ISwap") $',
    two_qubit.InvSqrtISwap: '$ sqrt("ISwap")^(dagger) $',
}


def _prepare_span(model: TrackModel, domain: Domain, operands: Sequence[int]) -> list[int]:
    span = list(range(min(operands), max(operands) + 1))
    model.ensure_tracks(domain, span)
    model.level((domain, span))
    return span


@_rule(*SWAP_LABELS)
def _place_swap(model: TrackModel, op: two_qubit.TwoQubitOperation) -> None:
    span = _prepare_span(model, QUBIT, [op.control, op.target])
    low, high = span[0], span[-1]
    model.track(QUBIT, low).push(Swap(high - low, SWAP_LABELS[type(op)]))
    for qubit in span[1:-1]:
        model.track(QUBIT, qubit).push(Filler())
    model.track(QUBIT, high).push(TargetX())


def _place_box(model: TrackModel, domain: Domain, operands: Sequence[int], make_cell: Callable[[int, int], Cell]) -> None:
    span = _prepare_span(model, domain, operands)
    model.track(domain, span[0]).push(make_cell(span[0], len(span)))
    for index in span[1:]:
        model.track(domain, index).push(Filler())


_X_INPUTS = ("x", "x")
_CONTROL_INPUTS = ("ctrl", "targ")

#: Two-qubit boxes as triples of displayed name, width in em and input labels
TWO_QUBIT_BOXES: dict[type[Operation], tuple[str, int, tuple[str, str]]] = {
    two_qubit.XY: ("XY", 5, _X_INPUTS),
    two_qubit.MolmerSorensenXX: ("MolmerSorensenXX", 9, _CONTROL_INPUTS),
    two_qubit.VariableMSXX: ("VariableMSXX", 10, _X_INPUTS),
    two_qubit.GivensRotation: ("GivensRotation", 11, _CONTROL_INPUTS),
    two_qubit.GivensRotationLittleEndian: ("GivensRotationLE", 12, _CONTROL_INPUTS),
    two_qubit.Qsim: ("Qsim", 11, _X_INPUTS),
    two_qubit.Fsim: ("Fsim", 11, _X_INPUTS),
    two_qubit.SpinInteraction: ("SpinInteraction", 12, _X_INPUTS),
    two_qubit.Bogoliubov: ("Bogoliubov", 9, _X_INPUTS),
    two_qubit.PMInteraction: ("PMInteraction", 9, _X_INPUTS),
    two_qubit.ComplexPMInteraction: ("ComplexPMInteraction", 12, _X_INPUTS),
    two_qubit.PhaseShiftedControlledZ: ("PhaseShiftedControlledZ", 15, _CONTROL_INPUTS),
    two_qubit.PhaseShiftedControlledPhase: ("PhaseShiftedControlledPhase", 14, _CONTROL_INPUTS),
}

#: Two-qubit boxes whose two parameters are the parts of one complex value
COMPLEX_PARAMETER_BOXES: frozenset[type[Operation]] = frozenset({two_qubit.Bogoliubov, two_qubit.ComplexPMInteraction})


@_rule(*TWO_QUBIT_BOXES)
def _place_two_qubit_box(model: TrackModel, op: two_qubit.TwoQubitOperation) -> None:
    name, width, (control_label, target_label) = TWO_QUBIT_BOXES[type(op)]
    if type(op) in COMPLEX_PARAMETER_BOXES:
        real, imag = op.parameters()
        body = f'"{name}"({format_param(real)}+{format_param(imag)}i)'
    else:
        body = _call(name, op.parameters())

    def make_cell(low: int, n_tracks: int) -> Cell:
        inputs = ((op.control - low, control_label), (op.target - low, target_label))
        return MultiGateBox(body, n_tracks, width, inputs)

    _place_box(model, QUBIT, [op.control, op.target], make_cell)


def _reordering(op: pragma.PragmaStartDecompositionBlock) -> list[Param]:
    if not op.reordering_dictionary:
        return []
    return [",".join(f"{key}:{value}" for key, value in sorted(op.reordering_dictionary.items()))]


#: Multi-qubit boxes as triples of displayed name, width in em and fill color
MULTI_QUBIT_BOXES: dict[type[Operation], tuple[str, int, str | None]] = {
    multi_qubit.MultiQubitMS: ("MultiQubitMS", 11, None),
    multi_qubit.MultiQubitZZ: ("MultiQubitZZ", 11, None),
    pragma.PragmaOverrotation: ("Overrotation", 10, PRAGMA_FILL),
    pragma.PragmaStopParallelBlock: ("StopParallelBlock", 13, PRAGMA_FILL),
    pragma.PragmaStartDecompositionBlock: ("StartDecompositionBlock", 14, PRAGMA_FILL),
    pragma.PragmaStopDecompositionBlock: ("StopDecompositionBlock", 13, PRAGMA_FILL),
    pragma.PragmaSleep: ("Sleep", 7, PRAGMA_FILL),
}


@_rule(*MULTI_QUBIT_BOXES)
def _place_multi_qubit_box(model: TrackModel, op: multi_qubit.MultiQubitOperation) -> None:
    _require_qubits(op, op.qubits)
    name, width, fill = MULTI_QUBIT_BOXES[type(op)]
    if isinstance(op, pragma.PragmaOverrotation):
        body = f'{_call(name, [op.amplitude, op.variance])}\\ "{op.gate_hqslang}"'
    elif isinstance(op, pragma.PragmaStartDecompositionBlock):
        reordering = _reordering(op)
        body = f'"{name}"\\ "{reordering[0]}"' if reordering else _call(name)
    else:
        body = _call(name, op.parameters())

    def make_cell(low: int, n_tracks: int) -> Cell:
        inputs = tuple((qubit - low, "x") for qubit in op.qubits)
        return MultiGateBox(body, n_tracks, width, inputs, fill=fill)

    _place_box(model, QUBIT, op.qubits, make_cell)


# Bosonic gates


@_rule(bosonic.Squeezing, bosonic.PhaseShift, bosonic.PhaseDisplacement, bosonic.PhotonDetection)
def _place_mode_gate(model: TrackModel, op: bosonic.SingleModeOperation) -> None:
    model.ensure_tracks(BOSON, [op.mode])
    model.drain(BOSON, op.mode)
    cell: Cell = Meter() if isinstance(op, bosonic.PhotonDetection) else GateBox(_call(op.name(), op.parameters()))
    model.track(BOSON, op.mode).push(cell)


@_rule(bosonic.BeamSplitter)
def _place_beam_splitter(model: TrackModel, op: bosonic.BeamSplitter) -> None:
    body = _call("BeamSplitter", op.parameters())

    def make_cell(low: int, n_tracks: int) -> Cell:
        inputs = ((op.mode_0 - low, "x"), (op.mode_1 - low, "x"))
        return MultiGateBox(body, n_tracks, 9, inputs)

    _place_box(model, BOSON, [op.mode_0, op.mode_1], make_cell)


def prepare_for_hybrid(model: TrackModel, qubit: int, mode: int) -> int:
    """Align a qubit with a bosonic mode and lock the tracks their line crosses.

    The line runs down from the qubit to the mode, crossing every qubit below it and
    every mode above the target mode.

    Args:
        model (TrackModel): Tracks under construction.
        qubit (int): Qubit index.
        mode (int): Bosonic mode index.

    Returns:
        int: Shared column of the qubit and the mode.
    """
    model.ensure_tracks(BOSON, [mode])
    model.level((QUBIT, [qubit]), (BOSON, [mode]))
    for crossed in range(qubit + 1, model.n_tracks(QUBIT)):
        model.catch_up(QUBIT, crossed, QUBIT, qubit)
    for crossed in range(mode):
        model.catch_up(BOSON, crossed, BOSON, mode)
    model.level((QUBIT, [qubit]), (BOSON, [mode]))

    column = model.effective_length(QUBIT, qubit)
    model.lock_from(QUBIT, qubit + 1, column)
    for crossed in range(mode):
        model.lock(BOSON, crossed, column)
    return column


def _hybrid_cells(op: bosonic.QubitModeOperation) -> tuple[Cell, Cell]:
    target = BosonOffset(op.mode, op.qubit)
    if isinstance(op, bosonic.CZQubitResonator):
        return Control(target), GateBox("Z")
    if isinstance(op, bosonic.SingleExcitationStore):
        return (
            HybridGateBox('alpha"|0>" + beta"|1>" -> "|0>"', target),
            GateBox('"|0>" -> alpha"|0>" + beta"|1>"'),
        )
    if isinstance(op, bosonic.SingleExcitationLoad):
        return (
            HybridGateBox('"|0>" -> alpha"|0>" + beta"|1>"', target),
            GateBox('alpha"|0>" + beta"|1>" -> "|0>"'),
        )

    theta = format_param(op.theta)  # type: ignore[attr-defined]
    if isinstance(op, bosonic.QuantumRabi):
        qubit_body = f"{theta} * X"
    elif isinstance(op, bosonic.LongitudinalCoupling):
        qubit_body = f"{theta} * Z"
    else:
        qubit_body = f"{theta} * (sigma^-+sigma^+)"
    return HybridGateBox(qubit_body, target, extent="1.4em"), GateBox(f"{theta}*(b^(dagger)+b)")


@_rule(
    bosonic.QuantumRabi,
    bosonic.LongitudinalCoupling,
    bosonic.JaynesCummings,
    bosonic.SingleExcitationStore,
    bosonic.SingleExcitationLoad,
    bosonic.CZQubitResonator,
)
def _place_hybrid(model: TrackModel, op: bosonic.QubitModeOperation) -> None:
    prepare_for_hybrid(model, op.qubit, op.mode)
    qubit_cell, mode_cell = _hybrid_cells(op)
    model.track(QUBIT, op.qubit).push(qubit_cell)
    model.track(BOSON, op.mode).push(mode_cell)


# Classical registers and measurement


@_rule(classical.DefinitionBit)
def _place_definition_bit(model: TrackModel, op: classical.DefinitionBit) -> None:
    track = model.add_track(CLASSICAL, op.register)
    track.push(RowLabel(op.register))
    track.push(SetWire(2))


@_rule(classical.InputBit)
def _place_input_bit(model: TrackModel, op: classical.InputBit) -> None:
    track = model.find_track(CLASSICAL, op.register)
    if track is None:
        logger.warning("InputBit targets the undefined register '%s', nothing is drawn.", op.register)
        return
    model.drain(CLASSICAL, track.index)
    track.push(GateBox(f'"InputBit:"\\ {op.index}=>#{str(op.value).lower()}'))


def prepare_for_measurement(model: TrackModel, qubit: int, register: int) -> int:
    """Align a qubit with a classical track and lock the tracks the measurement wire crosses.

    The wire runs down from the qubit to the classical track, crossing every qubit below
    it, every bosonic mode and every classical track above the target register.

    Args:
        model (TrackModel): Tracks under construction.
        qubit (int): Measured qubit.
        register (int): Index of the classical track.

    Returns:
        int: Shared column of the qubit and the classical track.
    """
    model.level((QUBIT, [qubit]), (CLASSICAL, [register]))
    for crossed in range(qubit + 1, model.n_tracks(QUBIT)):
        model.catch_up(QUBIT, crossed, QUBIT, qubit)
    for crossed in range(model.n_tracks(BOSON)):
        model.catch_up(BOSON, crossed, QUBIT, qubit)
    for crossed in range(register):
        model.catch_up(CLASSICAL, crossed, CLASSICAL, register)
    model.level((QUBIT, [qubit]), (CLASSICAL, [register]))

    column = model.effective_length(QUBIT, qubit)
    model.lock_from(QUBIT, qubit + 1, column)
    model.lock_from(BOSON, 0, column)
    for crossed in range(register):
        model.lock(CLASSICAL, crossed, column)
    return column


@_rule(classical.MeasureQubit)
def _place_measurement(model: TrackModel, op: classical.MeasureQubit) -> None:
    register = model.find_track(CLASSICAL, op.readout)
    if register is None:
        model.track(QUBIT, op.qubit).push(Meter())
        return
    prepare_for_measurement(model, op.qubit, register.index)
    model.track(QUBIT, op.qubit).push(Meter(ClassicalOffset(register.index, op.qubit)))
    register.push(ClassicalControl(str(op.readout_index)))


# Slices


def _marker_last_line(marker: Slice | GateGroup) -> str:
    if isinstance(marker, GateGroup) and marker.width is None:
        # Enclosing bracket whose width is not patched yet
        marker = replace(marker, width=0)
    return marker.to_typst().split("\\n")[-1]


def prepare_for_slice(model: TrackModel) -> None:
    """Make room on the first qubit track before a slice or a bracket.

    When the first qubit track is the longest and already holds a slice or a bracket,
    fillers are added so that the labels of consecutive markers do not overlap. The
    number of fillers grows with the length of the last line of the last marker's markup
    and shrinks with the number of cells following the first occurrence of that marker.
    An empty first track receives one filler, and the other qubits are locked at column 0.

    Args:
        model (TrackModel): Tracks under construction.
    """
    model.ensure_tracks(QUBIT, [0])
    first = model.track(QUBIT, 0)
    markers = [cell for cell in first.cells if isinstance(cell, Slice | GateGroup)]
    if markers and first.effective_length() == model.max_effective_length(QUBIT):
        text = _marker_last_line(markers[-1])
        divider = len(first.cells) - first.cells.index(markers[-1])
        for _ in range(len(text) // (10 * divider) + 1):
            first.push(Filler())
    if not first.cells:
        first.push(Filler())
        model.lock_from(QUBIT, 1, 0)


def _place_slice(model: TrackModel, label: str, stroke: str | None = None) -> None:
    prepare_for_slice(model)
    model.flatten(QUBIT, range(model.n_tracks(QUBIT)))
    model.track(QUBIT, 0).push(Slice(label, stroke))


@_rule(pragma.PragmaSetNumberOfMeasurements)
def _place_set_number_of_measurements(model: TrackModel, op: pragma.PragmaSetNumberOfMeasurements) -> None:
    _place_slice(model, f'"Measurements\\nn={op.number_measurements}"')


@_rule(pragma.PragmaSetStateVector)
def _place_set_state_vector(model: TrackModel, op: pragma.PragmaSetStateVector) -> None:
    amplitudes = ",".join(format_complex(amplitude) for amplitude in op.statevector)
    _place_slice(model, f'"SetStatevector"\\ [{amplitudes}]', SOLID_STROKE)


@_rule(pragma.PragmaSetDensityMatrix)
def _place_set_density_matrix(model: TrackModel, op: pragma.PragmaSetDensityMatrix) -> None:
    _place_slice(model, f'"SetDensityMatrix"\\ mat({format_matrix(op.density_matrix)})', SOLID_STROKE)


@_rule(pragma.PragmaRepeatGate)
def _place_repeat_gate(model: TrackModel, op: pragma.PragmaRepeatGate) -> None:
    _place_slice(model, f'"RepeatNextGate\\n{op.repetition_coefficient} times"', DASH_DOTTED_STROKE)


@_rule(pragma.PragmaBoostNoise)
def _place_boost_noise(model: TrackModel, op: pragma.PragmaBoostNoise) -> None:
    _place_slice(model, f'"BoostNoise"\\ n={format_param(op.noise_coefficient)}')


@_rule(pragma.PragmaGlobalPhase)
def _place_global_phase(model: TrackModel, op: pragma.PragmaGlobalPhase) -> None:
    _place_slice(model, f'"GlobalPhase"\\ p={format_param(op.phase)}')


@_rule(pragma.PragmaChangeDevice)
def _place_change_device(model: TrackModel, op: pragma.PragmaChangeDevice) -> None:
    _place_slice(model, f'"ChangeDevice"\\ \\"{op.wrapped_hqslang}\\"')


@_rule(classical.InputSymbolic)
def _place_input_symbolic(model: TrackModel, op: classical.InputSymbolic) -> None:
    _place_slice(model, f'"Replace Symbol:"\\ {format_param(op.symbol)}=>{format_param(op.value)}')


# Brackets


def place_group(model: TrackModel, label: str, body: Iterable[Operation], qubits: Sequence[int]) -> None:
    """Place nested operations inside a dotted bracket.

    The bracket spans the qubits from the lowest to the highest of `qubits`. Its width is
    the largest number of columns any spanned track gained while the nested operations
    were placed.

    Args:
        model (TrackModel): Tracks under construction.
        label (str): Label of the bracket.
        body (Iterable[Operation]): Nested operations.
        qubits (Sequence[int]): Qubits the bracket must enclose.
    """
    span = _prepare_span(model, QUBIT, qubits)
    first = model.track(QUBIT, span[0])
    position = len(first.cells)
    first.push(GateGroup(len(span), None, label))
    before = [model.effective_length(QUBIT, qubit) for qubit in span]

    for op in body:
        add_gate(model, op)

    width = max(model.effective_length(QUBIT, qubit) - length for qubit, length in zip(span, before, strict=True))
    first.cells[position] = replace(first.cells[position], width=width)  # type: ignore[type-var]
    model.flatten(QUBIT, span)


def _loop_label(repetitions: Param) -> str:
    if isinstance(repetitions, str):
        return f"Loop: {format_param(repetitions)} times"
    return f"Loop: {math.floor(repetitions)} times"


@_rule(pragma.PragmaConditional, pragma.PragmaLoop)
def _place_conditional_or_loop(model: TrackModel, op: pragma.PragmaConditional | pragma.PragmaLoop) -> None:
    if op.circuit.is_empty():
        return
    prepare_for_slice(model)
    qubits = _used_qubits(model, op.involved_qubits()) or [0]
    if isinstance(op, pragma.PragmaConditional):
        label = f"Conditional: {op.condition_register}[{op.condition_index}]"
    else:
        label = _loop_label(op.repetitions)
    place_group(model, label, op.circuit, qubits)


@_rule(pragma.PragmaControlledCircuit)
def _place_controlled_circuit(model: TrackModel, op: pragma.PragmaControlledCircuit) -> None:
    if op.circuit.is_empty():
        return
    prepare_for_slice(model)
    qubits = _used_qubits(model, op.involved_qubits())
    place_group(model, f"ControlledCircuit by qubit: {op.controlling_qubit}", op.circuit, qubits)


@_rule(pragma.PragmaAnnotatedOp)
def _place_annotated(model: TrackModel, op: pragma.PragmaAnnotatedOp) -> None:
    prepare_for_slice(model)
    qubits = _used_qubits(model, op.involved_qubits())
    _require_qubits(op, qubits)
    place_group(model, op.annotation, [op.operation], qubits)


#: Labels of the brackets around state readouts
READOUT_LABELS: dict[type[Operation], str] = {
    pragma.PragmaGetStateVector: "GetStateVector",
    pragma.PragmaGetDensityMatrix: "GetDensityMatrix",
    pragma.PragmaGetOccupationProbability: "GetOccupationProbability",
    pragma.PragmaGetPauliProduct: "GetPauliProduct",
}

#: Gates measured by `PragmaGetPauliProduct`, by Pauli index
PAULI_GATES: dict[int, type[single_qubit.SingleQubitOperation]] = {
    0: single_qubit.Identity,
    1: single_qubit.PauliX,
    2: single_qubit.PauliY,
    3: single_qubit.PauliZ,
}


@_rule(*READOUT_LABELS)
def _place_readout(
    model: TrackModel,
    op: pragma.PragmaGetStateVector
    | pragma.PragmaGetDensityMatrix
    | pragma.PragmaGetOccupationProbability
    | pragma.PragmaGetPauliProduct,
) -> None:
    body = Circuit() if op.circuit is None else Circuit(op.circuit)
    if isinstance(op, pragma.PragmaGetPauliProduct):
        body += [PAULI_GATES[pauli](qubit) for qubit, pauli in sorted(op.qubit_paulis.items())]
    if op.circuit is not None and body.is_empty():
        return

    prepare_for_slice(model)
    if op.circuit is None:
        body = Circuit(single_qubit.Identity(qubit) for qubit in range(model.n_tracks(QUBIT)))
    qubits = _used_qubits(model, body.involved_qubits())
    _require_qubits(op, qubits)
    place_group(model, f"{READOUT_LABELS[type(op)]}: {op.readout}", body, qubits)


@_rule(pragma.PragmaRepeatedMeasurement)
def _place_repeated_measurement(model: TrackModel, op: pragma.PragmaRepeatedMeasurement) -> None:
    prepare_for_slice(model)
    mapping = op.qubit_mapping
    if mapping is None:
        mapping = {qubit: qubit for qubit in range(model.n_tracks(QUBIT))}
    _require_qubits(op, sorted(mapping))
    body = [classical.MeasureQubit(qubit, op.readout, index) for qubit, index in sorted(mapping.items())]
    place_group(model, f"Repeat {op.number_measurements} times", body, sorted(mapping))
