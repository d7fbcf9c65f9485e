"""Cells of a track and deferred cross-domain references."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import ClassVar, TypeAlias


@dataclass(frozen=True)
class BosonOffset:
    """Offset from a qubit track to a bosonic track, known once every qubit track exists."""

    mode: int
    "Index of the bosonic mode."
    qubit: int
    "Index of the qubit holding the cell."

    def resolve(self, n_qubits: int, n_bosons: int) -> int:  # noqa: ARG002
        """Compute the row offset.

        Args:
            n_qubits (int): Final number of qubit tracks.
            n_bosons (int): Final number of bosonic tracks.

        Returns:
            int: Offset in rows from the qubit to the bosonic track.
        """
        return n_qubits + self.mode - self.qubit


@dataclass(frozen=True)
class ClassicalOffset:
    """Offset from a qubit track to a classical track, known once every quantum track exists."""

    register: int
    "Index of the classical track."
    qubit: int
    "Index of the qubit holding the cell."

    def resolve(self, n_qubits: int, n_bosons: int) -> int:
        """Compute the row offset.

        Args:
            n_qubits (int): Final number of qubit tracks.
            n_bosons (int): Final number of bosonic tracks.

        Returns:
            int: Offset in rows from the qubit to the classical track.
        """
        return n_qubits + n_bosons + self.register - self.qubit


Reference: TypeAlias = BosonOffset | ClassicalOffset  # noqa: UP040
Offset: TypeAlias = int | Reference  # noqa: UP040


def _resolve(offset: Offset | None, n_qubits: int, n_bosons: int) -> int | None:
    if isinstance(offset, BosonOffset | ClassicalOffset):
        return offset.resolve(n_qubits, n_bosons)
    return offset


def _markup(offset: Offset | None) -> str:
    if isinstance(offset, BosonOffset | ClassicalOffset):
        msg = f"Unresolved reference {offset} cannot be serialized."
        raise RuntimeError(msg)
    return str(offset)


class Cell(ABC):
    """One entry of a track.

    Content cells occupy a column. Zero-width cells annotate the column that follows them.
    """

    #: Whether the cell consumes no column
    zero_width: ClassVar[bool] = False

    @abstractmethod
    def to_typst(self) -> str:
        """Serialize the cell into quill markup.

        Returns:
            str: Markup of the cell.
        """
        raise NotImplementedError

    @abstractmethod
    def caption(self) -> str:
        """Get a short plain-text caption of the cell.

        Returns:
            str: Caption, empty for cells without text.
        """
        raise NotImplementedError

    def resolve(self, n_qubits: int, n_bosons: int) -> Cell:  # noqa: ARG002
        """Replace deferred references by row offsets.

        Args:
            n_qubits (int): Final number of qubit tracks.
            n_bosons (int): Final number of bosonic tracks.

        Returns:
            Cell: Cell without deferred references.
        """
        return self

    def is_resolved(self) -> bool:
        """Check that the cell holds no deferred reference.

        Returns:
            bool: True if the cell can be serialized.
        """
        return True


def _strip_math(body: str) -> str:
    return body.replace('"', "").replace("\\ ", " ")


@dataclass(frozen=True)
class Filler(Cell):
    """Empty wire segment."""

    def to_typst(self) -> str:  # noqa: D102
        return "1"

    def caption(self) -> str:  # noqa: D102
        return ""


@dataclass(frozen=True)
class Glyph(Cell):
    """Gate drawn as a bare symbol, e.g. `H`."""

    symbol: str

    def to_typst(self) -> str:  # noqa: D102
        return f"$ {self.symbol} $"

    def caption(self) -> str:  # noqa: D102
        return _strip_math(self.symbol)


@dataclass(frozen=True)
class GateBox(Cell):
    """Single-track gate box."""

    body: str
    "Math markup of the box content."
    label: str | None = None
    "Label drawn next to the box."
    fill: str | None = None
    "Fill color."

    def to_typst(self) -> str:  # noqa: D102
        ret = f"gate($ {self.body} $"
        if self.label is not None:
            ret += f', label: "{self.label}"'
        if self.fill is not None:
            ret += f", fill: {self.fill}"
        return ret + ")"

    def caption(self) -> str:  # noqa: D102
        return _strip_math(self.body)


@dataclass(frozen=True)
class MultiGateBox(Cell):
    """Box spanning several adjacent tracks of the same domain."""

    body: str
    "Math markup of the box content."
    n_tracks: int
    "Number of spanned tracks."
    width: int
    "Width of the box in em."
    inputs: tuple[tuple[int, str], ...] = ()
    "Input labels as pairs of relative track offset and label."
    fill: str | None = None
    "Fill color."

    def to_typst(self) -> str:  # noqa: D102
        ret = f"mqgate($ {self.body} $, n: {self.n_tracks}, width: {self.width}em"
        if self.fill is not None:
            ret += f", fill: {self.fill}"
        if self.inputs:
            inputs = ", ".join(f'(qubit: {offset}, label: "{label}")' for offset, label in self.inputs)
            ret += f", inputs: ({inputs})"
        return ret + ")"

    def caption(self) -> str:  # noqa: D102
        return _strip_math(self.body)


@dataclass(frozen=True)
class HybridGateBox(Cell):
    """Qubit gate box connected to a bosonic track."""

    body: str
    "Math markup of the box content."
    target: Offset
    "Row offset of the connected bosonic track."
    extent: str | None = None
    "Horizontal extent of the box."

    def to_typst(self) -> str:  # noqa: D102
        ret = f"mqgate($ {self.body} $"
        if self.extent is not None:
            ret += f", extent: {self.extent}"
        return ret + f", target: {_markup(self.target)})"

    def caption(self) -> str:  # noqa: D102
        return _strip_math(self.body)

    def resolve(self, n_qubits: int, n_bosons: int) -> Cell:  # noqa: D102
        return replace(self, target=_resolve(self.target, n_qubits, n_bosons))

    def is_resolved(self) -> bool:  # noqa: D102
        return isinstance(self.target, int)


@dataclass(frozen=True)
class Control(Cell):
    """Control dot with a vertical line to another track."""

    offset: Offset
    "Row offset of the target track."

    def to_typst(self) -> str:  # noqa: D102
        return f"ctrl({_markup(self.offset)})"

    def caption(self) -> str:  # noqa: D102
        return ""

    def resolve(self, n_qubits: int, n_bosons: int) -> Cell:  # noqa: D102
        return replace(self, offset=_resolve(self.offset, n_qubits, n_bosons))

    def is_resolved(self) -> bool:  # noqa: D102
        return isinstance(self.offset, int)


@dataclass(frozen=True)
class Target(Cell):
    """Target of a controlled NOT."""

    def to_typst(self) -> str:  # noqa: D102
        return "targ()"

    def caption(self) -> str:  # noqa: D102
        return "+"


@dataclass(frozen=True)
class TargetX(Cell):
    """Lower end of a swap."""

    def to_typst(self) -> str:  # noqa: D102
        return "targX()"

    def caption(self) -> str:  # noqa: D102
        return "x"


@dataclass(frozen=True)
class Swap(Cell):
    """Upper end of a swap, connected to a `TargetX` further down."""

    offset: int
    "Row offset of the lower end."
    label: str | None = None
    "Label markup, either a quoted string or a math expression."

    def to_typst(self) -> str:  # noqa: D102
        if self.label is None:
            return f"swap({self.offset})"
        return f"swap({self.offset}, label: {self.label})"

    def caption(self) -> str:  # noqa: D102
        if self.label is None:
            return "x"
        return _strip_math(self.label).replace("$", "").strip()


@dataclass(frozen=True)
class Meter(Cell):
    """Measurement, optionally wired to a classical track."""

    target: Offset | None = None
    "Row offset of the classical track receiving the result."

    def to_typst(self) -> str:  # noqa: D102
        if self.target is None:
            return "meter()"
        return f"meter(target: {_markup(self.target)})"

    def caption(self) -> str:  # noqa: D102
        return "M"

    def resolve(self, n_qubits: int, n_bosons: int) -> Cell:  # noqa: D102
        return replace(self, target=_resolve(self.target, n_qubits, n_bosons))

    def is_resolved(self) -> bool:  # noqa: D102
        return self.target is None or isinstance(self.target, int)


@dataclass(frozen=True)
class ClassicalControl(Cell):
    """End of a measurement wire on a classical track, labelled with the register entry."""

    label: str
    "Register entry."

    def to_typst(self) -> str:  # noqa: D102
        return f"ctrl(0, label: (content: $ {self.label} $, pos: bottom))"

    def caption(self) -> str:  # noqa: D102
        return self.label


@dataclass(frozen=True)
class GateGroup(Cell):
    """Dotted bracket around a block of columns.

    The width is unknown while the nested operations are placed and is patched afterwards.
    """

    zero_width: ClassVar[bool] = True

    n_tracks: int
    "Number of enclosed tracks."
    width: int | None
    "Number of enclosed columns, None until patched."
    label: str
    "Label of the bracket."

    def to_typst(self) -> str:  # noqa: D102
        if self.width is None:
            msg = f"Width of the gate group '{self.label}' was never set."
            raise RuntimeError(msg)
        return f'gategroup({self.n_tracks}, {self.width}, label: "{self.label}", stroke: (dash: "dotted"))'

    def caption(self) -> str:  # noqa: D102
        return self.label

    def is_resolved(self) -> bool:  # noqa: D102
        return self.width is not None


@dataclass(frozen=True)
class Slice(Cell):
    """Vertical divider across the whole diagram."""

    zero_width: ClassVar[bool] = True

    label: str
    "Math markup of the label."
    stroke: str | None = None
    "Stroke style."

    def to_typst(self) -> str:  # noqa: D102
        ret = f"slice(label: $ {self.label} $"
        if self.stroke is not None:
            ret += f", stroke: {self.stroke}"
        return ret + ")"

    def caption(self) -> str:  # noqa: D102
        return _strip_math(self.label).replace("\\n", " ")


@dataclass(frozen=True)
class RowLabel(Cell):
    """Name of a classical register at the start of its track."""

    zero_width: ClassVar[bool] = True

    name: str

    def to_typst(self) -> str:  # noqa: D102
        return f'lstick($ "{self.name} : " $)'

    def caption(self) -> str:  # noqa: D102
        return f"{self.name} :"


@dataclass(frozen=True)
class SetWire(Cell):
    """Switch the wire style of a track, 2 for a classical double wire."""

    zero_width: ClassVar[bool] = True

    n_wires: int = 2

    def to_typst(self) -> str:  # noqa: D102
        return f"setwire({self.n_wires})"

    def caption(self) -> str:  # noqa: D102
        return ""
