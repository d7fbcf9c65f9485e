"""Serialization of a layout into a Typst document drawn with the quill package."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typing_extensions import Unpack

from qlayout.layout.convert import InitializationMode, Layout, _LayoutConfigDict, circuit_to_layout

if TYPE_CHECKING:
    from qlayout.circuit.program import Circuit
    from qlayout.layout.tracks import Track

#: Version of the quill package imported by the document
QUILL_VERSION = "0.2.1"

#: Page set-up and package import preceding the rows
DOCUMENT_HEADER = (
    "#set page(width: auto, height: auto, margin: 5pt)\n"
    '#show math.equation: set text(font: "Fira Math")\n'
    "#{ \n"
    f'    import "@preview/quill:{QUILL_VERSION}": *\n'
    "    quantum-circuit(\n"
)

#: Closing of the `quantum-circuit` call and of the code block
DOCUMENT_FOOTER = ")\n}\n"

#: Row separator of quill
ROW_END = "[\\ ]"

_INDENT = "       "


def _row(cells: list[str]) -> str:
    return _INDENT + ", ".join([*cells, "1", ROW_END]) + ","


def _row_start(index: int, mode: InitializationMode, label: str | None) -> str:
    start = "|0>" if mode is InitializationMode.STATE else f"q[{index}]"
    if label is None:
        return f"lstick(${start}$)"
    return f'lstick(${start}$, label: "{label}")'


def _quantum_rows(tracks: list[Track], mode: InitializationMode, label: str) -> list[str]:
    return [
        _row([_row_start(track.index, mode, label if position == 0 else None), *(cell.to_typst() for cell in track)])
        for position, track in enumerate(tracks)
    ]


def layout_to_typst(layout: Layout) -> str:
    """Serialize a layout into a Typst document.

    Every qubit and bosonic row starts with its initial label; the first qubit row is
    marked "Qubits" and the first bosonic row "Bosons". Classical rows start with the
    register name they carry.

    Args:
        layout (Layout): Layout with every reference resolved.

    Returns:
        str: Typst document.

    Raises:
        RuntimeError: If a cell still holds an unresolved reference.

    Examples:
        >>> from qlayout.circuit import Circuit
        >>> from qlayout.circuit.ops import single_qubit
        >>> from qlayout.layout.convert import circuit_to_layout
        >>> document = layout_to_typst(circuit_to_layout(Circuit([single_qubit.Hadamard(0)])))
        >>> document.splitlines()[5]
        '       lstick($|0>$, label: "Qubits"), $ H $, 1,'
    """
    mode = layout.initialization_mode
    rows = [
        *_quantum_rows(layout.qubits, mode, "Qubits"),
        *_quantum_rows(layout.bosons, mode, "Bosons"),
        *(_row([cell.to_typst() for cell in track]) for track in layout.classical),
    ]
    if rows:
        # No row separator after the last row
        rows[-1] = rows[-1].removesuffix(f" {ROW_END},")
    body = "".join(row + "\n" for row in rows)
    return DOCUMENT_HEADER + body + DOCUMENT_FOOTER


def circuit_to_typst_str(circuit: Circuit, **kwargs: Unpack[_LayoutConfigDict]) -> str:
    """Lay out a circuit and serialize it into a Typst document.

    Args:
        circuit (Circuit): Circuit.
        kwargs: Keyword arguments for layout configuration.

    Returns:
        str: Typst document.
    """
    return layout_to_typst(circuit_to_layout(circuit, **kwargs))
