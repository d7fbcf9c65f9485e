"""qlayout.layout module."""

from qlayout.layout.cells import BosonOffset, Cell, ClassicalOffset
from qlayout.layout.convert import (
    InitializationMode,
    Layout,
    LayoutConfig,
    RenderPragmas,
    RenderPragmasMode,
    circuit_to_layout,
)
from qlayout.layout.place import add_gate
from qlayout.layout.tracks import Domain, LockSet, Track, TrackModel
from qlayout.layout.typst import circuit_to_typst_str, layout_to_typst
from qlayout.layout.visualize import VisualizeConfig, make_figure, save_circuit, savefig

__all__ = [
    "BosonOffset",
    "Cell",
    "ClassicalOffset",
    "Domain",
    "InitializationMode",
    "Layout",
    "LayoutConfig",
    "LockSet",
    "RenderPragmas",
    "RenderPragmasMode",
    "Track",
    "TrackModel",
    "VisualizeConfig",
    "add_gate",
    "circuit_to_layout",
    "circuit_to_typst_str",
    "layout_to_typst",
    "make_figure",
    "save_circuit",
    "savefig",
]
