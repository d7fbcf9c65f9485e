"""Column-aligned diagram layout of qubit, bosonic and classical circuits."""

from qlayout.circuit import Circuit, Operation, remove_two_qubit_gates_identities
from qlayout.errors import EmptyCircuitError, ExternalError, LayoutError, NoQubitError, OperationNotSupportedError
from qlayout.layout import (
    InitializationMode,
    Layout,
    RenderPragmas,
    circuit_to_layout,
    circuit_to_typst_str,
    layout_to_typst,
    make_figure,
    save_circuit,
    savefig,
)

__all__ = [
    "Circuit",
    "EmptyCircuitError",
    "ExternalError",
    "InitializationMode",
    "Layout",
    "LayoutError",
    "NoQubitError",
    "Operation",
    "OperationNotSupportedError",
    "RenderPragmas",
    "circuit_to_layout",
    "circuit_to_typst_str",
    "layout_to_typst",
    "make_figure",
    "remove_two_qubit_gates_identities",
    "save_circuit",
    "savefig",
]
