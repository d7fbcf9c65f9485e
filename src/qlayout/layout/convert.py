"""Conversion of a circuit into a column-aligned layout."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from typing_extensions import NotRequired, TypedDict, Unpack

from qlayout.layout.place import add_gate
from qlayout.layout.tracks import Domain, Track, TrackModel

if TYPE_CHECKING:
    from qlayout.circuit.ops._base import Operation
    from qlayout.circuit.program import Circuit

logger = logging.getLogger(__name__)


class InitializationMode(Enum):
    """Label at the start of each qubit row."""

    STATE = "state"
    "Initial state `|0>`."
    QUBIT = "qubit"
    "Qubit name `q[n]`."

    @classmethod
    def from_str(cls, value: str) -> InitializationMode:
        """Parse an initialization mode, ignoring case.

        Args:
            value (str): `"state"` or `"qubit"`.

        Returns:
            InitializationMode: Parsed mode.

        Raises:
            ValueError: If the string is neither mode.

        Examples:
            >>> InitializationMode.from_str("Qubit")
            <InitializationMode.QUBIT: 'qubit'>
        """
        try:
            return cls(value.lower())
        except ValueError as err:
            msg = f"Invalid initialization mode: '{value}'. Expected 'state' or 'qubit'."
            logger.error(msg)
            raise ValueError(msg) from err


class RenderPragmasMode(Enum):
    """Selection of the pragmas drawn in the diagram."""

    ALL = "all"
    NONE = "none"
    PARTIAL = "partial"


@dataclass(frozen=True)
class RenderPragmas:
    """Pragmas drawn in the diagram.

    With `PARTIAL`, only the pragmas whose kind name is listed are drawn. Operations that
    are not pragmas are always drawn.
    """

    mode: RenderPragmasMode = RenderPragmasMode.ALL
    names: frozenset[str] = frozenset()

    @classmethod
    def all(cls) -> RenderPragmas:
        """Draw every pragma.

        Returns:
            RenderPragmas: Selection.
        """
        return cls(RenderPragmasMode.ALL)

    @classmethod
    def none(cls) -> RenderPragmas:
        """Draw no pragma.

        Returns:
            RenderPragmas: Selection.
        """
        return cls(RenderPragmasMode.NONE)

    @classmethod
    def partial(cls, names: list[str] | frozenset[str]) -> RenderPragmas:
        """Draw the listed pragmas only.

        Args:
            names (list[str] | frozenset[str]): Kind names of the drawn pragmas.

        Returns:
            RenderPragmas: Selection.
        """
        return cls(RenderPragmasMode.PARTIAL, frozenset(names))

    @classmethod
    def from_str(cls, value: str) -> RenderPragmas:
        """Parse a selection.

        Args:
            value (str): `"all"` or `"none"` (any case), otherwise a comma-separated list of
                pragma names. Entries not starting with `Pragma` are dropped.

        Returns:
            RenderPragmas: Selection.

        Examples:
            >>> RenderPragmas.from_str("None") == RenderPragmas.none()
            True
            >>> sorted(RenderPragmas.from_str("PragmaLoop, Hadamard").names)
            ['PragmaLoop']
        """
        lowered = value.strip().lower()
        if lowered == "all":
            return cls.all()
        if lowered == "none":
            return cls.none()
        names = [name.strip() for name in value.split(",")]
        return cls.partial([name for name in names if name.startswith("Pragma")])

    def keep(self, operation: Operation) -> bool:
        """Check whether an operation is drawn.

        Args:
            operation (Operation): Operation.

        Returns:
            bool: True if the operation is drawn.
        """
        if not operation.is_pragma() or self.mode is RenderPragmasMode.ALL:
            return True
        if self.mode is RenderPragmasMode.NONE:
            return False
        return operation.name() in self.names


class _LayoutConfigDict(TypedDict):
    render_pragmas: NotRequired[RenderPragmas | str]
    initialization_mode: NotRequired[InitializationMode | str]


@dataclass
class LayoutConfig:
    """Layout configuration."""

    render_pragmas: RenderPragmas | str = field(default_factory=RenderPragmas.all)
    initialization_mode: InitializationMode | str = InitializationMode.STATE

    def __post_init__(self) -> None:
        """Parse string options."""
        if isinstance(self.render_pragmas, str):
            self.render_pragmas = RenderPragmas.from_str(self.render_pragmas)
        if isinstance(self.initialization_mode, str):
            self.initialization_mode = InitializationMode.from_str(self.initialization_mode)


@dataclass
class Layout:
    """Column-aligned tracks of a circuit, ready to be serialized."""

    qubits: list[Track]
    "Qubit tracks."
    bosons: list[Track]
    "Bosonic mode tracks."
    classical: list[Track]
    "Classical register tracks."
    initialization_mode: InitializationMode = InitializationMode.STATE
    "Label at the start of each qubit row."

    def tracks(self, domain: Domain) -> list[Track]:
        """Get the tracks of a domain.

        Args:
            domain (Domain): Domain.

        Returns:
            list[Track]: Tracks.
        """
        return {Domain.QUBIT: self.qubits, Domain.BOSON: self.bosons, Domain.CLASSICAL: self.classical}[domain]

    @property
    def n_qubits(self) -> int:
        """Get the number of qubit tracks.

        Returns:
            int: Number of qubit tracks.
        """
        return len(self.qubits)

    @property
    def n_bosons(self) -> int:
        """Get the number of bosonic tracks.

        Returns:
            int: Number of bosonic tracks.
        """
        return len(self.bosons)

    @property
    def n_classical(self) -> int:
        """Get the number of classical tracks.

        Returns:
            int: Number of classical tracks.
        """
        return len(self.classical)

    @property
    def n_columns(self) -> int:
        """Get the number of columns.

        Returns:
            int: Largest effective length over every track.
        """
        return max((track.effective_length() for track in self.all_tracks()), default=0)

    def all_tracks(self) -> list[Track]:
        """Get every track, qubits first, then bosonic modes, then classical registers.

        Returns:
            list[Track]: Tracks in row order.
        """
        return [*self.qubits, *self.bosons, *self.classical]

    def is_empty(self) -> bool:
        """Check whether the layout has no track.

        Returns:
            bool: True if there is no row to draw.
        """
        return not self.all_tracks()


def _finalize(model: TrackModel) -> None:
    n_qubits = model.n_tracks(Domain.QUBIT)
    n_bosons = model.n_tracks(Domain.BOSON)
    n_classical = model.n_tracks(Domain.CLASSICAL)
    model.flatten_cross(Domain.QUBIT, range(n_qubits), Domain.BOSON, range(n_bosons))
    model.flatten_cross(Domain.QUBIT, range(n_qubits), Domain.CLASSICAL, range(n_classical))
    model.flatten_cross(Domain.BOSON, range(n_bosons), Domain.CLASSICAL, range(n_classical))

    for domain in Domain:
        for track in model.tracks(domain):
            track.cells = [cell.resolve(n_qubits, n_bosons) for cell in track.cells]


def circuit_to_layout(circuit: Circuit, **kwargs: Unpack[_LayoutConfigDict]) -> Layout:
    """Lay out a circuit on column-aligned tracks.

    Args:
        circuit (Circuit): Circuit to lay out.
        kwargs: Keyword arguments for layout configuration.

    Returns:
        Layout: Tracks with every cross-track reference resolved.

    Raises:
        OperationNotSupportedError: If an operation has no placement rule.
        NoQubitError: If an operation requires qubits but has none.

    Examples:
        >>> from qlayout.circuit import Circuit
        >>> from qlayout.circuit.ops import single_qubit, two_qubit
        >>> layout = circuit_to_layout(Circuit([single_qubit.Hadamard(0), two_qubit.CNOT(0, 2)]))
        >>> layout.n_qubits
        3
        >>> [cell.to_typst() for cell in layout.qubits[0]]
        ['$ H $', 'ctrl(2)']
    """
    config = LayoutConfig(**kwargs)
    render_pragmas: RenderPragmas = config.render_pragmas  # type: ignore[assignment]

    model = TrackModel()
    for op in circuit:
        if not render_pragmas.keep(op):
            logger.debug("Skipped pragma %s.", op.name())
            continue
        add_gate(model, op)
    _finalize(model)

    return Layout(
        qubits=model.tracks(Domain.QUBIT),
        bosons=model.tracks(Domain.BOSON),
        classical=model.tracks(Domain.CLASSICAL),
        initialization_mode=config.initialization_mode,  # type: ignore[arg-type]
    )
