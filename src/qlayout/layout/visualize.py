"""Preview of a layout drawn with matplotlib."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib import patches
from typing_extensions import NotRequired, TypedDict, Unpack

from qlayout.errors import EmptyCircuitError, ExternalError
from qlayout.layout.cells import (
    ClassicalControl,
    Control,
    Filler,
    GateGroup,
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
from qlayout.layout.convert import InitializationMode, circuit_to_layout

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from qlayout.circuit.program import Circuit
    from qlayout.layout.cells import Cell
    from qlayout.layout.convert import Layout, RenderPragmas

logger = logging.getLogger(__name__)

#: Width of a gate box
DEFAULT_BOX_WIDTH = 1.0
#: Vertical margin of a gate box
DEFAULT_BOX_VERTICAL_MARGIN = 0.2
#: Interval between track lines
DEFAULT_TRACK_SPACING = 1.0
#: Horizontal distance between two columns
DEFAULT_COLUMN_SPACING = 2.0
#: Default file name used by `save_circuit` for a directory path
DEFAULT_FILENAME = "circuit.png"


class _VisualizeConfigDict(TypedDict):
    fontsize: NotRequired[float]
    track_spacing: NotRequired[float]
    column_spacing: NotRequired[float]
    box_width: NotRequired[float]
    box_vertical_margin: NotRequired[float]
    box_edgecolor: NotRequired[str]
    box_facecolor: NotRequired[str]
    pragma_facecolor: NotRequired[str]
    group_edgecolor: NotRequired[str]
    slice_color: NotRequired[str]
    show_labels: NotRequired[bool]


@dataclass
class VisualizeConfig:
    """Visualizer configuration."""

    fontsize: float = 8.0
    track_spacing: float = DEFAULT_TRACK_SPACING
    column_spacing: float = DEFAULT_COLUMN_SPACING
    box_width: float = DEFAULT_BOX_WIDTH
    box_vertical_margin: float = DEFAULT_BOX_VERTICAL_MARGIN
    box_edgecolor: str = "blue"
    box_facecolor: str = "white"
    pragma_facecolor: str = "lightgray"
    group_edgecolor: str = "gray"
    slice_color: str = "red"

    show_labels: bool = True


class LayoutVisualizer:
    """Visualizer of a layout."""

    def __init__(self, layout: Layout, config: VisualizeConfig) -> None:
        """Initialize the LayoutVisualizer object.

        Raises:
            EmptyCircuitError: If the layout has no track.
        """
        if layout.is_empty():
            msg = "The layout has no track to draw."
            logger.error(msg)
            raise EmptyCircuitError(msg)

        self.layout = layout
        self.config = config
        self.tracks = layout.all_tracks()
        self.n_rows = len(self.tracks)
        self.max_column = layout.n_columns

    def _x(self, column: int) -> float:
        return column * self.config.column_spacing

    def _y(self, row: int) -> float:
        return row * self.config.track_spacing

    def _row_labels(self) -> list[str]:
        labels = []
        for track in self.layout.qubits:
            if self.layout.initialization_mode is InitializationMode.STATE:
                labels.append(r"$|0\rangle$")
            else:
                labels.append(f"$q_{{{track.index}}}$")
        labels.extend(f"$b_{{{track.index}}}$" for track in self.layout.bosons)
        for track in self.layout.classical:
            names = [cell.name for cell in track if isinstance(cell, RowLabel)]
            labels.append(names[0] if names else f"c{track.index}")
        return labels

    def _plot_track_lines(self, ax: Axes, xlim: tuple[float, float]) -> None:
        n_quantum = self.layout.n_qubits + self.layout.n_bosons
        for row in range(self.n_rows):
            y = self._y(row)
            if row < n_quantum:
                ax.hlines(y, xlim[0], xlim[1], color="black", linewidth=0.5)
            else:
                # Classical tracks are drawn with a double wire
                ax.hlines([y - 0.04, y + 0.04], xlim[0], xlim[1], color="black", linewidth=0.5)

        ax.set_yticks([self._y(row) for row in range(self.n_rows)])
        ax.set_yticklabels(self._row_labels())

    def _plot_box(self, ax: Axes, column: int, row: int, n_rows: int, text: str, facecolor: str) -> None:
        config = self.config
        x = self._x(column) - config.box_width / 2
        y = self._y(row) - config.box_vertical_margin
        height = config.track_spacing * (n_rows - 1) + config.box_vertical_margin * 2
        rect = patches.Rectangle(
            (x, y),
            config.box_width,
            height,
            edgecolor=config.box_edgecolor,
            facecolor=facecolor,
            zorder=2,
        )
        ax.add_patch(rect)
        if config.show_labels and text:
            ax.text(x + config.box_width / 2, y + height / 2, text, ha="center", va="center", fontsize=config.fontsize)

    def _plot_wire(self, ax: Axes, column: int, row: int, offset: int) -> None:
        ax.vlines(self._x(column), self._y(row), self._y(row + offset), color="black", linewidth=1.0, zorder=1)

    def _plot_cell(self, ax: Axes, cell: Cell, column: int, row: int) -> None:
        if isinstance(cell, Filler):
            return
        if isinstance(cell, Control | ClassicalControl):
            if isinstance(cell, Control) and isinstance(cell.offset, int):
                self._plot_wire(ax, column, row, cell.offset)
            ax.plot(self._x(column), self._y(row), "o", color="black", markersize=5, zorder=3)
            if isinstance(cell, ClassicalControl) and self.config.show_labels:
                ax.text(self._x(column), self._y(row) + 0.3, cell.caption(), ha="center", fontsize=self.config.fontsize)
            return
        if isinstance(cell, Target | TargetX | Swap):
            if isinstance(cell, Swap):
                self._plot_wire(ax, column, row, cell.offset)
            marker = "$\\oplus$" if isinstance(cell, Target) else "x"
            ax.plot(self._x(column), self._y(row), marker=marker, color="black", markersize=10, zorder=3)
            return
        if isinstance(cell, Meter) and isinstance(cell.target, int):
            self._plot_wire(ax, column, row, cell.target)
        if isinstance(cell, HybridGateBox) and isinstance(cell.target, int):
            self._plot_wire(ax, column, row, cell.target)

        n_rows = cell.n_tracks if isinstance(cell, MultiGateBox) else 1
        fill = getattr(cell, "fill", None)
        facecolor = self.config.pragma_facecolor if fill is not None else self.config.box_facecolor
        self._plot_box(ax, column, row, n_rows, cell.caption(), facecolor)

    def _plot_annotation(self, ax: Axes, cell: Cell, column: int, row: int) -> None:
        config = self.config
        if isinstance(cell, GateGroup) and cell.width:
            x = self._x(column) - config.column_spacing / 2 + 0.1
            y = self._y(row) - config.track_spacing / 2 + 0.1
            rect = patches.Rectangle(
                (x, y),
                config.column_spacing * cell.width - 0.2,
                config.track_spacing * cell.n_tracks - 0.2,
                edgecolor=config.group_edgecolor,
                facecolor="none",
                linestyle="dotted",
            )
            ax.add_patch(rect)
            if config.show_labels:
                ax.text(x, y - 0.1, cell.caption(), fontsize=config.fontsize, color=config.group_edgecolor)
        elif isinstance(cell, Slice):
            x = self._x(column) - config.column_spacing / 2
            ax.vlines(x, self._y(0) - 0.5, self._y(self.n_rows - 1) + 0.5, colors=config.slice_color, linestyles="dashed")
            if config.show_labels:
                ax.text(x, self._y(0) - 0.6, cell.caption(), ha="center", fontsize=config.fontsize)

    def _plot_cells(self, ax: Axes) -> None:
        for row, track in enumerate(self.tracks):
            column = 0
            for cell in track:
                if cell.zero_width:
                    if not isinstance(cell, RowLabel | SetWire):
                        self._plot_annotation(ax, cell, column, row)
                    continue
                self._plot_cell(ax, cell, column, row)
                column += 1

    def make_figure(self) -> Figure:
        """Show the plot of the layout.

        Returns:
            Figure: Matplotlib Figure object.
        """
        fig = plt.figure(figsize=(max(6.4, 0.8 * self.max_column + 2), max(2.0, 0.6 * self.n_rows + 1)))
        xlim = (-self.config.column_spacing / 2, self._x(self.max_column))
        ylim = (-self.config.track_spacing, self.config.track_spacing * self.n_rows)

        ax = fig.add_subplot(111, xlim=xlim, ylim=ylim, xticks=[])
        ax.invert_yaxis()
        for spine in ax.spines.values():
            spine.set_visible(False)
        self._plot_track_lines(ax, xlim)
        self._plot_cells(ax)
        return fig


def make_figure(layout: Layout, **kwargs: Unpack[_VisualizeConfigDict]) -> Figure:
    """Show the plot of a layout.

    Args:
        layout (Layout): Layout with every reference resolved.
        kwargs: Keyword arguments for visualizing configuration.

    Returns:
        Figure: Matplotlib Figure object.

    Raises:
        EmptyCircuitError: If the layout has no track.

    Example:
        >>> from qlayout.circuit import Circuit
        >>> from qlayout.circuit.ops import single_qubit, two_qubit
        >>> from qlayout.layout.convert import circuit_to_layout
        >>> layout = circuit_to_layout(Circuit([single_qubit.Hadamard(0), two_qubit.CNOT(0, 1)]))
        >>> fig = make_figure(layout, fontsize=10.0)
    """
    config = VisualizeConfig(**kwargs)
    return LayoutVisualizer(layout, config).make_figure()


def savefig(layout: Layout, filename: str | Path, **kwargs: Unpack[_VisualizeConfigDict]) -> None:
    """Save the plot of a layout.

    Args:
        layout (Layout): Layout with every reference resolved.
        filename (str | Path): Save file name.
        kwargs: Keyword arguments for visualizing configuration.

    Raises:
        ExternalError: If matplotlib fails to write the file.
    """
    fig = make_figure(layout, **kwargs)
    try:
        fig.savefig(filename, bbox_inches="tight")
    except (OSError, ValueError) as err:
        msg = f"Failed to save the figure to {filename}."
        logger.exception(msg)
        raise ExternalError(msg) from err
    finally:
        plt.close(fig)


def resolve_output_path(path: str | Path | None) -> Path:
    """Get the file path of a saved diagram.

    Args:
        path (str | Path | None): File or directory path. None stands for the current directory.

    Returns:
        Path: `circuit.png` inside a directory path, otherwise the path with a `.png`
        suffix added when it has none.

    Examples:
        >>> resolve_output_path("out/diagram").name
        'diagram.png'
    """
    if path is None:
        return Path.cwd() / DEFAULT_FILENAME
    path = Path(path)
    if path.is_dir():
        return path / DEFAULT_FILENAME
    if not path.suffix:
        return path.with_suffix(".png")
    return path


def save_circuit(
    circuit: Circuit,
    path: str | Path | None = None,
    *,
    render_pragmas: RenderPragmas | str = "all",
    initialization_mode: InitializationMode | str = InitializationMode.STATE,
    **kwargs: Unpack[_VisualizeConfigDict],
) -> Path:
    """Lay out a circuit and save its preview.

    Args:
        circuit (Circuit): Circuit.
        path (str | Path | None): File or directory path.
        render_pragmas (RenderPragmas | str): Pragmas drawn in the diagram.
        initialization_mode (InitializationMode | str): Label at the start of each qubit row.
        kwargs: Keyword arguments for visualizing configuration.

    Returns:
        Path: Path of the saved file.
    """
    layout = circuit_to_layout(circuit, render_pragmas=render_pragmas, initialization_mode=initialization_mode)
    output = resolve_output_path(path)
    savefig(layout, output, **kwargs)
    logger.info("Saved the circuit diagram to %s.", output)
    return output
