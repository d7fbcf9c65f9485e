"""Tracks of the diagram and their column synchronization."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from qlayout.layout.cells import Filler

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from qlayout.layout.cells import Cell

logger = logging.getLogger(__name__)


class Domain(Enum):
    """Kind of a track."""

    QUBIT = "qubit"
    BOSON = "boson"
    CLASSICAL = "classical"


@dataclass
class Track:
    """Ordered cells of one qubit, bosonic mode or classical register."""

    index: int
    "Index of the track in its domain."
    cells: list[Cell] = field(default_factory=list)
    "Cells of the track."
    name: str | None = None
    "Register name of a classical track."

    def effective_length(self) -> int:
        """Get the number of columns consumed by the track.

        Returns:
            int: Number of cells that are not zero-width.

        Examples:
            >>> from qlayout.layout.cells import Filler, Slice
            >>> Track(0, [Filler(), Slice("x"), Filler()]).effective_length()
            2
        """
        return sum(1 for cell in self.cells if not cell.zero_width)

    def push(self, cell: Cell) -> None:
        """Append a cell.

        Args:
            cell (Cell): Cell to append.
        """
        self.cells.append(cell)

    def __len__(self) -> int:
        """Return the raw number of cells, zero-width cells included.

        Returns:
            int: Number of cells.
        """
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over the cells.

        Yields:
            Cell: Cell.
        """
        yield from self.cells


class LockSet:
    """Column reservations of one domain.

    A lock `(track, column)` forbids placing content on `track` at `column`; the track must
    be padded with a filler there. A lock is either bounded to one track or open-ended, in
    which case it covers every track from a first index upward, including tracks created
    later. Open-ended locks are consumed per track.
    """

    def __init__(self) -> None:
        """Construct an empty lock set."""
        self._bounded: set[tuple[int, int]] = set()
        self._open: set[tuple[int, int]] = set()
        self._consumed: set[tuple[int, int]] = set()

    def reserve(self, track: int, column: int) -> None:
        """Lock one track at a column.

        Args:
            track (int): Track index.
            column (int): Column index.
        """
        self._bounded.add((track, column))
        self._consumed.discard((track, column))

    def reserve_from(self, first_track: int, column: int) -> None:
        """Lock every track from `first_track` upward at a column.

        Args:
            first_track (int): Lowest locked track index.
            column (int): Column index.
        """
        self._open.add((first_track, column))
        self._consumed = {(track, col) for track, col in self._consumed if not (col == column and track >= first_track)}

    def is_locked(self, track: int, column: int) -> bool:
        """Check whether a track is locked at a column.

        Args:
            track (int): Track index.
            column (int): Column index.

        Returns:
            bool: True if a pending lock covers the position.
        """
        if (track, column) in self._bounded:
            return True
        if (track, column) in self._consumed:
            return False
        return any(col == column and track >= first for first, col in self._open)

    def consume(self, track: int, column: int) -> None:
        """Remove the lock covering a position.

        Args:
            track (int): Track index.
            column (int): Column index.
        """
        self._bounded.discard((track, column))
        if any(col == column and track >= first for first, col in self._open):
            self._consumed.add((track, column))

    def __bool__(self) -> bool:
        """Check whether any reservation was ever made.

        Returns:
            bool: True if the set holds a bounded or open-ended lock.
        """
        return bool(self._bounded or self._open)


class TrackModel:
    """Tracks of the three domains with their lock sets.

    This is the working state of one conversion. Operations on the model never remove
    cells and never shrink a domain.
    """

    def __init__(self) -> None:
        """Construct an empty model."""
        self._tracks: dict[Domain, list[Track]] = {domain: [] for domain in Domain}
        self._locks: dict[Domain, LockSet] = {domain: LockSet() for domain in Domain}

    def tracks(self, domain: Domain) -> list[Track]:
        """Get the tracks of a domain.

        Args:
            domain (Domain): Domain.

        Returns:
            list[Track]: Tracks in index order.
        """
        return self._tracks[domain]

    def track(self, domain: Domain, index: int) -> Track:
        """Get a track.

        Args:
            domain (Domain): Domain.
            index (int): Track index.

        Returns:
            Track: The track.
        """
        return self._tracks[domain][index]

    def n_tracks(self, domain: Domain) -> int:
        """Get the number of tracks of a domain.

        Args:
            domain (Domain): Domain.

        Returns:
            int: Number of tracks.
        """
        return len(self._tracks[domain])

    def locks(self, domain: Domain) -> LockSet:
        """Get the lock set of a domain.

        Args:
            domain (Domain): Domain.

        Returns:
            LockSet: Lock set.
        """
        return self._locks[domain]

    def ensure_tracks(self, domain: Domain, indices: Iterable[int]) -> None:
        """Create empty tracks until every index exists.

        Args:
            domain (Domain): Domain.
            indices (Iterable[int]): Required track indices.
        """
        tracks = self._tracks[domain]
        needed = max(indices, default=-1) + 1
        while len(tracks) < needed:
            tracks.append(Track(len(tracks)))

    def add_track(self, domain: Domain, name: str | None = None) -> Track:
        """Append a new track.

        Args:
            domain (Domain): Domain.
            name (str | None): Register name of the track.

        Returns:
            Track: The new track.
        """
        tracks = self._tracks[domain]
        track = Track(len(tracks), name=name)
        tracks.append(track)
        return track

    def find_track(self, domain: Domain, name: str) -> Track | None:
        """Find a track by register name.

        Args:
            domain (Domain): Domain.
            name (str): Register name.

        Returns:
            Track | None: First track with the name, None if there is none.
        """
        return next((track for track in self._tracks[domain] if track.name == name), None)

    def effective_length(self, domain: Domain, index: int) -> int:
        """Get the effective length of a track.

        Args:
            domain (Domain): Domain.
            index (int): Track index.

        Returns:
            int: Number of columns consumed by the track.
        """
        return self._tracks[domain][index].effective_length()

    def max_effective_length(self, domain: Domain) -> int:
        """Get the largest effective length of a domain.

        Args:
            domain (Domain): Domain.

        Returns:
            int: Largest effective length, 0 for an empty domain.
        """
        return max((track.effective_length() for track in self._tracks[domain]), default=0)

    def _pad(self, groups: Sequence[tuple[Domain, Sequence[int]]]) -> None:
        tracks = [self._tracks[domain][index] for domain, indices in groups for index in indices]
        target = max((track.effective_length() for track in tracks), default=0)
        for track in tracks:
            for _ in range(target - track.effective_length()):
                track.push(Filler())

    def flatten(self, domain: Domain, indices: Iterable[int]) -> None:
        """Pad the listed tracks with fillers up to their largest effective length.

        Args:
            domain (Domain): Domain.
            indices (Iterable[int]): Indices of existing tracks.
        """
        self._pad([(domain, list(indices))])

    def flatten_cross(
        self,
        domain_a: Domain,
        indices_a: Iterable[int],
        domain_b: Domain,
        indices_b: Iterable[int],
    ) -> None:
        """Pad tracks of two domains up to their shared largest effective length.

        Args:
            domain_a (Domain): First domain.
            indices_a (Iterable[int]): Track indices in the first domain.
            domain_b (Domain): Second domain.
            indices_b (Iterable[int]): Track indices in the second domain.
        """
        self._pad([(domain_a, list(indices_a)), (domain_b, list(indices_b))])

    def is_blocked(self, domain: Domain, index: int) -> bool:
        """Check whether the next column of a track is locked.

        Args:
            domain (Domain): Domain.
            index (int): Track index.

        Returns:
            bool: True if content cannot be placed on the track now.
        """
        return self._locks[domain].is_locked(index, self.effective_length(domain, index))

    def drain(self, domain: Domain, index: int) -> None:
        """Pad a track with fillers while its next column is locked.

        Args:
            domain (Domain): Domain.
            index (int): Track index.
        """
        locks = self._locks[domain]
        track = self._tracks[domain][index]
        while locks.is_locked(index, column := track.effective_length()):
            locks.consume(index, column)
            track.push(Filler())

    def level(self, *groups: tuple[Domain, Iterable[int]]) -> None:
        """Flatten tracks of one or more domains so that none of them is blocked.

        The tracks are flattened, then drained and flattened again until the shared next
        column is free on every listed track.

        Args:
            groups (tuple[Domain, Iterable[int]]): Pairs of domain and track indices.
        """
        materialized = [(domain, list(indices)) for domain, indices in groups]
        self._pad(materialized)
        while any(self.is_blocked(domain, index) for domain, indices in materialized for index in indices):
            for domain, indices in materialized:
                for index in indices:
                    self.drain(domain, index)
            self._pad(materialized)

    def lock(self, domain: Domain, index: int, column: int) -> None:
        """Reserve one track at a column.

        Args:
            domain (Domain): Domain.
            index (int): Track index.
            column (int): Column index.
        """
        self._locks[domain].reserve(index, column)

    def lock_from(self, domain: Domain, first_index: int, column: int) -> None:
        """Reserve every track from `first_index` upward at a column.

        Args:
            domain (Domain): Domain.
            first_index (int): Lowest reserved track index.
            column (int): Column index.
        """
        self._locks[domain].reserve_from(first_index, column)

    def catch_up(self, domain: Domain, index: int, reference_domain: Domain, reference_index: int) -> None:
        """Drain a crossed track and bring the reference track level with it if it is ahead.

        Args:
            domain (Domain): Domain of the crossed track.
            index (int): Index of the crossed track.
            reference_domain (Domain): Domain of the reference track.
            reference_index (int): Index of the reference track.
        """
        self.drain(domain, index)
        if self.effective_length(domain, index) > self.effective_length(reference_domain, reference_index):
            self._pad([(domain, [index]), (reference_domain, [reference_index])])
