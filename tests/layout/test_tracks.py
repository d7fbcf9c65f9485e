"""Test tracks, locks and column synchronization."""

from qlayout.layout.cells import Filler, GateGroup, Glyph, RowLabel, SetWire, Slice
from qlayout.layout.tracks import Domain, LockSet, Track, TrackModel

Q = Domain.QUBIT
B = Domain.BOSON
C = Domain.CLASSICAL


def _model_with_lengths(lengths: list[int]) -> TrackModel:
    model = TrackModel()
    model.ensure_tracks(Q, range(len(lengths)))
    for index, length in enumerate(lengths):
        for _ in range(length):
            model.track(Q, index).push(Glyph("X"))
    return model


def test_effective_length_skips_zero_width_cells():
    track = Track(0, [RowLabel("ro"), SetWire(2), Glyph("H"), Slice('"x"'), GateGroup(1, 1, "g"), Filler()])
    assert len(track) == 6
    assert track.effective_length() == 2


def test_ensure_tracks_grows_and_never_shrinks():
    model = TrackModel()
    model.ensure_tracks(Q, [2])
    assert model.n_tracks(Q) == 3
    assert [track.index for track in model.tracks(Q)] == [0, 1, 2]

    model.ensure_tracks(Q, [0])
    model.ensure_tracks(Q, [])
    assert model.n_tracks(Q) == 3
    assert model.n_tracks(B) == 0


def test_flatten_pads_to_longest():
    model = _model_with_lengths([3, 0, 1])
    model.flatten(Q, [1, 2])
    assert model.effective_length(Q, 0) == 3
    assert model.effective_length(Q, 1) == 1
    assert model.effective_length(Q, 2) == 1

    model.flatten(Q, [0, 1, 2])
    assert [model.effective_length(Q, i) for i in range(3)] == [3, 3, 3]
    assert model.track(Q, 1).cells[-1] == Filler()


def test_flatten_is_idempotent():
    model = _model_with_lengths([2, 0])
    model.flatten(Q, [0, 1])
    cells = [list(track.cells) for track in model.tracks(Q)]
    model.flatten(Q, [0, 1])
    assert [track.cells for track in model.tracks(Q)] == cells


def test_flatten_empty_list_is_noop():
    model = _model_with_lengths([2, 0])
    model.flatten(Q, [])
    assert model.effective_length(Q, 1) == 0


def test_flatten_cross_shares_target():
    model = _model_with_lengths([1])
    model.ensure_tracks(B, [1])
    model.track(B, 1).push(Glyph("S"))
    model.track(B, 1).push(Glyph("S"))
    model.flatten_cross(Q, [0], B, [0, 1])
    assert model.effective_length(Q, 0) == 2
    assert model.effective_length(B, 0) == 2


def test_drain_consumes_consecutive_locks():
    model = _model_with_lengths([0])
    model.lock(Q, 0, 0)
    model.lock(Q, 0, 1)
    model.lock(Q, 0, 3)
    model.drain(Q, 0)
    assert model.track(Q, 0).cells == [Filler(), Filler()]
    assert not model.locks(Q).is_locked(0, 0)
    assert model.locks(Q).is_locked(0, 3)


def test_open_ended_lock_covers_tracks_created_later():
    model = _model_with_lengths([1])
    model.lock_from(Q, 1, 1)
    model.ensure_tracks(Q, [3])
    model.flatten(Q, [0, 3])
    assert model.effective_length(Q, 3) == 1
    assert model.is_blocked(Q, 3)
    assert not model.is_blocked(Q, 0)

    model.drain(Q, 3)
    assert model.effective_length(Q, 3) == 2
    assert not model.locks(Q).is_locked(3, 1)
    # Consumed on track 3 only
    assert model.locks(Q).is_locked(2, 1)


def test_lock_set_reserve_after_consume():
    locks = LockSet()
    assert not locks
    locks.reserve_from(0, 4)
    locks.consume(2, 4)
    assert not locks.is_locked(2, 4)
    locks.reserve(2, 4)
    assert locks.is_locked(2, 4)
    assert locks


def test_level_moves_past_locked_column():
    model = _model_with_lengths([1, 0])
    model.lock(Q, 1, 1)
    model.level((Q, [0, 1]))
    assert model.effective_length(Q, 0) == 2
    assert model.effective_length(Q, 1) == 2
    assert not model.is_blocked(Q, 1)


def test_catch_up_raises_reference_only_when_behind():
    model = _model_with_lengths([1, 3])
    model.catch_up(Q, 1, Q, 0)
    assert model.effective_length(Q, 0) == 3

    model = _model_with_lengths([3, 1])
    model.catch_up(Q, 1, Q, 0)
    assert model.effective_length(Q, 0) == 3
    assert model.effective_length(Q, 1) == 1


def test_add_and_find_named_track():
    model = TrackModel()
    model.add_track(C, "ro")
    model.add_track(C, "flags")
    assert model.find_track(C, "flags").index == 1  # type: ignore[union-attr]
    assert model.find_track(C, "missing") is None
