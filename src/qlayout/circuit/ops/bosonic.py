"""Bosonic-mode gates and hybrid qubit-boson gates."""

from __future__ import annotations

from dataclasses import dataclass

from qlayout.circuit.ops._base import Param, QubitModeOperation, SingleModeOperation, TwoModeOperation

__all__ = [
    "BeamSplitter",
    "CZQubitResonator",
    "JaynesCummings",
    "LongitudinalCoupling",
    "PhaseDisplacement",
    "PhaseShift",
    "PhotonDetection",
    "QuantumRabi",
    "SingleExcitationLoad",
    "SingleExcitationStore",
    "Squeezing",
]


@dataclass(frozen=True)
class Squeezing(SingleModeOperation):
    """Single-mode squeezing."""

    squeezing: Param
    "Squeezing amplitude."
    phase: Param
    "Squeezing phase."


@dataclass(frozen=True)
class PhaseShift(SingleModeOperation):
    """Single-mode phase shift."""

    phase: Param
    "Phase."


@dataclass(frozen=True)
class PhaseDisplacement(SingleModeOperation):
    """Single-mode displacement given by amplitude and phase."""

    displacement: Param
    "Displacement amplitude."
    phase: Param
    "Displacement phase."


@dataclass(frozen=True)
class PhotonDetection(SingleModeOperation):
    """Photon-number measurement of a bosonic mode."""

    readout: str
    "Name of the readout register."
    readout_index: int
    "Index in the readout register."


@dataclass(frozen=True)
class BeamSplitter(TwoModeOperation):
    """Two-mode beam splitter."""

    theta: Param
    "Transmittivity angle."
    phi: Param
    "Phase."


@dataclass(frozen=True)
class QuantumRabi(QubitModeOperation):
    """Quantum Rabi interaction."""

    theta: Param
    "Interaction strength."


@dataclass(frozen=True)
class LongitudinalCoupling(QubitModeOperation):
    """Longitudinal coupling."""

    theta: Param
    "Interaction strength."


@dataclass(frozen=True)
class JaynesCummings(QubitModeOperation):
    """Jaynes-Cummings interaction."""

    theta: Param
    "Interaction strength."


@dataclass(frozen=True)
class SingleExcitationStore(QubitModeOperation):
    """Store a single qubit excitation into an empty bosonic mode."""


@dataclass(frozen=True)
class SingleExcitationLoad(QubitModeOperation):
    """Load a single excitation from a bosonic mode into an empty qubit."""


@dataclass(frozen=True)
class CZQubitResonator(QubitModeOperation):
    """Controlled Z between a qubit and a bosonic mode."""
