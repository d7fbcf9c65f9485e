"""Two-qubit gates."""

from __future__ import annotations

from dataclasses import dataclass

from qlayout.circuit.ops._base import Param, TwoQubitOperation

__all__ = [
    "CNOT",
    "SWAP",
    "Bogoliubov",
    "ComplexPMInteraction",
    "ControlledPauliY",
    "ControlledPauliZ",
    "ControlledPhaseShift",
    "ControlledRotateX",
    "ControlledRotateXY",
    "EchoCrossResonance",
    "FSwap",
    "Fsim",
    "GivensRotation",
    "GivensRotationLittleEndian",
    "ISwap",
    "InvSqrtISwap",
    "MolmerSorensenXX",
    "PMInteraction",
    "PhaseShiftedControlledPhase",
    "PhaseShiftedControlledZ",
    "Qsim",
    "SpinInteraction",
    "SqrtISwap",
    "VariableMSXX",
    "XY",
]


@dataclass(frozen=True)
class CNOT(TwoQubitOperation):
    """Controlled NOT gate."""


@dataclass(frozen=True)
class ControlledPauliY(TwoQubitOperation):
    """Controlled Pauli Y gate."""


@dataclass(frozen=True)
class ControlledPauliZ(TwoQubitOperation):
    """Controlled Pauli Z gate. Symmetric in its two qubits."""


@dataclass(frozen=True)
class ControlledPhaseShift(TwoQubitOperation):
    """Controlled phase shift."""

    theta: Param
    "Phase."


@dataclass(frozen=True)
class ControlledRotateX(TwoQubitOperation):
    """Controlled rotation around the X axis."""

    theta: Param
    "Rotation angle."


@dataclass(frozen=True)
class ControlledRotateXY(TwoQubitOperation):
    """Controlled rotation around an axis in the XY plane."""

    theta: Param
    "Rotation angle."
    phi: Param
    "Azimuth of the rotation axis."


@dataclass(frozen=True)
class EchoCrossResonance(TwoQubitOperation):
    """Echoed cross-resonance gate."""


@dataclass(frozen=True)
class SWAP(TwoQubitOperation):
    """SWAP gate."""


@dataclass(frozen=True)
class ISwap(TwoQubitOperation):
    """Imaginary SWAP gate."""


@dataclass(frozen=True)
class FSwap(TwoQubitOperation):
    """Fermionic SWAP gate."""


@dataclass(frozen=True)
class SqrtISwap(TwoQubitOperation):
    """Square root of the imaginary SWAP gate."""


@dataclass(frozen=True)
class InvSqrtISwap(TwoQubitOperation):
    """Inverse square root of the imaginary SWAP gate."""


@dataclass(frozen=True)
class XY(TwoQubitOperation):
    """XY interaction."""

    theta: Param
    "Rotation angle."


@dataclass(frozen=True)
class MolmerSorensenXX(TwoQubitOperation):
    """Fixed Molmer-Sorensen XX gate."""


@dataclass(frozen=True)
class VariableMSXX(TwoQubitOperation):
    """Variable Molmer-Sorensen XX gate."""

    theta: Param
    "Rotation angle."


@dataclass(frozen=True)
class GivensRotation(TwoQubitOperation):
    """Givens rotation."""

    theta: Param
    "Rotation angle."
    phi: Param
    "Phase."


@dataclass(frozen=True)
class GivensRotationLittleEndian(TwoQubitOperation):
    """Givens rotation in little-endian qubit order."""

    theta: Param
    "Rotation angle."
    phi: Param
    "Phase."


@dataclass(frozen=True)
class Qsim(TwoQubitOperation):
    """Qsim gate."""

    x: Param
    "Prefactor of the XX interaction."
    y: Param
    "Prefactor of the YY interaction."
    z: Param
    "Prefactor of the ZZ interaction."


@dataclass(frozen=True)
class Fsim(TwoQubitOperation):
    """Fermionic simulation gate."""

    t: Param
    "Hopping strength."
    u: Param
    "Interaction strength."
    delta: Param
    "Bogoliubov interaction strength."


@dataclass(frozen=True)
class SpinInteraction(TwoQubitOperation):
    """Generalized XYZ spin interaction."""

    x: Param
    "Prefactor of the XX interaction."
    y: Param
    "Prefactor of the YY interaction."
    z: Param
    "Prefactor of the ZZ interaction."


@dataclass(frozen=True)
class Bogoliubov(TwoQubitOperation):
    """Bogoliubov interaction."""

    delta_real: Param
    "Real part of the interaction strength."
    delta_imag: Param
    "Imaginary part of the interaction strength."


@dataclass(frozen=True)
class PMInteraction(TwoQubitOperation):
    """Transverse field-field interaction."""

    t: Param
    "Interaction strength."


@dataclass(frozen=True)
class ComplexPMInteraction(TwoQubitOperation):
    """Complex transverse field-field interaction."""

    t_real: Param
    "Real part of the interaction strength."
    t_imag: Param
    "Imaginary part of the interaction strength."


@dataclass(frozen=True)
class PhaseShiftedControlledZ(TwoQubitOperation):
    """Controlled Z gate with a single-qubit phase shift."""

    phi: Param
    "Single-qubit phase."


@dataclass(frozen=True)
class PhaseShiftedControlledPhase(TwoQubitOperation):
    """Controlled phase gate with a single-qubit phase shift."""

    theta: Param
    "Controlled phase."
    phi: Param
    "Single-qubit phase."
