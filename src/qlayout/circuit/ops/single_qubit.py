"""Single-qubit gates."""

from __future__ import annotations

from dataclasses import dataclass

from qlayout.circuit.ops._base import Param, SingleQubitOperation

__all__ = [
    "GPi",
    "GPi2",
    "Hadamard",
    "Identity",
    "InvSqrtPauliX",
    "PauliX",
    "PauliY",
    "PauliZ",
    "PhaseShiftState0",
    "PhaseShiftState1",
    "RotateAroundSphericalAxis",
    "RotateX",
    "RotateXY",
    "RotateY",
    "RotateZ",
    "SGate",
    "SingleQubitGate",
    "SqrtPauliX",
    "TGate",
]


@dataclass(frozen=True)
class Hadamard(SingleQubitOperation):
    """Hadamard gate."""


@dataclass(frozen=True)
class PauliX(SingleQubitOperation):
    """Pauli X gate."""


@dataclass(frozen=True)
class PauliY(SingleQubitOperation):
    """Pauli Y gate."""


@dataclass(frozen=True)
class PauliZ(SingleQubitOperation):
    """Pauli Z gate."""


@dataclass(frozen=True)
class SqrtPauliX(SingleQubitOperation):
    """Square root of the Pauli X gate."""


@dataclass(frozen=True)
class InvSqrtPauliX(SingleQubitOperation):
    """Inverse square root of the Pauli X gate."""


@dataclass(frozen=True)
class SGate(SingleQubitOperation):
    """S gate."""


@dataclass(frozen=True)
class TGate(SingleQubitOperation):
    """T gate."""


@dataclass(frozen=True)
class Identity(SingleQubitOperation):
    """Identity gate."""


@dataclass(frozen=True)
class RotateX(SingleQubitOperation):
    """Rotation around the X axis."""

    theta: Param
    "Rotation angle."


@dataclass(frozen=True)
class RotateY(SingleQubitOperation):
    """Rotation around the Y axis."""

    theta: Param
    "Rotation angle."


@dataclass(frozen=True)
class RotateZ(SingleQubitOperation):
    """Rotation around the Z axis."""

    theta: Param
    "Rotation angle."


@dataclass(frozen=True)
class RotateXY(SingleQubitOperation):
    """Rotation around an axis in the XY plane."""

    theta: Param
    "Rotation angle."
    phi: Param
    "Azimuth of the rotation axis."


@dataclass(frozen=True)
class PhaseShiftState0(SingleQubitOperation):
    """Phase shift applied to the state `|0>`."""

    theta: Param
    "Phase."


@dataclass(frozen=True)
class PhaseShiftState1(SingleQubitOperation):
    """Phase shift applied to the state `|1>`."""

    theta: Param
    "Phase."


@dataclass(frozen=True)
class RotateAroundSphericalAxis(SingleQubitOperation):
    """Rotation around an axis given in spherical coordinates."""

    theta: Param
    "Rotation angle."
    spherical_theta: Param
    "Polar angle of the rotation axis."
    spherical_phi: Param
    "Azimuth of the rotation axis."


@dataclass(frozen=True)
class SingleQubitGate(SingleQubitOperation):
    r"""General single-qubit unitary.

    .. math::

        U = e^{i \varphi} \begin{pmatrix} \alpha & -\beta^* \\ \beta & \alpha^* \end{pmatrix}
    """

    alpha_r: Param
    "Real part of alpha."
    alpha_i: Param
    "Imaginary part of alpha."
    beta_r: Param
    "Real part of beta."
    beta_i: Param
    "Imaginary part of beta."
    global_phase: Param
    "Global phase."


@dataclass(frozen=True)
class GPi(SingleQubitOperation):
    """GPi gate of trapped-ion devices."""

    theta: Param
    "Phase."


@dataclass(frozen=True)
class GPi2(SingleQubitOperation):
    """GPi2 gate of trapped-ion devices."""

    theta: Param
    "Phase."
