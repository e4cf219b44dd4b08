"""
Simulation state representation
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from wheelsim.params import WheelParams


def _zero_vec() -> np.ndarray:
    return np.zeros(2)


@dataclass
class ContactState:
    """Contact snapshot recomputed by every resolver step"""

    has_contact: bool = False
    contact_point: np.ndarray = field(default_factory=_zero_vec)  # Valid only with contact
    sliding_velocity: np.ndarray = field(default_factory=_zero_vec)  # Valid only with contact

    def as_vector(self) -> np.ndarray:
        """[has_contact, contact_x, contact_y, sliding_vx, sliding_vy]"""
        if not self.has_contact:
            return np.zeros(5)
        return np.array([1.0, *self.contact_point, *self.sliding_velocity])


class WheelState:
    """Rigid body state of the wheel (radius and mass are fixed at creation)"""

    def __init__(
        self,
        position: np.ndarray,
        velocity: np.ndarray,
        radius: float,
        mass: float,
        rotation: float = 0.0,
        angular_velocity: float = 0.0,
        contact: Optional[ContactState] = None,
    ) -> None:
        """
        Initialize wheel state

        Args:
            position: Disk center
            velocity: Linear velocity
            radius: Disk radius (> 0)
            mass: Disk mass (> 0)
            rotation: Rotation angle (rad, unbounded)
            angular_velocity: Angular velocity (rad/s)
            contact: Contact snapshot from the last step
        """
        if not radius > 0:
            raise ValueError(f"radius must be positive, got {radius}")
        if not mass > 0:
            raise ValueError(f"mass must be positive, got {mass}")

        self.position = np.array(position, dtype=float)
        self.velocity = np.array(velocity, dtype=float)
        self.rotation = float(rotation)
        self.angular_velocity = float(angular_velocity)
        self._radius = float(radius)
        self._mass = float(mass)
        self.contact = contact if contact is not None else ContactState()

    @classmethod
    def from_params(cls, params: "WheelParams") -> "WheelState":
        """Create the wheel at its initial conditions"""
        return cls(
            position=params.initial_position,
            velocity=params.initial_velocity,
            radius=params.radius,
            mass=params.mass,
            rotation=params.initial_rotation,
            angular_velocity=params.initial_angular_velocity,
        )

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def moment_of_inertia(self) -> float:
        """Solid disk: I = m * r² / 2"""
        return 0.5 * self._mass * self._radius**2

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def as_vector(self) -> np.ndarray:
        """[x, y, rotation, vx, vy, angular_velocity]"""
        return np.array([
            self.position[0],
            self.position[1],
            self.rotation,
            self.velocity[0],
            self.velocity[1],
            self.angular_velocity,
        ])

    def __repr__(self) -> str:
        return (
            f"WheelState(position={self.position.tolist()}, velocity={self.velocity.tolist()}, "
            f"rotation={self.rotation:.4f}, angular_velocity={self.angular_velocity:.4f}, "
            f"radius={self._radius}, mass={self._mass}, has_contact={self.contact.has_contact})"
        )


@dataclass
class Particle:
    """Ballistic spark"""

    position: np.ndarray
    velocity: np.ndarray
    remaining_life: float  # steps

    @property
    def expired(self) -> bool:
        return self.remaining_life < 0
