"""
Wheel physical parameters and fixed simulation constants
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

GRAVITY = 9.81  # gravity magnitude (units/s²)
FRICTION_COEFFICIENT = 0.2
TIME_SCALE = 3.0  # Simulated time per unit of host frame time
EPSILON = 1e-4  # Step tolerance of the contact search (position units)
VELOCITY_CORRECTION = 1.01  # Over-correction of the inward normal velocity

SPARKS_PER_BURST = 5
SPARK_SPEED_UNIT = 30.0  # Sliding speed that yields one full burst
SPARK_VELOCITY_GAIN = 6.0
SPARK_LIFETIME_FACTOR = 0.0005
SPARK_LIFETIME_MIN = 10.0  # steps
SPARK_LIFETIME_MAX = 100.0  # steps

CONTROL_VELOCITY_STEP = 1.0
CONTROL_ROTATION_STEP = 0.01

DEFAULT_RADIUS = 50.0  # cm
DEFAULT_MASS = 1.0  # kg


@dataclass
class WheelParams:
    """Physical parameters and initial conditions of the wheel"""

    radius: float = DEFAULT_RADIUS
    mass: float = DEFAULT_MASS
    initial_position: Tuple[float, float] = (0.0, 0.0)
    initial_velocity: Tuple[float, float] = (0.0, 0.0)
    initial_rotation: float = 0.0  # rad
    initial_angular_velocity: float = 0.0  # rad/s
    moment_of_inertia: float = field(default=0.0, init=False)  # Will be calculated

    def __post_init__(self) -> None:
        """Validate inputs and calculate derived parameters"""
        if not np.isfinite(self.radius) or self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if not np.isfinite(self.mass) or self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")

        initial = (
            *self.initial_position,
            *self.initial_velocity,
            self.initial_rotation,
            self.initial_angular_velocity,
        )
        if len(initial) != 6 or not np.all(np.isfinite(initial)):
            raise ValueError("initial conditions must be finite 2D vectors and scalars")

        # Solid disk: I = m * r² / 2
        self.moment_of_inertia = 0.5 * self.mass * self.radius**2
