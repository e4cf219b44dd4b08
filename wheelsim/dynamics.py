"""
Wheel dynamics: contact resolution and semi-implicit Euler integration
"""

from typing import TYPE_CHECKING, Tuple

import numpy as np

from wheelsim.params import (
    FRICTION_COEFFICIENT,
    GRAVITY,
    TIME_SCALE,
    VELOCITY_CORRECTION,
)
from wheelsim.state import ContactState

if TYPE_CHECKING:
    from wheelsim.contact import ContactLocator
    from wheelsim.state import WheelState

# Contact normal used when the wheel center lies exactly on the terrain.
# Normals point from the center into the ground, so this pushes straight up.
FALLBACK_NORMAL = np.array([0.0, -1.0])


def contact_normal(offset: np.ndarray) -> np.ndarray:
    """
    Unit normal from the wheel center towards the contact point

    Args:
        offset: contact_point - center

    Returns:
        Normalized offset, or FALLBACK_NORMAL for a zero-length offset
    """
    length = float(np.linalg.norm(offset))
    if length == 0.0 or not np.isfinite(length):
        return FALLBACK_NORMAL.copy()
    return offset / length


def check_dt(dt: float) -> float:
    """Validate a host frame time"""
    if not np.isfinite(dt) or dt <= 0:
        raise ValueError(f"dt must be positive and finite, got {dt}")
    return float(dt)


class Dynamics:
    """Single-contact rigid body dynamics of the wheel"""

    def __init__(
        self,
        contact_locator: "ContactLocator",
        friction_coefficient: float = FRICTION_COEFFICIENT,
        time_scale: float = TIME_SCALE
    ) -> None:
        """
        Initialize dynamics calculator

        Args:
            contact_locator: Locator bound to the terrain
            friction_coefficient: Sliding friction coefficient
            time_scale: Multiplier applied to the host frame time
        """
        self.contact_locator = contact_locator
        self.friction_coefficient = friction_coefficient
        self.time_scale = time_scale

    def resolve_contact(self, body: "WheelState") -> Tuple[np.ndarray, float]:
        """
        Detect ground contact, correct penetration and compute loads

        Mutates the body's position and velocity when in contact and replaces
        its contact snapshot.

        Args:
            body: Wheel state

        Returns:
            Tuple of (force, torque)
        """
        gravity = np.array([0.0, -body.mass * GRAVITY])

        contact = self.contact_locator.find_contact(body.position, body.radius)
        if contact is None:
            body.contact = ContactState(has_contact=False)
            return gravity, 0.0

        radius = body.radius
        offset = contact - body.position
        distance = float(np.linalg.norm(offset))
        penetration = distance - radius
        normal = contact_normal(offset)
        tangent = np.array([normal[1], -normal[0]])

        # Push out along the normal and over-correct the inward velocity.
        # This is not a constraint solve.
        body.position = body.position + normal * penetration
        normal_vel = float(np.dot(body.velocity, -normal))
        body.velocity = body.velocity + normal_vel * normal * VELOCITY_CORRECTION

        support_force_value = float(np.dot(gravity, -normal))
        support_force = normal * support_force_value
        tangential_force = gravity - support_force

        # Friction from the contact patch sliding against the ground
        contact_vel = body.angular_velocity * radius * tangent
        sliding_vel = body.velocity - contact_vel
        friction = sliding_vel * support_force_value * self.friction_coefficient

        force = 2.0 / 3.0 * tangential_force
        tangential_force = tangential_force - friction
        torque = 1.0 / 3.0 * float(np.dot(tangential_force, tangent)) * radius
        force = force + friction

        body.contact = ContactState(
            has_contact=True,
            contact_point=contact,
            sliding_velocity=sliding_vel,
        )
        return force, torque

    def integrate(self, body: "WheelState", force: np.ndarray, torque: float, dt: float) -> None:
        """
        Semi-implicit Euler update

        Position and rotation advance with the velocities from before the update.

        Args:
            body: Wheel state
            force: Net force
            torque: Net torque
            dt: Scaled time step
        """
        body.position = body.position + body.velocity * dt
        body.velocity = body.velocity + force / body.mass * dt
        body.rotation += body.angular_velocity * dt
        body.angular_velocity += torque / body.moment_of_inertia * dt

    def step(self, body: "WheelState", dt: float) -> None:
        """
        Advance the wheel by one host frame

        Args:
            body: Wheel state
            dt: Host frame time (s), scaled by time_scale internally
        """
        dt = check_dt(dt) * self.time_scale
        force, torque = self.resolve_contact(body)
        self.integrate(body, force, torque, dt)
