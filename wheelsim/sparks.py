"""
Friction sparks: emission at the contact patch and a ballistic particle pool
"""

from typing import List, Optional, Protocol

import numpy as np

from wheelsim.params import (
    GRAVITY,
    SPARK_LIFETIME_FACTOR,
    SPARK_LIFETIME_MAX,
    SPARK_LIFETIME_MIN,
    SPARK_SPEED_UNIT,
    SPARK_VELOCITY_GAIN,
    SPARKS_PER_BURST,
    TIME_SCALE,
)
from wheelsim.state import ContactState, Particle


class RandomSource(Protocol):
    """Uniform sample provider (numpy.random.Generator satisfies this)"""

    def uniform(self, low: float, high: float) -> float:
        ...


def spark_count(sliding_speed: float) -> int:
    """Number of sparks emitted for a sliding speed"""
    return int(np.floor(SPARKS_PER_BURST * sliding_speed / SPARK_SPEED_UNIT))


def spark_lifetime(speed: float) -> float:
    """Lifetime in steps, growing with the square of the launch speed"""
    return float(np.clip(SPARK_LIFETIME_FACTOR * speed * speed, SPARK_LIFETIME_MIN, SPARK_LIFETIME_MAX))


class SparkEmitter:
    """Spawns sparks where the wheel slides over the ground"""

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        """
        Initialize spark emitter

        Args:
            rng: Random source, defaults to numpy's default generator
        """
        self.rng = rng if rng is not None else np.random.default_rng()

    def random_direction(self) -> np.ndarray:
        """Normalized pair of uniform samples in [-1, 1], zero for a zero-length draw"""
        direction = np.array([self.rng.uniform(-1.0, 1.0), self.rng.uniform(-1.0, 1.0)])
        length = float(np.linalg.norm(direction))
        if length == 0.0:
            return np.zeros(2)
        return direction / length

    def emit(self, contact: ContactState) -> List[Particle]:
        """
        Create the sparks for one step

        Args:
            contact: Contact snapshot computed by this step's resolver

        Returns:
            New particles, empty without contact or sliding
        """
        if not contact.has_contact:
            return []

        sliding_vel = contact.sliding_velocity
        sliding_speed = float(np.linalg.norm(sliding_vel))
        if sliding_speed == 0.0:
            return []

        sparks: List[Particle] = []
        for _ in range(spark_count(sliding_speed)):
            vel = SPARK_VELOCITY_GAIN * sliding_vel + self.random_direction() * sliding_speed
            sparks.append(
                Particle(
                    position=np.array(contact.contact_point, dtype=float),
                    velocity=vel,
                    remaining_life=spark_lifetime(float(np.linalg.norm(vel))),
                )
            )
        return sparks


class ParticlePool:
    """Owns every live spark"""

    def __init__(self, time_scale: float = TIME_SCALE) -> None:
        self.time_scale = time_scale
        self._particles: List[Particle] = []

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self):
        return iter(self._particles)

    def add(self, particles: List[Particle]) -> None:
        self._particles.extend(particles)

    def advance(self, dt: float) -> None:
        """
        Move every spark under gravity

        Life drops by one per call regardless of dt.

        Args:
            dt: Host frame time (s), scaled by time_scale internally
        """
        if not np.isfinite(dt) or dt <= 0:
            raise ValueError(f"dt must be positive and finite, got {dt}")
        dt = dt * self.time_scale
        gravity_dv = np.array([0.0, -GRAVITY * dt])
        for particle in self._particles:
            particle.remaining_life -= 1.0
            particle.position = particle.position + particle.velocity * dt
            particle.velocity = particle.velocity + gravity_dv

    def prune(self) -> int:
        """
        Drop sparks whose life fell below zero

        Returns:
            Number of removed sparks
        """
        before = len(self._particles)
        self._particles = [p for p in self._particles if not p.expired]
        return before - len(self._particles)

    def as_array(self) -> np.ndarray:
        """(n, 3) array of [x, y, remaining_life]"""
        if not self._particles:
            return np.zeros((0, 3))
        return np.array([[*p.position, p.remaining_life] for p in self._particles])

    def clear(self) -> None:
        self._particles = []
