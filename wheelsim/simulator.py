"""
Main wheel simulator class
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Union

import numpy as np

from wheelsim.analysis import SettlingAnalyzer
from wheelsim.contact import ContactLocator
from wheelsim.controls import ControlInput
from wheelsim.dynamics import Dynamics, check_dt
from wheelsim.geometry import Terrain
from wheelsim.params import TIME_SCALE, WheelParams
from wheelsim.sparks import ParticlePool, RandomSource, SparkEmitter
from wheelsim.state import WheelState

logger = logging.getLogger(__name__)

ControlSchedule = Union[ControlInput, Callable[[int], ControlInput], None]


class WheelSimulator:
    """Simulates a wheel rolling over a terrain curve and the sparks it throws"""

    def __init__(
        self,
        params: WheelParams,
        terrain: Optional[Terrain] = None,
        rng: Optional[RandomSource] = None
    ) -> None:
        """
        Initialize simulator

        Args:
            params: Wheel physical parameters and initial conditions
            terrain: Ground shared with the drawing layer (defaults to rolling hills)
            rng: Random source for spark directions
        """
        self.params = params
        self.terrain = terrain if terrain is not None else Terrain.default()

        # Initialize components
        self.contact_locator = ContactLocator(self.terrain)
        self.dynamics = Dynamics(self.contact_locator)
        self.emitter = SparkEmitter(rng)
        self.particles = ParticlePool()
        self.analyzer = SettlingAnalyzer(params, self.terrain)

        self.body = WheelState.from_params(params)
        self.step_count = 0

    def reset(self) -> None:
        """Return the wheel to its initial conditions and drop all sparks"""
        self.body = WheelState.from_params(self.params)
        self.particles.clear()
        self.step_count = 0

    def step(self, dt: float, controls: Optional[ControlInput] = None) -> None:
        """
        Advance one host frame: controls, contact and integration, emission,
        spark motion, spark expiry

        Args:
            dt: Host frame time (s), scaled by TIME_SCALE internally
            controls: Command flags for this frame
        """
        check_dt(dt)
        had_contact = self.body.contact.has_contact

        if controls is not None:
            controls.apply(self.body)

        self.dynamics.step(self.body, dt)

        contact = self.body.contact
        if contact.has_contact != had_contact:
            logger.debug(
                "step %d: contact %s at %s",
                self.step_count,
                "engaged" if contact.has_contact else "lost",
                np.round(self.body.position, 3).tolist(),
            )

        sparks = self.emitter.emit(contact)
        if sparks:
            logger.debug("step %d: %d sparks emitted", self.step_count, len(sparks))
        self.particles.add(sparks)
        self.particles.advance(dt)
        self.particles.prune()

        self.step_count += 1

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the state for the presentation layer"""
        return {
            "position": self.body.position.copy(),
            "rotation": self.body.rotation,
            "speed": self.body.speed,
            "angular_velocity": self.body.angular_velocity,
            "has_contact": self.body.contact.has_contact,
            "particles": self.particles.as_array(),
        }

    def simulate(
        self, n_steps: int = 1000, dt: float = 1.0 / 60.0, controls: ControlSchedule = None
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Run the simulation from the current state

        Args:
            n_steps: Number of host frames
            dt: Host frame time (s)
            controls: Command flags applied every step, or a callable giving
                the flags for a step index

        Returns:
            Tuple of (time_array, state_history, contact_history, spark_counts)
        """
        check_dt(dt)
        if n_steps < 0:
            raise ValueError(f"n_steps must be non-negative, got {n_steps}")

        t = np.zeros(n_steps)
        state = np.zeros((n_steps, 6))
        contacts = np.zeros((n_steps, 5))
        spark_counts = np.zeros(n_steps, dtype=int)
        t_start = self.step_count * dt * TIME_SCALE

        logger.info(
            "Simulating %d steps on %s from %s",
            n_steps, self.terrain, np.round(self.body.position, 3).tolist(),
        )

        for i in range(n_steps):
            if callable(controls):
                step_controls = controls(i)
            else:
                step_controls = controls

            self.step(dt, step_controls)

            t[i] = t_start + (i + 1) * dt * TIME_SCALE
            state[i] = self.body.as_vector()
            contacts[i] = self.body.contact.as_vector()
            spark_counts[i] = len(self.particles)

        return t, state, contacts, spark_counts

    def analyze(
        self, t: np.ndarray, state: np.ndarray, contacts: np.ndarray, spark_counts: np.ndarray
    ) -> dict:
        """
        Analyze simulation results

        Args:
            t: Time array
            state: State history
            contacts: Contact history
            spark_counts: Live spark counts

        Returns:
            Dictionary with analysis results
        """
        return self.analyzer.analyze(t, state, contacts, spark_counts)
