"""
Settling analysis of simulated wheel trajectories
"""

from typing import Any, Dict, List

import numpy as np
from scipy.signal import find_peaks

from wheelsim.geometry import Terrain
from wheelsim.params import WheelParams

SETTLED_AMPLITUDE = 5.0  # Max peak-to-peak clearance oscillation of a settled wheel


class SettlingAnalyzer:
    """Analyzes simulation results for contact, settling and divergence"""

    def __init__(self, params: WheelParams, terrain: Terrain) -> None:
        """
        Initialize settling analyzer

        Args:
            params: Wheel physical parameters
            terrain: Ground the wheel was simulated on
        """
        self.params = params
        self.terrain = terrain
        self.settled_amplitude = SETTLED_AMPLITUDE
        self.tail_fraction = 0.2  # Share of the run used for the settling window
        self.bounce_prominence = 0.5  # Minimum rise of a clearance peak counted as a bounce

    def analyze(
        self,
        t: np.ndarray,
        state: np.ndarray,
        contacts: np.ndarray,
        spark_counts: np.ndarray
    ) -> Dict[str, Any]:
        """
        Analyze simulation results for settling behavior

        Args:
            t: Time array
            state: State history [N x 6]
            contacts: Contact history [N x 5] with [has_contact, cx, cy, svx, svy]
            spark_counts: Live spark count after each step [N]

        Returns:
            Dictionary with analysis results
        """
        n = len(t)
        if n == 0:
            raise ValueError("cannot analyze an empty simulation")

        x = state[:, 0]
        y = state[:, 1]
        omega = state[:, 5]
        speed = np.hypot(state[:, 3], state[:, 4])
        has_contact = contacts[:, 0] > 0.5

        is_finite = bool(np.all(np.isfinite(state)))

        contact_steps = np.flatnonzero(has_contact)
        first_contact_step = int(contact_steps[0]) if len(contact_steps) > 0 else -1
        contact_fraction = float(np.mean(has_contact))

        final_x = float(x[-1])
        final_height = float(y[-1])
        rest_height = self.terrain.height(final_x) + self.params.radius
        height_error = final_height - rest_height

        # Height of the center above the ground directly below it
        if is_finite:
            clearance = y - np.array([self.terrain.height(xi) for xi in x])
        else:
            clearance = np.full(n, np.inf)

        # Oscillation over the tail of the run
        tail_start = max(0, n - max(1, int(n * self.tail_fraction)))
        oscillation_amplitude = float(np.ptp(clearance[tail_start:])) if is_finite else float("inf")

        # Bounces: clearance maxima once the wheel has touched down
        bounce_count = 0
        if first_contact_step >= 0 and is_finite:
            peaks, _ = find_peaks(clearance[first_contact_step:], prominence=self.bounce_prominence)
            bounce_count = int(len(peaks))

        # Clearance oscillation over consecutive windows
        n_windows = 5
        window_size = max(1, n // n_windows)
        amplitudes: List[float] = []
        for i in range(n_windows):
            start_idx = i * window_size
            end_idx = (i + 1) * window_size if i < n_windows - 1 else n
            window = clearance[start_idx:end_idx]
            if len(window) > 0:
                amplitudes.append(float(np.ptp(window)) if is_finite else float("inf"))

        if is_finite and len(amplitudes) >= 3:
            # The first window holds the initial fall
            amplitude_trend = float(np.polyfit(range(len(amplitudes) - 1), amplitudes[1:], 1)[0])
            is_growing = amplitudes[-1] > 2.0 * max(amplitudes[1], self.settled_amplitude)
        else:
            amplitude_trend = 0.0
            is_growing = False

        is_diverging = (not is_finite) or is_growing
        is_settled = is_finite and oscillation_amplitude < self.settled_amplitude

        return {
            "first_contact_step": first_contact_step,
            "contact_fraction": contact_fraction,
            "final_height": final_height,
            "rest_height": rest_height,
            "height_error": height_error,
            "oscillation_amplitude": oscillation_amplitude,
            "bounce_count": bounce_count,
            "amplitude_trend": amplitude_trend,
            "max_speed": float(np.max(speed)),
            "max_angular_speed": float(np.max(np.abs(omega))),
            "distance_travelled": float(np.abs(final_x - x[0])),
            "max_live_sparks": int(np.max(spark_counts)) if len(spark_counts) > 0 else 0,
            "is_settled": is_settled,
            "is_diverging": is_diverging,
        }
