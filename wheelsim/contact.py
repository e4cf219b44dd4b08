"""
Contact locator between the wheel disk and the terrain curve
"""

import logging
from typing import Optional

import numpy as np

from wheelsim.geometry import TerrainFunction
from wheelsim.params import EPSILON

logger = logging.getLogger(__name__)

MAX_SEARCH_ITERATIONS = 10_000


class ContactLocator:
    """Finds the terrain point nearest to a circle center by local hill-climbing"""

    def __init__(
        self,
        terrain: TerrainFunction,
        tolerance: float = EPSILON,
        max_iterations: int = MAX_SEARCH_ITERATIONS
    ) -> None:
        """
        Initialize contact locator

        Args:
            terrain: Ground height function y = h(x)
            tolerance: Search stops once the step magnitude falls below this
            max_iterations: Hard cap on search iterations per starting point
        """
        self.terrain = terrain
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    def ground_distance_squared(self, x: float, center: np.ndarray) -> float:
        """Squared distance from center to the terrain point at abscissa x"""
        x_diff = center[0] - x
        y_diff = center[1] - self.terrain(x)
        return x_diff * x_diff + y_diff * y_diff

    def min_distance(self, x: float, center: np.ndarray) -> float:
        """
        Local search for the abscissa of nearest approach

        The direction is chosen once from the starting point and never reversed;
        the step halves whenever advancing stops reducing the distance.

        Args:
            x: Starting abscissa
            center: Circle center

        Returns:
            Abscissa of the local distance minimum
        """
        dx = 1.0
        if self.ground_distance_squared(x, center) < self.ground_distance_squared(x + dx, center):
            dx = -dx

        x_cur = x
        dist_cur = self.ground_distance_squared(x_cur, center)
        iterations = 0

        while abs(dx) > self.tolerance:
            if iterations >= self.max_iterations:
                logger.warning(
                    "Contact search hit %d iterations at x=%.4f (step %.2e)",
                    self.max_iterations, x_cur, dx,
                )
                break
            iterations += 1

            dist_next = self.ground_distance_squared(x_cur + dx, center)
            if dist_cur > dist_next:
                x_cur += dx
                dist_cur = dist_next
            else:
                dx *= 0.5

        return x_cur

    def find_contact(self, center: np.ndarray, radius: float) -> Optional[np.ndarray]:
        """
        Locate the terrain point touching the circle

        Args:
            center: Circle center
            radius: Circle radius

        Returns:
            Terrain point (x, h(x)) of nearest approach, or None without intersection
        """
        center = np.asarray(center, dtype=float)
        left_min = self.min_distance(center[0] - radius, center)
        right_min = self.min_distance(center[0] + radius, center)

        left_dist = self.ground_distance_squared(left_min, center)
        right_dist = self.ground_distance_squared(right_min, center)

        if left_dist < right_dist:
            best_dist, best_x = left_dist, left_min
        else:
            best_dist, best_x = right_dist, right_min

        if best_dist <= radius * radius:
            return np.array([best_x, self.terrain(best_x)], dtype=float)
        return None
