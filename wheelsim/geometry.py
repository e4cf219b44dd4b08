"""
Terrain geometry: the analytic ground height field
"""

from typing import Callable, Optional, Tuple, Union

import numpy as np

TerrainFunction = Callable[[float], float]


def ground_func(x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Default rolling-hills ground height

    Args:
        x: Horizontal coordinate(s)

    Returns:
        Ground height at x
    """
    return 100.0 * np.sin(x / 100.0) - 200.0 + 0.0001 * x * x + 0.1 * x


class Terrain:
    """Ground height field y = h(x) shared by the simulation and the drawing layer"""

    def __init__(self, func: Optional[TerrainFunction] = None, name: str = "custom") -> None:
        """
        Initialize terrain

        Args:
            func: Height function, continuous over at least one wheel radius.
                Defaults to the rolling-hills ground.
            name: Label used in reports
        """
        self.func = func if func is not None else ground_func
        self.name = name if func is not None else "hills"

    @classmethod
    def default(cls) -> "Terrain":
        """Rolling-hills terrain"""
        return cls(ground_func, name="hills")

    @classmethod
    def flat(cls, level: float = 0.0) -> "Terrain":
        """Horizontal ground at a constant height"""
        return cls(lambda x: level + 0.0 * x, name=f"flat({level:g})")

    def height(self, x: float) -> float:
        """Ground height at x"""
        return float(self.func(x))

    def __call__(self, x: float) -> float:
        return self.height(x)

    def slope(self, x: float, h: float = 1e-3) -> float:
        """Central-difference slope dy/dx at x"""
        return (self.height(x + h) - self.height(x - h)) / (2 * h)

    def sample(self, left: float, right: float, n: int = 501) -> Tuple[np.ndarray, np.ndarray]:
        """
        Sample the terrain for drawing

        Args:
            left: Left border of the view
            right: Right border of the view
            n: Number of samples

        Returns:
            Tuple of (xs, ys) arrays
        """
        xs = np.linspace(left, right, n)
        ys = np.array([self.height(x) for x in xs])
        return xs, ys

    def __repr__(self) -> str:
        return f"Terrain({self.name})"
