"""
Drop analysis functions
"""

from typing import Any, Dict, Optional

from wheelsim.geometry import Terrain
from wheelsim.params import WheelParams
from wheelsim.sparks import RandomSource
from wheelsim.simulator import WheelSimulator


def run_drop_analysis(
    drop_heights: list[float],
    n_steps: int = 1000,
    dt: float = 1.0 / 60.0,
    terrain: Optional[Terrain] = None,
    start_x: float = 0.0,
    initial_vx: float = 0.0,
    radius: float = 50.0,
    mass: float = 1.0,
    rng: Optional[RandomSource] = None
) -> Dict[float, Dict[str, Any]]:
    """
    Run one simulation per drop height

    Args:
        drop_heights: Heights of the wheel's lowest point above the ground at start_x
        n_steps: Number of host frames per run
        dt: Host frame time (s)
        terrain: Ground, defaults to rolling hills
        start_x: Initial horizontal position
        initial_vx: Initial horizontal velocity
        radius: Wheel radius
        mass: Wheel mass
        rng: Random source for spark directions

    Returns:
        Dictionary with results for each drop height
    """
    terrain = terrain if terrain is not None else Terrain.default()
    ground_y = terrain.height(start_x)
    results: Dict[float, Dict[str, Any]] = {}

    for drop_height in drop_heights:
        params = WheelParams(
            radius=radius,
            mass=mass,
            initial_position=(start_x, ground_y + radius + drop_height),
            initial_velocity=(initial_vx, 0.0),
        )
        simulator = WheelSimulator(params, terrain, rng=rng)

        t, state, contacts, spark_counts = simulator.simulate(n_steps=n_steps, dt=dt)
        analysis = simulator.analyze(t, state, contacts, spark_counts)

        results[drop_height] = {
            "time": t,
            "state": state,
            "contacts": contacts,
            "spark_counts": spark_counts,
            "analysis": analysis,
            "simulator": simulator,
        }

    return results
