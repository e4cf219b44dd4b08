"""
Wheel Terrain Contact Simulation

Drops a wheel onto a terrain curve from several heights and reports how it
settles. Run directly for a text report; the dashboard lives in app.py.
"""

import argparse

from wheelsim import (
    ContactLocator,
    ContactState,
    ControlInput,
    Dynamics,
    Particle,
    ParticlePool,
    SparkEmitter,
    Terrain,
    WheelParams,
    WheelSimulator,
    WheelState,
    ground_func,
    run_drop_analysis,
)
from wheelsim.logger import setup_logging

__all__ = [
    "ContactLocator",
    "ContactState",
    "ControlInput",
    "Dynamics",
    "Particle",
    "ParticlePool",
    "SparkEmitter",
    "Terrain",
    "WheelParams",
    "WheelSimulator",
    "WheelState",
    "ground_func",
    "run_drop_analysis",
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Wheel drop analysis")
    parser.add_argument("--terrain", choices=["hills", "flat"], default="hills")
    parser.add_argument("--steps", type=int, default=1000)
    parser.add_argument("--heights", type=str, default="0,50,150,300")
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args()

    setup_logging(args.log_level)

    terrain = Terrain.default() if args.terrain == "hills" else Terrain.flat(-50.0)
    heights = [float(h) for h in args.heights.split(",")]
    results = run_drop_analysis(heights, n_steps=args.steps, terrain=terrain)

    # Print results
    print(f"Drop Analysis Results ({terrain}):")
    print("-" * 80)
    for drop_height, data in results.items():
        analysis = data["analysis"]
        print(f"\nDrop height: {drop_height:g}")
        print(f"  First contact step: {analysis['first_contact_step']}")
        print(f"  Contact fraction: {analysis['contact_fraction']*100:.1f}%")
        print(f"  Final height: {analysis['final_height']:.2f} (rest {analysis['rest_height']:.2f})")
        print(f"  Oscillation amplitude: {analysis['oscillation_amplitude']:.3f}")
        print(f"  Bounces: {analysis['bounce_count']}")
        print(f"  Max speed: {analysis['max_speed']:.2f}")
        print(f"  Distance travelled: {analysis['distance_travelled']:.1f}")
        print(f"  Max live sparks: {analysis['max_live_sparks']}")
        print(f"  Settled: {analysis['is_settled']}")
        print(f"  Diverging: {analysis['is_diverging']}")


if __name__ == "__main__":
    main()
