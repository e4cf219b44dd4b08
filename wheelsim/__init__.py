"""
Wheel Terrain Contact Simulation

This package simulates a disk rolling over an analytically defined terrain
curve, resolving a single ground contact per step, and the friction sparks
thrown from the contact patch.
"""

from wheelsim.params import WheelParams
from wheelsim.state import ContactState, Particle, WheelState
from wheelsim.geometry import Terrain, ground_func
from wheelsim.contact import ContactLocator
from wheelsim.dynamics import Dynamics
from wheelsim.sparks import ParticlePool, SparkEmitter
from wheelsim.controls import ControlInput
from wheelsim.simulator import WheelSimulator
from wheelsim.drop_analysis import run_drop_analysis

__all__ = [
    "WheelParams",
    "ContactState",
    "Particle",
    "WheelState",
    "Terrain",
    "ground_func",
    "ContactLocator",
    "Dynamics",
    "ParticlePool",
    "SparkEmitter",
    "ControlInput",
    "WheelSimulator",
    "run_drop_analysis",
]
