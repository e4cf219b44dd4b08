"""
Control input adapter: six command flags to velocity nudges
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from wheelsim.params import CONTROL_ROTATION_STEP, CONTROL_VELOCITY_STEP

if TYPE_CHECKING:
    from wheelsim.state import WheelState


@dataclass(frozen=True)
class ControlInput:
    """Directional and rotational command flags for one step"""

    left: bool = False  # -x
    right: bool = False  # +x
    up: bool = False  # +y
    down: bool = False  # -y
    rotate_ccw: bool = False  # +angular velocity
    rotate_cw: bool = False  # -angular velocity

    @property
    def any_active(self) -> bool:
        return any((self.left, self.right, self.up, self.down, self.rotate_ccw, self.rotate_cw))

    def apply(self, body: "WheelState") -> None:
        """Add the per-step deltas of every active flag to the body"""
        dx = CONTROL_VELOCITY_STEP
        dr = CONTROL_ROTATION_STEP

        nudge = np.zeros(2)
        if self.left:
            nudge[0] -= dx
        if self.right:
            nudge[0] += dx
        if self.up:
            nudge[1] += dx
        if self.down:
            nudge[1] -= dx
        body.velocity = body.velocity + nudge

        if self.rotate_ccw:
            body.angular_velocity += dr
        if self.rotate_cw:
            body.angular_velocity -= dr


NO_INPUT = ControlInput()
