"""Orbit and first-person camera controls driven by damped values.

Controls never listen to input devices themselves. The host collects an
input snapshot every frame and passes it to ``update``; the controls answer
with the camera position (and, for first-person, the look-at point). The
world is y-up; spherical coordinates follow the usual graphics convention
with ``phi`` measured from +y and ``theta = atan2(x, z)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .convergence import DampedValue, clamp

EPS = 1e-6
UP = np.array([0.0, 1.0, 0.0])


def to_spherical(vector: Sequence[float]) -> Tuple[float, float, float]:
    """Return ``(radius, phi, theta)`` for a cartesian vector."""
    x, y, z = (float(value) for value in vector)
    radius = math.sqrt(x * x + y * y + z * z)
    if radius == 0:
        return 0.0, 0.0, 0.0
    theta = math.atan2(x, z)
    phi = math.acos(clamp(y / radius, -1.0, 1.0))
    return radius, phi, theta


def from_spherical(radius: float, phi: float, theta: float) -> np.ndarray:
    phi = clamp(phi, EPS, math.pi - EPS)
    sin_phi_radius = math.sin(phi) * radius
    return np.array(
        [
            sin_phi_radius * math.sin(theta),
            math.cos(phi) * radius,
            sin_phi_radius * math.cos(theta),
        ]
    )


@dataclass(frozen=True)
class OrbitInput:
    pointer: Tuple[float, float] | None = None  # only while the button is held
    wheel: float = 0.0
    pinch: float | None = None  # distance between two touches


@dataclass
class OrbitConfig:
    enable_rotate: bool = True
    rotate_speed: float = 1.0
    damping: float = 0.1
    enable_zoom: bool = True
    zoom_speed: float = 0.5
    min_distance: float = 1.0
    max_distance: float = 3.0


class OrbitControls:
    def __init__(
        self,
        position: Sequence[float],
        target: Sequence[float] = (0.0, 0.0, 0.0),
        config: OrbitConfig | None = None,
    ):
        self.config = config or OrbitConfig()
        self._target = np.array(target, dtype=float)

        radius, phi, theta = to_spherical(np.asarray(position, dtype=float) - self._target)
        damping = self.config.damping
        self._distance = DampedValue(
            radius, radius, damping, self.config.min_distance, self.config.max_distance
        )
        self._polar_angle = DampedValue(phi, phi, damping, 0.0, math.pi)
        self._azimuth_angle = DampedValue(theta, theta, damping)

        self._previous_pointer: Tuple[float, float] | None = None
        self._previous_pinch: float | None = None

    @property
    def target(self) -> np.ndarray:
        return self._target.copy()

    def set_target(self, x: float, y: float, z: float) -> None:
        self._target = np.array([x, y, z], dtype=float)

    @property
    def distance(self) -> DampedValue:
        return self._distance

    @property
    def polar_angle(self) -> DampedValue:
        return self._polar_angle

    @property
    def azimuth_angle(self) -> DampedValue:
        return self._azimuth_angle

    @property
    def position(self) -> np.ndarray:
        offset = from_spherical(
            self._distance.start, self._polar_angle.start, self._azimuth_angle.start
        )
        return self._target + offset

    def set_position(self, x: float, y: float, z: float) -> None:
        radius, phi, theta = to_spherical(np.array([x, y, z], dtype=float) - self._target)
        # Stay on the current winding, otherwise the camera spins around
        # once for every full turn it has made before.
        turns = round(self._azimuth_angle.start / (2 * math.pi))
        self._azimuth_angle.set_end(turns * 2 * math.pi + theta)
        self._polar_angle.set_end(phi)
        self._distance.set_end(radius)

    def set_distance_from_target(self, value: float, transition: bool = True) -> None:
        start = self._distance.start if transition else value
        self._distance.reset(start, value, self._distance.min, value * 1.2)

    def zoom_in(self) -> None:
        self._distance.decrease_end_by(20)

    def zoom_out(self) -> None:
        self._distance.increase_end_by(20)

    def _rotate(self, pointer: Tuple[float, float]) -> None:
        if self._previous_pointer is not None:
            delta_x = math.radians(pointer[0] - self._previous_pointer[0]) * self.config.rotate_speed
            delta_y = math.radians(pointer[1] - self._previous_pointer[1]) * self.config.rotate_speed
            self._polar_angle.decrease_end_by(delta_y)
            self._azimuth_angle.decrease_end_by(delta_x)
        self._previous_pointer = pointer

    def _pinch(self, distance: float) -> None:
        if self._previous_pinch is not None:
            delta = (distance - self._previous_pinch) * self.config.zoom_speed / 20
            self._distance.decrease_end_by(delta)
        self._previous_pinch = distance

    def apply_input(self, state: OrbitInput) -> None:
        if state.pointer is not None and self.config.enable_rotate:
            self._rotate(state.pointer)
        else:
            self._previous_pointer = None

        if state.pinch is not None:
            self._pinch(state.pinch)
        else:
            self._previous_pinch = None

        if state.wheel and self.config.enable_zoom:
            self._distance.increase_end_by(math.copysign(self.config.zoom_speed, state.wheel))

    def update(self, state: OrbitInput | None = None) -> np.ndarray:
        """Advance one frame and return the camera position."""
        if state is not None:
            self.apply_input(state)
        self._distance.update()
        self._azimuth_angle.update()
        self._polar_angle.update()
        return self.position


@dataclass(frozen=True)
class FPSInput:
    pointer: Tuple[float, float] | None = None
    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False


class FPSControls:
    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        direction: Sequence[float] = (0.0, 0.0, -1.0),
        speed: float = 1.0,
        sensitivity: float = 1.0,
        damping: float = 0.1,
    ):
        self._position = np.array(position, dtype=float)
        self._sensitivity = sensitivity
        self._speed = speed

        _, phi, theta = to_spherical(direction)
        self._polar_angle = DampedValue(phi, phi, damping, 0.0, math.pi)
        self._azimuth_angle = DampedValue(theta, theta, damping)
        self._forward_speed = DampedValue(0.0, 0.0, damping, -speed, speed)
        self._left_speed = DampedValue(0.0, 0.0, damping, -speed, speed)
        self._previous_pointer: Tuple[float, float] | None = None

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def polar_angle(self) -> DampedValue:
        return self._polar_angle

    @property
    def azimuth_angle(self) -> DampedValue:
        return self._azimuth_angle

    @property
    def direction(self) -> np.ndarray:
        return from_spherical(1.0, self._polar_angle.start, self._azimuth_angle.start)

    @property
    def target(self) -> np.ndarray:
        return self._position + self.direction

    def set_speed(self, value: float) -> None:
        self._speed = value
        self._forward_speed.reset(0.0, 0.0, -value, value)
        self._left_speed.reset(0.0, 0.0, -value, value)

    def set_sensitivity(self, value: float) -> None:
        self._sensitivity = value

    def set_direction(self, direction: Sequence[float]) -> None:
        _, phi, theta = to_spherical(direction)
        self._polar_angle.reset(phi, phi)
        self._azimuth_angle.reset(theta, theta)

    def _rotate(self, pointer: Tuple[float, float]) -> None:
        if self._previous_pointer is not None:
            delta_x = math.radians(pointer[0] - self._previous_pointer[0]) * self._sensitivity / 10
            delta_y = math.radians(pointer[1] - self._previous_pointer[1]) * self._sensitivity / 10
            self._polar_angle.increase_end_by(delta_y)
            self._azimuth_angle.decrease_end_by(delta_x)
        self._previous_pointer = pointer

    def apply_input(self, state: FPSInput) -> None:
        if state.pointer is not None:
            self._rotate(state.pointer)
        else:
            self._previous_pointer = None

        forward = int(state.forward) - int(state.backward)
        left = int(state.left) - int(state.right)
        self._forward_speed.set_end(forward * self._speed)
        self._left_speed.set_end(left * self._speed)

    def update(self, state: FPSInput | None = None) -> Tuple[np.ndarray, np.ndarray]:
        """Advance one frame and return ``(position, target)``."""
        if state is not None:
            self.apply_input(state)
        self._azimuth_angle.update()
        self._polar_angle.update()
        self._forward_speed.update()
        self._left_speed.update()

        direction = self.direction
        left = np.cross(UP, direction)
        norm = np.linalg.norm(left)
        if norm > 0:
            left = left / norm
        self._position = (
            self._position
            + direction * self._forward_speed.start
            + left * self._left_speed.start
        )
        return self.position, self._position + direction
