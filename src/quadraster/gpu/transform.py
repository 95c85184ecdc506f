"""Immutable per-frame view transform for the GPU preview.

A ViewTransform holds everything the interactive preview changes between
frames: rotation about the y axis, translation, scale, field of view and
viewport size. Input handling produces a new transform instead of mutating
shared state; the renderer reads the model and projection matrices from the
value it is handed for the frame.

Matrices follow the column-vector convention (p' = M @ p). Use
`column_major()` to obtain the layout expected by glUniformMatrix4fv with
transpose disabled.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, replace

import numpy as np
import numpy.typing as npt

FOV_MIN = 44.0
FOV_MAX = 46.7

SCALE_STEP = 2.0
ROTATE_STEP = 2.0

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class ViewTransform:
    """View state for one frame.

    Attributes:
        rotation_y: Accumulated rotation about the y axis in radians
        translation: Model translation (x, y, z)
        scale: Model scale (x, y, z)
        fov: Vertical field of view in degrees
        width: Viewport width in pixels
        height: Viewport height in pixels
        translate_step: Translation speed in units per second
        near: Near clip plane distance
        far: Far clip plane distance
    """

    rotation_y: float = 0.0
    translation: Vec3 = (0.0, 0.0, -2.0)
    scale: Vec3 = (1.0, 1.0, 1.0)
    fov: float = 45.0
    width: int = 800
    height: int = 800
    translate_step: float = 1.5
    near: float = 0.1
    far: float = 100.0

    @property
    def aspect(self) -> float:
        """Viewport aspect ratio."""
        return self.width / self.height

    def translated(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "ViewTransform":
        """Return a transform moved by (dx, dy, dz)."""
        x, y, z = self.translation
        return replace(self, translation=(x + dx, y + dy, z + dz))

    def scaled(self, dx: float = 0.0, dy: float = 0.0) -> "ViewTransform":
        """Return a transform with scale changed by (dx, dy)."""
        x, y, z = self.scale
        return replace(self, scale=(x + dx, y + dy, z))

    def rotated(self, angle: float) -> "ViewTransform":
        """Return a transform rotated by `angle` radians about the y axis."""
        return replace(self, rotation_y=self.rotation_y + angle)

    def zoomed(self, wheel: float, duration: float) -> "ViewTransform":
        """Apply a mouse wheel step.

        The field of view narrows with the wheel and is clamped to
        [FOV_MIN, FOV_MAX]; translation speed follows the zoom.
        """
        fov = min(max(self.fov - wheel * duration, FOV_MIN), FOV_MAX)
        step = self.translate_step - wheel * duration * 1.5
        return replace(self, fov=fov, translate_step=step)

    def resized(self, width: int, height: int) -> "ViewTransform":
        """Return a transform for a new viewport size.

        Raises:
            ValueError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport size must be positive, got {width}x{height}")
        return replace(self, width=width, height=height)

    def model_matrix(self) -> npt.NDArray[np.float32]:
        """Translation, then rotation, then scale (T @ R @ S)."""
        translate = np.identity(4)
        translate[:3, 3] = self.translation

        c = math.cos(self.rotation_y)
        s = math.sin(self.rotation_y)
        rotate = np.array(
            [
                [c, 0.0, s, 0.0],
                [0.0, 1.0, 0.0, 0.0],
                [-s, 0.0, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

        scale = np.diag([*self.scale, 1.0])
        return (translate @ rotate @ scale).astype(np.float32)

    def projection_matrix(self) -> npt.NDArray[np.float32]:
        """Right-handed perspective projection with [-1, 1] clip depth."""
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        depth = self.far - self.near

        projection = np.zeros((4, 4))
        projection[0, 0] = f / self.aspect
        projection[1, 1] = f
        projection[2, 2] = -(self.far + self.near) / depth
        projection[2, 3] = -(2.0 * self.far * self.near) / depth
        projection[3, 2] = -1.0
        return projection.astype(np.float32)


def column_major(matrix: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Flatten a matrix in column-major order for uniform upload."""
    return np.ascontiguousarray(matrix.T, dtype=np.float32).reshape(-1)


KEY_BINDINGS: dict[str, Callable[[ViewTransform, float], ViewTransform]] = {
    "up": lambda v, d: v.translated(dy=-v.translate_step * d),
    "down": lambda v, d: v.translated(dy=v.translate_step * d),
    "left": lambda v, d: v.translated(dx=v.translate_step * d),
    "right": lambda v, d: v.translated(dx=-v.translate_step * d),
    "j": lambda v, d: v.scaled(dx=SCALE_STEP * d),
    "k": lambda v, d: v.scaled(dx=-SCALE_STEP * d),
    "l": lambda v, d: v.scaled(dy=-SCALE_STEP * d),
    "semicolon": lambda v, d: v.scaled(dy=SCALE_STEP * d),
    "q": lambda v, d: v.scaled(dx=-SCALE_STEP * d, dy=-SCALE_STEP * d),
    "e": lambda v, d: v.scaled(dx=SCALE_STEP * d, dy=SCALE_STEP * d),
    "a": lambda v, d: v.rotated(ROTATE_STEP * d),
    "d": lambda v, d: v.rotated(-ROTATE_STEP * d),
}


def apply_key(transform: ViewTransform, key: str, duration: float) -> ViewTransform:
    """Return the transform after one key press lasting `duration` seconds.

    Unbound keys leave the transform unchanged.
    """
    action = KEY_BINDINGS.get(key)
    if action is None:
        return transform
    return action(transform, duration)
