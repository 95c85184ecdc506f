"""GLSL source and uniform packing for GPU coverage rendering.

The fragment shader runs the same dual-axis coverage computation as the
software rasterizer, once per covered fragment. The curve set is uploaded as a
fixed-size `vec2 u_curves[]` uniform array, three points per segment. The
ray scale comes from screen-space derivatives: `1 / fwidth(coord)`.

Geometry is a single textured quad spanning clip space, with texture
coordinates (0, 0) at the top-left corner, so curve-space y grows downward on
screen like the normalized software mapping.
"""

from dataclasses import dataclass
from string import Template

import numpy as np
import numpy.typing as npt

from quadraster.core.raycast import LINEAR_EPSILON
from quadraster.domain import CurveSet
from quadraster.exceptions import CurveCapacityError

POINTS_PER_CURVE = 3

# Conservative bound for vec2 uniform arrays on GL 3.3 hardware.
DEFAULT_CURVE_CAPACITY = 128

VERTEX_SHADER = """\
#version 330 core

layout(location = 0) in vec2 pos;
layout(location = 1) in vec2 coord;
layout(location = 2) in vec4 color;

uniform mat4 u_model;
uniform mat4 u_projection;

out vec2 o_coord;
out vec4 o_color;

void main() {
    gl_Position = u_projection * u_model * vec4(pos.xy, 0.0, 1.0);
    o_coord = coord;
    o_color = color;
}
"""

_FRAGMENT_TEMPLATE = Template("""\
#version 330 core

in vec2 o_coord;
in vec4 o_color;
out vec4 frag_color;

#define NUM_BEZIER_CURVES $curve_count
#define NUM_CONTROL_POINTS 3
#define LINEAR_EPSILON $epsilon

uniform vec2 u_curves[NUM_BEZIER_CURVES * NUM_CONTROL_POINTS];

float eval_curve(float v1, float v2, float v3, float t) {
    float mt = 1.0 - t;
    return mt * mt * v1 + 2.0 * t * mt * v2 + t * t * v3;
}

// Signed coverage of a ray along +x. Callers swizzle .yx for the vertical ray.
float trace(vec2 sample_pos, float ppem, bool vertical) {
    float coverage = 0.0;

    for(int i = 0; i < NUM_BEZIER_CURVES * NUM_CONTROL_POINTS; i += NUM_CONTROL_POINTS) {
        vec2 p1 = u_curves[i] - sample_pos;
        vec2 p2 = u_curves[i + 1] - sample_pos;
        vec2 p3 = u_curves[i + 2] - sample_pos;
        if(vertical) {
            p1 = p1.yx;
            p2 = p2.yx;
            p3 = p3.yx;
        }

        float a = p1.y - 2.0 * p2.y + p3.y;
        float b = p1.y - p2.y;
        float c = p1.y;

        float t1 = 0.0;
        float t2 = 0.0;

        if(abs(a) < LINEAR_EPSILON) {
            if(abs(b) < LINEAR_EPSILON) {
                continue;
            }
            t1 = c / (2.0 * b);
            t2 = t1;
        }
        else {
            float root = sqrt(max(b * b - a * c, 0.0));
            t1 = (b - root) / a;
            t2 = (b + root) / a;
        }

        int num = ((p1.y > 0.0) ? 2 : 0) + ((p2.y > 0.0) ? 4 : 0) + ((p3.y > 0.0) ? 8 : 0);
        int sh = 0x2E74 >> num;

        if((sh & 1) != 0) {
            coverage += clamp(eval_curve(p1.x, p2.x, p3.x, t1) * ppem + 0.5, 0.0, 1.0);
        }
        if((sh & 2) != 0) {
            coverage -= clamp(eval_curve(p1.x, p2.x, p3.x, t2) * ppem + 0.5, 0.0, 1.0);
        }
    }

    return coverage;
}

void main() {
    vec2 ppem = vec2(1.0 / fwidth(o_coord.x), 1.0 / fwidth(o_coord.y));

    float coverage_h = min(abs(trace(o_coord, ppem.x, false)), 1.0);
    float coverage_v = min(abs(trace(o_coord, ppem.y, true)), 1.0);
    float avg_coverage = (coverage_h + coverage_v) / 2.0;
    frag_color = vec4(o_color * avg_coverage);
}
""")

# Interleaved pos.xy, coord.uv, color.rgba per vertex.
_QUAD_LAYOUT = (
    (-1.0, 1.0, 0.0, 0.0),  # top left
    (1.0, 1.0, 1.0, 0.0),  # top right
    (1.0, -1.0, 1.0, 1.0),  # bottom right
    (-1.0, -1.0, 0.0, 1.0),  # bottom left
)

QUAD_INDICES = np.array([0, 1, 2, 2, 3, 0], dtype=np.uint32)


@dataclass(frozen=True)
class ShaderProgramSource:
    """Vertex and fragment shader source for one curve capacity."""

    vertex: str
    fragment: str
    curve_count: int


def build_program_source(
    curve_count: int,
    epsilon: float = LINEAR_EPSILON,
) -> ShaderProgramSource:
    """Generate shader source sized for a number of curves.

    Args:
        curve_count: Length of the curve uniform array, in segments
        epsilon: Threshold for the linear root fallback

    Raises:
        ValueError: If curve_count is not positive
    """
    if curve_count <= 0:
        raise ValueError(f"curve_count must be positive, got {curve_count}")

    fragment = _FRAGMENT_TEMPLATE.substitute(
        curve_count=curve_count,
        epsilon=f"{epsilon:.8f}",
    )
    return ShaderProgramSource(vertex=VERTEX_SHADER, fragment=fragment, curve_count=curve_count)


def pack_curve_uniforms(
    curves: CurveSet,
    capacity: int = DEFAULT_CURVE_CAPACITY,
) -> npt.NDArray[np.float32]:
    """Flatten a curve set into the `u_curves` uniform layout.

    Args:
        curves: Segments to upload
        capacity: Maximum segments the shader array holds

    Returns:
        float32 array of shape (3 * len(curves), 2), one row per vec2

    Raises:
        CurveCapacityError: If the curve set exceeds the capacity
    """
    if len(curves) > capacity:
        raise CurveCapacityError(len(curves), capacity)

    return curves.as_array().reshape(-1, 2).astype(np.float32)


def quad_vertices(tint: tuple[int, int, int] = (255, 128, 64)) -> npt.NDArray[np.float32]:
    """Vertex data for the full-screen quad, colored with a tint.

    Returns:
        float32 array of shape (4, 8): pos.xy, coord.uv, color.rgba
    """
    color = [channel / 255.0 for channel in tint] + [1.0]
    return np.array([list(vertex) + color for vertex in _QUAD_LAYOUT], dtype=np.float32)
