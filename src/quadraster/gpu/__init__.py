"""GPU rendering support for quadraster.

The GPU path evaluates the same per-pixel coverage as the software
rasterizer in a fragment shader. This package provides the shader source,
host-side curve packing and the immutable per-frame view transform; creating
the window and GL context is left to the host application.

Key classes:
- ShaderProgramSource: Vertex and fragment GLSL for a curve capacity
- ViewTransform: Immutable view state with model/projection matrices
"""

from quadraster.gpu.shader import (
    DEFAULT_CURVE_CAPACITY,
    QUAD_INDICES,
    VERTEX_SHADER,
    ShaderProgramSource,
    build_program_source,
    pack_curve_uniforms,
    quad_vertices,
)
from quadraster.gpu.transform import (
    KEY_BINDINGS,
    ViewTransform,
    apply_key,
    column_major,
)

__all__ = [
    "DEFAULT_CURVE_CAPACITY",
    "KEY_BINDINGS",
    "QUAD_INDICES",
    "VERTEX_SHADER",
    "ShaderProgramSource",
    "ViewTransform",
    "apply_key",
    "build_program_source",
    "column_major",
    "pack_curve_uniforms",
    "quad_vertices",
]
