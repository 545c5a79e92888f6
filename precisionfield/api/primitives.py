import numpy as np
from .core import SDFNode, GLSLContext, CODEGEN_DEFAULTS
from .registry import PRIMITIVE_KINDS
from .utils import _glsl_format, _vec2, _rotate

# --- Distance functions (NumPy mirrors of primitives.glsl) ---

def _sd_circle(p, r):
    return np.linalg.norm(p, axis=-1) - r

def _sd_box(p, b):
    d = np.abs(p) - np.asarray(b, dtype=float)
    outside = np.linalg.norm(np.maximum(d, 0.0), axis=-1)
    inside = np.minimum(np.maximum(d[:, 0], d[:, 1]), 0.0)
    return outside + inside

def _sd_capsule(p, h, r):
    q = p.copy()
    q[:, 1] -= np.clip(q[:, 1], -h * 0.5, h * 0.5)
    return np.linalg.norm(q, axis=-1) - r

class Primitive(SDFNode):
    """
    A leaf shape placed in the plane.

    Args:
        kind (str): One of 'circle', 'box' or 'capsule'.
        position (tuple): Translation of the shape's local origin.
        rotation (float): Rotation in radians.
        scale (tuple): Non-uniform scale. Carried through the IR, not used by codegen.
        radius (float, optional): Circle or capsule radius.
        size (tuple, optional): Box half-extents.
        length (float, optional): Capsule segment length.
    """
    kinds = PRIMITIVE_KINDS

    def __init__(self, kind: str, position=(0.0, 0.0), rotation: float = 0.0, scale=(1.0, 1.0),
                 radius: float = None, size=None, length: float = None,
                 id: str = None, name: str = None, visible: bool = True, collapsed: bool = False):
        super().__init__(kind, id=id, name=name, visible=visible, collapsed=collapsed)
        self.position = position
        self.rotation = rotation
        self.scale = scale
        self.radius = radius
        self.size = size
        self.length = length
        self._normalize()

    def _normalize(self):
        self.position = _vec2(self.position)
        self.rotation = float(self.rotation)
        self.scale = _vec2(self.scale)
        if isinstance(self.size, (int, float)):
            self.size = (self.size, self.size)
        if self.size is not None:
            self.size = _vec2(self.size)

    def _params(self) -> dict:
        params = {
            'position': self.position,
            'rotation': self.rotation,
            'scale': self.scale,
        }
        if self.radius is not None: params['radius'] = float(self.radius)
        if self.size is not None: params['size'] = self.size
        if self.length is not None: params['length'] = float(self.length)
        return params

    def _shape_args(self):
        if self.kind == 'circle':
            r = self.radius if self.radius is not None else CODEGEN_DEFAULTS['radius']
            return (float(r),)
        if self.kind == 'box':
            return (self.size if self.size is not None else CODEGEN_DEFAULTS['size'],)
        h = self.length if self.length is not None else CODEGEN_DEFAULTS['capsule_length']
        r = self.radius if self.radius is not None else CODEGEN_DEFAULTS['capsule_radius']
        return (float(h), float(r))

    def to_glsl(self, ctx: GLSLContext) -> str:
        p_var = ctx.new_variable('vec2', ctx.variable_name('point', self.id),
                                 f"{ctx.p} - {_glsl_format(self.position)}")
        if self.rotation != 0:
            ctx.add_statement(f"{p_var} = rotate({p_var}, {_glsl_format(self.rotation)});")

        args = ", ".join(_glsl_format(a) for a in self._shape_args())
        func_name = _GLSL_FUNCTIONS[self.kind]
        return ctx.new_variable('float', ctx.variable_name('distance', self.id), f"{func_name}({p_var}, {args})")

    def to_callable(self):
        offset = np.array(self.position)
        angle = self.rotation
        dist_func = _DISTANCE_FUNCTIONS[self.kind]
        args = self._shape_args()

        def _callable(points: np.ndarray) -> np.ndarray:
            q = np.asarray(points, dtype=float) - offset
            if angle != 0:
                q = _rotate(q, angle)
            return dist_func(q, *args)
        return _callable

_GLSL_FUNCTIONS = {'circle': 'sdCircle', 'box': 'sdBox', 'capsule': 'sdCapsule'}
_DISTANCE_FUNCTIONS = {'circle': _sd_circle, 'box': _sd_box, 'capsule': _sd_capsule}

def circle(radius: float = None, position=(0.0, 0.0), rotation: float = 0.0, **kwargs) -> Primitive:
    """
    Creates a circle.

    Args:
        radius (float, optional): The radius. Left unset, codegen uses 0.5.
        position (tuple, optional): The center. Defaults to the origin.
    """
    return Primitive('circle', position=position, rotation=rotation, radius=radius, **kwargs)

def box(size=None, position=(0.0, 0.0), rotation: float = 0.0, **kwargs) -> Primitive:
    """
    Creates an axis-aligned box before rotation.

    Args:
        size (float or tuple, optional): Half-extents. A float gives a square.
                                         Left unset, codegen uses (0.5, 0.5).
    """
    return Primitive('box', position=position, rotation=rotation, size=size, **kwargs)

def capsule(radius: float = None, length: float = None, position=(0.0, 0.0), rotation: float = 0.0, **kwargs) -> Primitive:
    """
    Creates a vertical capsule: a segment of the given length swept by a circle.
    """
    return Primitive('capsule', position=position, rotation=rotation, radius=radius, length=length, **kwargs)
