import numpy as np
from functools import reduce
from .core import SDFNode, GLSLContext, SENTINEL_DISTANCE, SENTINEL_GLSL, CODEGEN_DEFAULTS
from .registry import BOOLEAN_KINDS, UTILITY_KINDS
from .utils import _glsl_format, _vec2, _smooth_union, _smooth_subtraction, _smooth_intersection, _xor

# Optional operation fields, in the order they are documented.
OPTIONAL_PARAMS = (
    'op_radius', 'thickness', 'period', 'axis', 'offset',
    'strength', 'frequency', 'amplitude', 'min_limit', 'max_limit',
)
AXES = ('x', 'y')

class Operation(SDFNode):
    """
    Base class for internal nodes: an ordered tuple of children plus a blend
    factor and a sparse set of optional parameters.
    """

    def __init__(self, kind: str, children=(), blend: float = 0.0,
                 op_radius: float = None, thickness: float = None, period=None,
                 axis: str = None, offset: float = None, strength: float = None,
                 frequency: float = None, amplitude: float = None,
                 min_limit: float = None, max_limit: float = None,
                 id: str = None, name: str = None, visible: bool = True, collapsed: bool = False):
        super().__init__(kind, id=id, name=name, visible=visible, collapsed=collapsed)
        self.children = children
        self.blend = blend
        self.op_radius = op_radius
        self.thickness = thickness
        self.period = period
        self.axis = axis
        self.offset = offset
        self.strength = strength
        self.frequency = frequency
        self.amplitude = amplitude
        self.min_limit = min_limit
        self.max_limit = max_limit
        self._normalize()

    def _normalize(self):
        self.children = tuple(self.children)
        self.blend = float(self.blend)
        if self.period is not None:
            self.period = _vec2(self.period)
        if self.axis is not None and self.axis not in AXES:
            raise ValueError(f"Axis must be 'x' or 'y', got {self.axis!r}")

    def _params(self) -> dict:
        params = {'blend': self.blend}
        for name in OPTIONAL_PARAMS:
            val = getattr(self, name)
            if val is None:
                continue
            if isinstance(val, str):
                params[name] = val
            elif isinstance(val, (list, tuple)):
                params[name] = _vec2(val)
            else:
                params[name] = float(val)
        return params

    def _kwargs(self) -> dict:
        """Constructor arguments reproducing this node, minus its kind."""
        kwargs = {name: getattr(self, name) for name in OPTIONAL_PARAMS}
        kwargs.update(children=self.children, blend=self.blend, id=self.id, name=self.name,
                      visible=self.visible, collapsed=self.collapsed)
        return kwargs

    def _param(self, name, default_key=None):
        val = getattr(self, name)
        if val is None:
            return CODEGEN_DEFAULTS[default_key or name]
        return val

    # --- Hooks overridden per category ---

    def _fold_mode(self):
        """Returns (mode, smooth) where mode is 'union', 'subtract', 'intersect' or 'xor'."""
        return 'union', self.blend != 0

    def _bind_point(self, ctx: GLSLContext) -> GLSLContext:
        """Rebinds the point passed to children. Identity for non-domain kinds."""
        return ctx

    def _post_process(self, expr: str) -> str:
        return expr

    def _point_callable(self):
        return None

    def _post_callable(self):
        return None

    # --- GLSL ---

    def to_glsl(self, ctx: GLSLContext) -> str:
        if not self.children:
            return SENTINEL_GLSL
        sub_ctx = self._bind_point(ctx)
        child_vars = [c.to_glsl(sub_ctx) for c in self.children]
        if sub_ctx is not ctx:
            ctx.merge_from(sub_ctx)
        return self._post_process(self._fold(ctx, child_vars))

    def _fold(self, ctx: GLSLContext, child_vars: list) -> str:
        mode, smooth = self._fold_mode()
        k = _glsl_format(self.blend)
        result = child_vars[0]

        if mode == 'subtract':
            if len(child_vars) < 2:
                return result
            cutter = child_vars[1]
            for i in range(2, len(child_vars)):
                cutter = ctx.new_variable('float', ctx.variable_name('cutter', self.id, i),
                                          f"min({cutter}, {child_vars[i]})")
            if smooth:
                expr = f"opSmoothSubtraction({cutter}, {result}, {k})"
            else:
                expr = f"max({result}, -{cutter})"
            return ctx.new_variable('float', ctx.variable_name('result', self.id), expr)

        if mode == 'intersect':
            combine = (lambda a, b: f"opSmoothIntersection({a}, {b}, {k})") if smooth else (lambda a, b: f"max({a}, {b})")
        elif mode == 'xor':
            combine = lambda a, b: f"opXor({a}, {b})"
        else:
            combine = (lambda a, b: f"opSmoothUnion({a}, {b}, {k})") if smooth else (lambda a, b: f"min({a}, {b})")

        for i in range(1, len(child_vars)):
            result = ctx.new_variable('float', ctx.variable_name('fold', self.id, i), combine(result, child_vars[i]))
        return result

    # --- NumPy ---

    def to_callable(self):
        if not self.children:
            return lambda p: np.full(len(p), SENTINEL_DISTANCE)

        transform = self._point_callable()
        fold = self._fold_callable([c.to_callable() for c in self.children])
        post = self._post_callable()

        def _callable(points: np.ndarray) -> np.ndarray:
            q = np.asarray(points, dtype=float)
            if transform:
                q = transform(q)
            d = fold(q)
            return post(d) if post else d
        return _callable

    def _fold_callable(self, child_callables):
        mode, smooth = self._fold_mode()
        k = self.blend

        if mode == 'subtract':
            def _subtract(p):
                dists = [c(p) for c in child_callables]
                if len(dists) < 2:
                    return dists[0]
                cutter = reduce(np.minimum, dists[1:])
                if smooth:
                    return _smooth_subtraction(cutter, dists[0], k)
                return np.maximum(dists[0], -cutter)
            return _subtract

        if mode == 'intersect':
            combine = (lambda a, b: _smooth_intersection(a, b, k)) if smooth else np.maximum
        elif mode == 'xor':
            combine = _xor
        else:
            combine = (lambda a, b: _smooth_union(a, b, k)) if smooth else np.minimum
        return lambda p: reduce(combine, [c(p) for c in child_callables])


class Compositor(Operation):
    """
    Folds sibling distances into one with a boolean combinator.
    Children are combined left to right in stored order.
    """
    kinds = BOOLEAN_KINDS

    _MODES = {
        'union': 'union', 'smooth_union': 'union',
        'subtract': 'subtract', 'smooth_subtract': 'subtract',
        'intersect': 'intersect', 'smooth_intersect': 'intersect',
        'xor': 'xor',
    }

    def _fold_mode(self):
        mode = self._MODES[self.kind]
        if mode == 'xor':
            return mode, False
        return mode, self.kind.startswith('smooth_') or self.blend != 0


class Group(Operation):
    """
    Pure grouping: a hard union of the children. The node's own blend is kept
    in the IR but never used.
    """
    kinds = UTILITY_KINDS

    def __init__(self, children=(), **kwargs):
        kwargs.pop('kind', None)
        super().__init__('group', children, **kwargs)

    def _fold_mode(self):
        return 'union', False
