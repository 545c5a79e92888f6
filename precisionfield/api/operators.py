import numpy as np
from .core import GLSLContext, SENTINEL_DISTANCE, SENTINEL_GLSL
from .registry import lookup, PRIMITIVE, BOOLEAN, METRIC, UTILITY
from .compositors import Operation, Compositor, Group
from .utils import _glsl_format, _glsl_mod, _rotate

# Maximum number of children read by a displace node: base and source.
DISPLACE_MAX_CHILDREN = 2

class DomainOperator(Operation):
    """
    Transforms the point before it reaches the children, then unions the
    children like any other operation.
    """
    kinds = ('repeat', 'mirror', 'bend', 'twist')

    def _is_x(self) -> bool:
        return self._param('axis') == 'x'

    def _point_expr(self, p: str) -> str:
        if self.kind == 'repeat':
            return f"opRepeat({p}, {_glsl_format(self._param('period'))})"
        if self.kind == 'mirror':
            return f"opMirror({p}, {_glsl_format(self._param('offset'))}, {_glsl_format(self._is_x())})"
        if self.kind == 'bend':
            return f"opBend({p}, {_glsl_format(self._param('strength'))}, {_glsl_format(self._is_x())})"
        return f"opTwist({p}, {_glsl_format(self._param('strength'))})"

    def _bind_point(self, ctx: GLSLContext) -> GLSLContext:
        transformed_p = ctx.new_variable('vec2', ctx.variable_name('point', self.id), self._point_expr(ctx.p))
        return ctx.with_p(transformed_p)

    def _point_callable(self):
        if self.kind == 'repeat':
            period = np.array(self._param('period'), dtype=float)
            return lambda p: _glsl_mod(p + 0.5 * period, period) - 0.5 * period

        is_x = self._is_x()
        axis = 0 if is_x else 1

        if self.kind == 'mirror':
            offset = float(self._param('offset'))
            def _mirror(p):
                q = p.copy()
                q[:, axis] = np.abs(q[:, axis] - offset)
                return q
            return _mirror

        k = float(self._param('strength'))
        if self.kind == 'bend':
            return lambda p: _rotate(p, k * p[:, axis])
        return lambda p: _rotate(p, k * np.linalg.norm(p, axis=-1))


class Displace(Operation):
    """
    Offsets the distance of the first child (the base) by the second child
    (the source) scaled by strength. Without a source a fixed sine pattern of
    the incoming point is used instead.
    """
    kinds = ('displace',)

    def _strength(self) -> float:
        return float(self._param('strength', 'displace_strength'))

    def to_glsl(self, ctx: GLSLContext) -> str:
        if not self.children:
            ctx.warn(f"displace node '{self.id}' has no children; it contributes no field.")
            return SENTINEL_GLSL
        if len(self.children) > DISPLACE_MAX_CHILDREN:
            ctx.warn(f"displace node '{self.id}' has {len(self.children)} children; "
                     f"only the first {DISPLACE_MAX_CHILDREN} are used.")

        base_var = self.children[0].to_glsl(ctx)
        strength = _glsl_format(self._strength())
        if len(self.children) >= 2:
            source_var = self.children[1].to_glsl(ctx)
            expr = f"{base_var} + {strength} * {source_var}"
        else:
            expr = f"{base_var} + {strength} * sin({ctx.p}.x * 4.0) * sin({ctx.p}.y * 4.0)"
        return ctx.new_variable('float', ctx.variable_name('modulated', self.id), expr)

    def to_callable(self):
        if not self.children:
            return lambda p: np.full(len(p), SENTINEL_DISTANCE)
        base = self.children[0].to_callable()
        source = self.children[1].to_callable() if len(self.children) >= 2 else None
        strength = self._strength()

        def _callable(points: np.ndarray) -> np.ndarray:
            p = np.asarray(points, dtype=float)
            if source:
                return base(p) + strength * source(p)
            return base(p) + strength * np.sin(p[:, 0] * 4.0) * np.sin(p[:, 1] * 4.0)
        return _callable


class MetricOperator(Operation):
    """Post-processes the folded distance of its children."""
    kinds = ('dilate', 'erode', 'shell', 'invert', 'clamp')

    def _post_process(self, expr: str) -> str:
        if self.kind == 'dilate':
            return f"({expr} - {_glsl_format(self._param('op_radius'))})"
        if self.kind == 'erode':
            return f"({expr} + {_glsl_format(self._param('op_radius'))})"
        if self.kind == 'shell':
            return f"(abs({expr}) - {_glsl_format(self._param('thickness'))})"
        if self.kind == 'invert':
            return f"(-{expr})"
        lo, hi = _glsl_format(self._param('min_limit')), _glsl_format(self._param('max_limit'))
        return f"clamp({expr}, {lo}, {hi})"

    def _post_callable(self):
        if self.kind == 'dilate':
            r = float(self._param('op_radius'))
            return lambda d: d - r
        if self.kind == 'erode':
            r = float(self._param('op_radius'))
            return lambda d: d + r
        if self.kind == 'shell':
            t = float(self._param('thickness'))
            return lambda d: np.abs(d) - t
        if self.kind == 'invert':
            return lambda d: -d
        lo, hi = float(self._param('min_limit')), float(self._param('max_limit'))
        return lambda d: np.clip(d, lo, hi)


def operation(kind: str, children=(), **params) -> Operation:
    """
    Creates an operation node of the given kind, choosing the node class from
    the kind's registry category.

    Args:
        kind (str): Any non-primitive kind of the registry.
        children (list): Child nodes in evaluation order.
        **params: blend, optional operation fields, and id/name/visible/collapsed.
    """
    category = lookup(kind).category
    if category == PRIMITIVE:
        raise ValueError(f"'{kind}' is a primitive kind, not an operation.")
    if category == UTILITY:
        return Group(children, **params)
    if category == BOOLEAN:
        return Compositor(kind, children, **params)
    if category == METRIC:
        return MetricOperator(kind, children, **params)
    if kind == 'displace':
        return Displace(kind, children, **params)
    return DomainOperator(kind, children, **params)
