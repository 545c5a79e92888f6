import copy
import uuid
from abc import ABC, abstractmethod
from .registry import lookup, DOMAIN
from .utils import _glsl_ident

# Distance reported where a subtree has no field at all.
SENTINEL_DISTANCE = 100.0
SENTINEL_GLSL = "100.0"

# Fallbacks used by code generation when an optional field is unset. These are
# independent of the editor's creation-time defaults (see edit.EDITOR_DEFAULTS).
CODEGEN_DEFAULTS = {
    'radius': 0.5,
    'size': (0.5, 0.5),
    'capsule_length': 0.5,
    'capsule_radius': 0.1,
    'period': (1.0, 1.0),
    'axis': 'x',
    'offset': 0.0,
    'strength': 1.0,
    'displace_strength': 0.5,
    'op_radius': 0.1,
    'thickness': 0.05,
    'min_limit': -1.0,
    'max_limit': 1.0,
}

# Prefixes of the variables bound in the generated map() body.
VARIABLE_ROLES = {
    'point': 'p',
    'distance': 'd',
    'modulated': 'mod',
    'result': 'res',
    'fold': 'tmp',
    'cutter': 'cut',
}

def _new_id() -> str:
    return uuid.uuid4().hex[:8]

class GLSLContext:
    """Manages the state of the GLSL compilation process for a scene."""
    def __init__(self, compiler=None):
        self.compiler = compiler
        self.p = "p"
        self.statements = []
        self.warnings = []

    def add_statement(self, line: str):
        """Adds a line of code to the current function body."""
        self.statements.append(line)

    def variable_name(self, role: str, node_id: str, index: int = None) -> str:
        """Deterministic variable name for a node and role."""
        name = f"{VARIABLE_ROLES[role]}_{_glsl_ident(node_id)}"
        if index is not None:
            name = f"{name}_{index}"
        return name

    def new_variable(self, type: str, name: str, expression: str) -> str:
        """Declares a new GLSL variable and returns its name."""
        self.add_statement(f"{type} {name} = {expression};")
        return name

    def with_p(self, new_p_name: str) -> 'GLSLContext':
        """Creates a sub-context for child nodes with a transformed point."""
        new_ctx = GLSLContext(self.compiler)
        new_ctx.p = new_p_name
        return new_ctx

    def merge_from(self, sub_context: 'GLSLContext'):
        """Merges statements and warnings from a sub-context into this one."""
        self.statements.extend(sub_context.statements)
        self.warnings.extend(sub_context.warnings)

    def warn(self, message: str):
        self.warnings.append(message)


class SDFNode(ABC):
    """Abstract base class for every node of a 2D field tree."""

    kinds = ()
    children = ()

    def __init__(self, kind: str, id: str = None, name: str = None, visible: bool = True, collapsed: bool = False):
        super().__init__()
        self.kind = kind
        self.id = id if id is not None else _new_id()
        self.name = name
        self.visible = visible
        self.collapsed = collapsed
        self._check_kind()

    def _check_kind(self):
        lookup(self.kind)
        if self.kind not in self.kinds:
            raise ValueError(f"{type(self).__name__} does not accept kind '{self.kind}'")

    def _normalize(self):
        """Coerces field values to their canonical types. Raises ValueError for invalid values."""

    @property
    def category(self) -> str:
        return lookup(self.kind).category

    @property
    def is_domain(self) -> bool:
        return self.category == DOMAIN

    def replace(self, **changes) -> 'SDFNode':
        """
        Returns a shallow copy with the given attributes replaced.
        Unchanged children are shared with the original node.
        """
        new_node = copy.copy(self)
        for attr, value in changes.items():
            if not hasattr(self, attr):
                raise AttributeError(f"{type(self).__name__} has no attribute '{attr}'")
            if attr == 'children':
                value = tuple(value)
            setattr(new_node, attr, value)
        new_node._normalize()
        new_node._check_kind()
        return new_node

    @abstractmethod
    def _params(self) -> dict:
        """Parameters exported to the IR. Unset optional fields are omitted."""
        raise NotImplementedError

    @abstractmethod
    def to_glsl(self, ctx: GLSLContext) -> str:
        """
        Contributes statements to the map() body and returns the GLSL
        expression holding the distance of this subtree.
        """
        raise NotImplementedError

    @abstractmethod
    def to_callable(self):
        """
        Returns a Python function that takes a NumPy array of points (N, 2)
        and returns an array of distances (N,).
        """
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.kind!r}, id={self.id!r})"

    def _wrap(self, kind, *others, **params) -> 'SDFNode':
        from .operators import operation
        return operation(kind, [self] + list(others), **params)

    def union(self, *others, blend: float = 0.0) -> 'SDFNode':
        return self._wrap('union', *others, blend=blend)

    def subtract(self, *cutters, blend: float = 0.0) -> 'SDFNode':
        return self._wrap('subtract', *cutters, blend=blend)

    def intersect(self, *others, blend: float = 0.0) -> 'SDFNode':
        return self._wrap('intersect', *others, blend=blend)

    def xor(self, *others) -> 'SDFNode':
        return self._wrap('xor', *others)

    def __or__(self, other): return self.union(other)
    def __and__(self, other): return self.intersect(other)
    def __sub__(self, other): return self.subtract(other)
    def __xor__(self, other): return self.xor(other)

    def repeat(self, period) -> 'SDFNode':
        return self._wrap('repeat', period=period)

    def mirror(self, axis: str = 'x', offset: float = 0.0) -> 'SDFNode':
        return self._wrap('mirror', axis=axis, offset=offset)

    def bend(self, strength: float, axis: str = 'x') -> 'SDFNode':
        return self._wrap('bend', strength=strength, axis=axis)

    def twist(self, strength: float) -> 'SDFNode':
        return self._wrap('twist', strength=strength)

    def displace(self, source: 'SDFNode' = None, strength: float = 0.5) -> 'SDFNode':
        others = [source] if source is not None else []
        return self._wrap('displace', *others, strength=strength)

    def dilate(self, radius: float) -> 'SDFNode':
        return self._wrap('dilate', op_radius=radius)

    def erode(self, radius: float) -> 'SDFNode':
        return self._wrap('erode', op_radius=radius)

    def shell(self, thickness: float) -> 'SDFNode':
        return self._wrap('shell', thickness=thickness)

    def invert(self) -> 'SDFNode':
        return self._wrap('invert')

    def clamp(self, min_limit: float = -1.0, max_limit: float = 1.0) -> 'SDFNode':
        return self._wrap('clamp', min_limit=min_limit, max_limit=max_limit)
