import sys
import numpy as np
from .core import SDFNode, GLSLContext, SENTINEL_DISTANCE, SENTINEL_GLSL
from .loader import get_preamble
from .ir import compile_to_ir
from .validation import serialize_ir, compute_hash, validate_tree

class Scene:
    """
    Wraps a tree snapshot and produces its shader source, IR and digest.
    The tree is never modified; build a new Scene for every edit.
    """
    def __init__(self, root: SDFNode = None, validate: bool = False):
        self.root = root
        self.validate = validate
        self.warnings = []

    def _emit(self):
        if self.validate:
            validate_tree(self.root)
        ctx = GLSLContext(compiler=self)
        result_var = SENTINEL_GLSL if self.root is None else self.root.to_glsl(ctx)
        return ctx, result_var

    def compile(self) -> str:
        """
        Compiles the tree into GLSL source: the fixed preamble followed by a
        generated `float map(vec2 p)` function.
        """
        ctx, result_var = self._emit()
        self.warnings = list(ctx.warnings)
        for message in self.warnings:
            print(f"WARNING: {message}", file=sys.stderr)

        lines = [f"    {statement}" for statement in ctx.statements]
        lines.append(f"    return {result_var};")
        scene_function = "float map(vec2 p) {\n" + "\n".join(lines) + "\n}\n"
        return get_preamble() + "\n" + scene_function

    def statements(self) -> tuple:
        """Returns the body statements and the final expression without assembling text."""
        ctx, result_var = self._emit()
        return ctx.statements, result_var

    def to_ir(self):
        if self.validate:
            validate_tree(self.root)
        return compile_to_ir(self.root)

    def serialize(self) -> str:
        return serialize_ir(self.to_ir())

    def hash(self) -> str:
        return compute_hash(self.serialize())

    def evaluate(self, points) -> np.ndarray:
        """Evaluates the field at an (N, 2) array of points with the NumPy evaluator."""
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        if self.root is None:
            return np.full(len(points), SENTINEL_DISTANCE)
        return self.root.to_callable()(points)

class SceneCompiler:
    """Helper to compile a node without an explicit Scene object."""
    def compile(self, root_node: SDFNode) -> str:
        return Scene(root_node).compile()

def generate(root: SDFNode = None) -> str:
    """Generates the shader source for a tree, or for an empty field when root is None."""
    return Scene(root).compile()
