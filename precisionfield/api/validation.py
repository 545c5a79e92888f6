import json
import hashlib
import numpy as np
from .core import SDFNode
from .ir import compile_to_ir
from .utils import _glsl_ident

# Characters of canonical text quoted in a golden-hash failure.
GOLDEN_SNAPSHOT_CHARS = 300

class GoldenHashMismatch(AssertionError):
    """Raised when a tree's IR digest differs from its recorded golden digest."""

def _canonical(value):
    """Normalizes IR values so that equal values always encode the same way."""
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, np.ndarray)):
        return [_canonical(v) for v in value]
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    return value

def serialize_ir(ir) -> str:
    """
    Encodes an IR as canonical JSON text.

    Node entries and parameter names are sorted, so the iteration order of
    the underlying maps never shows in the output. The domain_stack, children
    and evaluation_order arrays are emitted exactly in stored order.

    Raises:
        ValueError: If a parameter is not finite.
    """
    nodes = {}
    for node_id in sorted(ir.nodes):
        node = ir.nodes[node_id]
        nodes[node_id] = {
            'kind': node.kind,
            'params': _canonical(node.params),
            'domain_stack': list(node.domain_stack),
            'children': list(node.children),
        }
    document = {
        'root_id': ir.root_id,
        'evaluation_order': list(ir.evaluation_order),
        'nodes': nodes,
    }
    return json.dumps(document, sort_keys=True, separators=(',', ':'), ensure_ascii=True, allow_nan=False)

def compute_hash(text: str) -> str:
    """SHA-256 of the text as lowercase hex. A regression fingerprint only."""
    return hashlib.sha256(text.encode('utf-8')).hexdigest()

def ir_hash(root) -> str:
    """Digest of the canonical IR of a tree."""
    return compute_hash(serialize_ir(compile_to_ir(root)))

def assert_golden(name: str, root, expected: str) -> str:
    """
    Compiles, serializes and hashes a tree and compares the digest against a
    recorded golden value.

    Returns:
        str: The actual digest.

    Raises:
        GoldenHashMismatch: With the expected digest, the actual digest and a
                            prefix of the canonical text.
    """
    serialized = serialize_ir(compile_to_ir(root))
    actual = compute_hash(serialized)
    if actual != expected:
        raise GoldenHashMismatch(
            f"{name} hash mismatch\n"
            f"Expected: {expected}\n"
            f"Actual:   {actual}\n"
            f"IR Snapshot: {serialized[:GOLDEN_SNAPSHOT_CHARS]}..."
        )
    return actual

def validate_tree(root):
    """
    Checks the structural contract of a tree before compilation.

    Raises:
        ValueError: If a child is not a node, a node object appears twice
                    (shared subtree or cycle), two nodes share an id, an id has
                    no letters or digits, or two ids map to the same GLSL
                    identifier.
    """
    if root is None:
        return
    seen_objects = set()
    ids = set()
    idents = {}
    stack = [root]
    while stack:
        node = stack.pop()
        if not isinstance(node, SDFNode):
            raise ValueError(f"Tree contains a non-node child: {node!r}")
        if id(node) in seen_objects:
            raise ValueError(f"Node '{node.id}' is reachable more than once (shared subtree or cycle).")
        seen_objects.add(id(node))
        if node.id in ids:
            raise ValueError(f"Duplicate node id '{node.id}'.")
        ids.add(node.id)
        ident = _glsl_ident(node.id)
        if not ident:
            raise ValueError(f"Node id '{node.id}' has no letters or digits to build a GLSL identifier from.")
        if ident in idents:
            raise ValueError(f"Node ids '{idents[ident]}' and '{node.id}' produce the same GLSL identifier '{ident}'.")
        idents[ident] = node.id
        stack.extend(reversed(node.children))
