"""
Copy-on-write edits of a node tree. Every function returns a new root and
leaves its input untouched; subtrees not on the edited path are shared.
"""
from .core import SDFNode, _new_id
from .registry import lookup, label_for, PRIMITIVE
from .primitives import Primitive
from .compositors import Operation
from .operators import operation, DISPLACE_MAX_CHILDREN
from .traversal import find_node, find_parent

MOVE_POSITIONS = ('inside', 'before', 'after')

# Values given to freshly created nodes. Independent of core.CODEGEN_DEFAULTS.
EDITOR_DEFAULTS = {
    'circle': {'radius': 0.3},
    'box': {'size': (0.3, 0.2)},
    'capsule': {'radius': 0.15, 'length': 0.4},
    'operation': {
        'blend': 0.1,
        'op_radius': 0.1,
        'thickness': 0.05,
        'period': (1.0, 1.0),
        'axis': 'x',
        'offset': 0.0,
        'strength': 0.5,
        'frequency': 2.0,
        'amplitude': 0.05,
        'min_limit': -1.0,
        'max_limit': 1.0,
    },
}

def create_node(kind: str, position=(0.0, 0.0)) -> SDFNode:
    """
    Creates a node with a fresh id, the registry label as its name and the
    editor's creation-time defaults. Operations start without children.
    """
    meta = lookup(kind)
    if meta.category == PRIMITIVE:
        return Primitive(kind, position=position, id=_new_id(), name=meta.label, **EDITOR_DEFAULTS[kind])
    return operation(kind, (), id=_new_id(), name=meta.label, **EDITOR_DEFAULTS['operation'])

def update_node(root: SDFNode, node_id: str, **changes) -> SDFNode:
    """Returns a tree where the node with the given id has the changes applied."""
    if root is None:
        return None
    if root.id == node_id:
        return root.replace(**changes)
    if not root.children:
        return root
    children = tuple(update_node(child, node_id, **changes) for child in root.children)
    if all(new is old for new, old in zip(children, root.children)):
        return root
    return root.replace(children=children)

def delete_node(root: SDFNode, node_id: str) -> SDFNode:
    """Removes a node and its subtree. Deleting the root yields None."""
    if root is None or root.id == node_id:
        return None
    if not root.children:
        return root
    children = tuple(c for c in (delete_node(child, node_id) for child in root.children) if c is not None)
    if len(children) == len(root.children) and all(new is old for new, old in zip(children, root.children)):
        return root
    return root.replace(children=children)

def _accepts_child(node) -> bool:
    if not isinstance(node, Operation):
        return False
    return node.kind != 'displace' or len(node.children) < DISPLACE_MAX_CHILDREN

def insert_node(root: SDFNode, target_id: str, node: SDFNode, position: str = 'inside') -> SDFNode:
    """
    Inserts a node relative to a target.

    'inside' appends to the target's children; a primitive target, or a
    displace node that already has its base and source, leaves the tree
    unchanged. 'before' and 'after' insert next to the target among its
    siblings; the root has no siblings, so the tree is unchanged.
    """
    if position not in MOVE_POSITIONS:
        raise ValueError(f"Unknown insert position: {position!r}")

    if position == 'inside':
        target = find_node(root, target_id)
        if not _accepts_child(target):
            return root
        return update_node(root, target_id, children=target.children + (node,))

    parent = find_parent(root, target_id)
    if parent is None:
        return root
    children = list(parent.children)
    idx = next(i for i, child in enumerate(children) if child.id == target_id)
    children.insert(idx if position == 'before' else idx + 1, node)
    return update_node(root, parent.id, children=children)

def move_node(root: SDFNode, dragged_id: str, target_id: str, position: str = 'inside') -> SDFNode:
    """
    Moves a subtree next to or into a target. Dropping an operation inside a
    primitive wraps the primitive with that operation.
    """
    if dragged_id == target_id:
        return root
    dragged = find_node(root, dragged_id)
    target = find_node(root, target_id)
    if dragged is None or target is None or find_node(dragged, target_id) is not None:
        return root

    wraps = position == 'inside' and isinstance(target, Primitive) and isinstance(dragged, Operation)
    if position == 'inside' and not wraps and not _accepts_child(target):
        return root
    if position != 'inside' and find_parent(root, target_id) is None:
        return root

    base = delete_node(root, dragged_id)
    if base is None:
        return root
    if wraps:
        return _wrap(base, target_id, dragged)
    return insert_node(base, target_id, dragged, position)

def _wrap(root: SDFNode, target_id: str, wrapper: Operation) -> SDFNode:
    if root.id == target_id:
        return wrapper.replace(children=(root,))
    if not root.children:
        return root
    return root.replace(children=[_wrap(child, target_id, wrapper) for child in root.children])

def reorder_node(root: SDFNode, node_id: str, direction: str) -> SDFNode:
    """Swaps a node with its previous ('up') or next ('down') sibling."""
    parent = find_parent(root, node_id)
    if parent is None:
        return root
    children = list(parent.children)
    idx = next(i for i, child in enumerate(children) if child.id == node_id)
    next_idx = idx - 1 if direction == 'up' else idx + 1
    if next_idx < 0 or next_idx >= len(children):
        return root
    children[idx], children[next_idx] = children[next_idx], children[idx]
    return update_node(root, parent.id, children=children)

def set_kind(root: SDFNode, node_id: str, kind: str) -> SDFNode:
    """
    Changes the kind of an operation, keeping its children and parameters.
    A name still equal to the old kind's label follows the new label.
    """
    node = find_node(root, node_id)
    if node is None:
        return root
    if not isinstance(node, Operation) or lookup(kind).category == PRIMITIVE:
        raise ValueError("Only operations can change kind, and only to another operation kind.")

    kwargs = node._kwargs()
    if not node.name or node.name == label_for(node.kind):
        kwargs['name'] = label_for(kind)
    replacement = operation(kind, **kwargs)
    return _replace_subtree(root, node_id, replacement)

def _replace_subtree(root: SDFNode, node_id: str, replacement: SDFNode) -> SDFNode:
    if root.id == node_id:
        return replacement
    if not root.children:
        return root
    return root.replace(children=[_replace_subtree(child, node_id, replacement) for child in root.children])
