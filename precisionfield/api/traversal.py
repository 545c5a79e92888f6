from .registry import lookup, DOMAIN
from .primitives import Primitive

def walk(root):
    """Yields every node of the tree in pre-order (parent before children)."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))

def collect_primitives(root) -> list:
    """Returns every primitive leaf in pre-order traversal order."""
    return [node for node in walk(root) if isinstance(node, Primitive)]

def find_node(root, node_id: str):
    for node in walk(root):
        if node.id == node_id:
            return node
    return None

def find_parent(root, node_id: str):
    """Returns the operation directly owning the node, or None for the root or a missing id."""
    for node in walk(root):
        if any(child.id == node_id for child in node.children):
            return node
    return None

def ancestry_of(root, target_id: str) -> list:
    """
    Returns human-readable labels of the Domain-category ancestors of a node,
    outermost first, formatted as "<label> (<id>)". Empty when the target is
    missing or has no Domain ancestors.
    """
    path = []

    def find(current) -> bool:
        if current.id == target_id:
            return True
        meta = lookup(current.kind)
        is_domain = meta.category == DOMAIN
        if is_domain:
            path.append(f"{meta.label} ({current.id})")
        for child in current.children:
            if find(child):
                return True
        if is_domain:
            path.pop()
        return False

    if root is not None:
        find(root)
    return path
