"""
Flattening of a node tree into the intermediate representation (IR) used for
canonical serialization and regression hashing.
"""
from collections import namedtuple
from .registry import DOMAIN

IRNode = namedtuple('IRNode', ['id', 'kind', 'params', 'domain_stack', 'children'])
IRNode.__doc__ = """
One flattened node.

    params: sparse parameter map; unset optional fields are absent.
    domain_stack: ids of the Domain-category ancestors, outermost first, excluding the node itself.
    children: child ids in stored order.
"""

IR = namedtuple('IR', ['nodes', 'root_id', 'evaluation_order'])
IR.__doc__ = """
A flattened tree.

    nodes: mapping of node id to IRNode.
    root_id: id of the root, or '' for an empty tree.
    evaluation_order: post-order node ids; children always precede their parent.
"""

def compile_to_ir(root) -> IR:
    """
    Flattens a tree into an IR. The tree is not modified, and no defaults are
    injected: parameters are exported exactly as set on the nodes.

    Args:
        root (SDFNode or None): The root of the tree snapshot.
    """
    nodes = {}
    evaluation_order = []
    if root is None:
        return IR(nodes, '', evaluation_order)

    def traverse(node, domain_stack: tuple):
        inherited = domain_stack + (node.id,) if node.category == DOMAIN else domain_stack
        children = []
        for child in node.children:
            children.append(child.id)
            traverse(child, inherited)
        nodes[node.id] = IRNode(node.id, node.kind, node._params(), domain_stack, tuple(children))
        evaluation_order.append(node.id)

    traverse(root, ())
    return IR(nodes, root.id, evaluation_order)
