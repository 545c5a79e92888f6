from .api.core import SDFNode, GLSLContext, SENTINEL_DISTANCE, CODEGEN_DEFAULTS
from .api.registry import (
    OperatorMeta, OPERATOR_REGISTRY, lookup, label_for, category_of,
    PRIMITIVE_KINDS, BOOLEAN_KINDS, DOMAIN_KINDS, METRIC_KINDS, UTILITY_KINDS,
)
from .api.primitives import Primitive, circle, box, capsule
from .api.compositors import Operation, Compositor, Group
from .api.operators import DomainOperator, Displace, MetricOperator, operation
from .api.ir import IR, IRNode, compile_to_ir
from .api.validation import (
    serialize_ir, compute_hash, ir_hash, assert_golden, validate_tree, GoldenHashMismatch
)
from .api.scene import Scene, SceneCompiler, generate
from .api.loader import get_preamble
from .api.traversal import walk, collect_primitives, ancestry_of, find_node, find_parent
from .api.edit import (
    create_node, update_node, delete_node, insert_node, move_node, reorder_node, set_kind,
    EDITOR_DEFAULTS,
)
