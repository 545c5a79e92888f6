from collections import namedtuple
from types import MappingProxyType

OperatorMeta = namedtuple('OperatorMeta', ['kind', 'label', 'category'])

PRIMITIVE = 'Primitive'
BOOLEAN = 'Boolean'
DOMAIN = 'Domain'
METRIC = 'Metric'
UTILITY = 'Utility'

PRIMITIVE_KINDS = ('circle', 'box', 'capsule')
BOOLEAN_KINDS = (
    'union', 'subtract', 'intersect', 'xor',
    'smooth_union', 'smooth_subtract', 'smooth_intersect',
)
DOMAIN_KINDS = ('repeat', 'mirror', 'bend', 'twist', 'displace')
METRIC_KINDS = ('dilate', 'erode', 'shell', 'invert', 'clamp')
UTILITY_KINDS = ('group',)

_LABELS = {
    'circle': 'Circle',
    'box': 'Box',
    'capsule': 'Capsule',
    'union': 'Union',
    'subtract': 'Subtract',
    'intersect': 'Intersect',
    'xor': 'XOR',
    'smooth_union': 'Smooth Union',
    'smooth_subtract': 'Smooth Subtract',
    'smooth_intersect': 'Smooth Intersect',
    'repeat': 'Repeat (Modulo)',
    'mirror': 'Mirror',
    'bend': 'Bend',
    'twist': 'Twist',
    'displace': 'Displace',
    'dilate': 'Dilate (Expand)',
    'erode': 'Erode (Round)',
    'shell': 'Shell (Annular)',
    'invert': 'Invert Field',
    'clamp': 'Clamp Field',
    'group': 'Group',
}

def _build_registry():
    table = {}
    for category, kinds in ((PRIMITIVE, PRIMITIVE_KINDS), (BOOLEAN, BOOLEAN_KINDS),
                            (DOMAIN, DOMAIN_KINDS), (METRIC, METRIC_KINDS),
                            (UTILITY, UTILITY_KINDS)):
        for kind in kinds:
            table[kind] = OperatorMeta(kind, _LABELS[kind], category)
    return MappingProxyType(table)

# Read-only for the lifetime of the process.
OPERATOR_REGISTRY = _build_registry()

def lookup(kind: str) -> OperatorMeta:
    """
    Returns the metadata for a node kind.

    Raises:
        ValueError: If the kind is not part of the registry. An unknown kind
                    is a configuration error, not something to recover from.
    """
    try:
        return OPERATOR_REGISTRY[kind]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown operator kind: {kind!r}") from None

def category_of(kind: str) -> str:
    return lookup(kind).category

def label_for(kind: str) -> str:
    """Display label for a kind, falling back to the kind itself when unknown."""
    meta = OPERATOR_REGISTRY.get(kind)
    return meta.label if meta else str(kind)

def is_domain(kind: str) -> bool:
    return category_of(kind) == DOMAIN
