from precisionfield import circle, box, operation

def _siblings():
    return [
        circle(0.1, position=(0.2, 0), id="c1"),
        box((0.1, 0.1), position=(-0.2, 0.2), id="c2"),
    ]

def mirror_siblings():
    """A mirror over two primitives: both inherit the mirror in their domain stack."""
    return operation('mirror', _siblings(), id="mirror-root", name="Golden: Mirror Siblings",
                     axis='x', offset=-0.5, blend=0.0)

def reorder_siblings():
    """Same as mirror_siblings with the children swapped."""
    c1, c2 = _siblings()
    return operation('mirror', [c2, c1], id="mirror-reordered", name="Golden: Mirror Siblings",
                     axis='x', offset=-0.5, blend=0.0)

def no_domain():
    return operation('union', _siblings(), id="union-root", blend=0.0)

def deep_nesting():
    leaf = circle(0.05, position=(0.1, 0.1), id="leaf")
    inner = operation('bend', [leaf], id="inner-bend", strength=0.5)
    mid = operation('mirror', [inner], id="mid-mirror", axis='y')
    return operation('repeat', [mid], id="deep-root", period=(2, 2))

# SHA-256 of the canonical IR text of each fixture.
GOLDEN_HASHES = {
    'MIRROR_SIBLINGS': "9d43d4cf315b5fd8024e5e7dc1b2b16264d5f1816055befefec6e8f33d3b625e",
    'REORDER_SIBLINGS': "ed1656df27d77db110d4e7a32ff5d024aa19e63a008769cf3b14b92063be5a43",
    'NO_DOMAIN': "d3096ed9fcce4e21d6d39eac5e136a89300e369b3452a4589638649c3077175f",
    'DEEP_NESTING': "8a02e691276b12b2449b00db1adb10dd95aa2ca24f2d6ce57050c8b4231b2367",
}

GOLDEN_SUITES = [
    ('Mirror Inheritance (IR)', mirror_siblings, 'MIRROR_SIBLINGS'),
    ('Order Determinism (IR)', reorder_siblings, 'REORDER_SIBLINGS'),
    ('Domain Toggle (IR)', no_domain, 'NO_DOMAIN'),
    ('Deep Tree (IR)', deep_nesting, 'DEEP_NESTING'),
]
