import pytest
from precisionfield import (
    create_node, update_node, delete_node, insert_node, move_node, reorder_node, set_kind,
    EDITOR_DEFAULTS, CODEGEN_DEFAULTS, circle, box, operation, Primitive, Compositor, Group,
    DomainOperator, find_node, label_for, Scene,
)

@pytest.fixture
def tree():
    a, b, c = circle(0.3, id="a"), box(0.2, id="b"), circle(0.1, id="c")
    inner = operation('mirror', [b, c], id="m")
    return operation('union', [a, inner], id="u")

def _ids(node):
    return [child.id for child in node.children]

# --- create_node ---

def test_create_primitive_defaults():
    c = create_node('circle', (0.5, -0.5))
    assert isinstance(c, Primitive)
    assert c.radius == 0.3
    assert c.position == (0.5, -0.5)
    assert c.name == "Circle"
    assert create_node('box').size == (0.3, 0.2)
    cap = create_node('capsule')
    assert (cap.radius, cap.length) == (0.15, 0.4)

def test_create_operation_defaults():
    op = create_node('smooth_union')
    assert isinstance(op, Compositor)
    assert op.children == ()
    assert op.blend == 0.1
    assert op.period == (1.0, 1.0)
    assert op.strength == 0.5
    assert op.name == "Smooth Union"

def test_editor_defaults_differ_from_codegen_fallbacks():
    assert EDITOR_DEFAULTS['circle']['radius'] != CODEGEN_DEFAULTS['radius']
    assert EDITOR_DEFAULTS['operation']['strength'] != CODEGEN_DEFAULTS['strength']

def test_create_node_ids_are_fresh():
    assert create_node('group').id != create_node('group').id

def test_create_unknown_kind():
    with pytest.raises(ValueError):
        create_node('triangle')

# --- update / delete ---

def test_update_node_is_copy_on_write(tree):
    updated = update_node(tree, "c", radius=0.25)
    assert find_node(updated, "c").radius == 0.25
    assert find_node(tree, "c").radius == 0.1
    assert updated.children[0] is tree.children[0]
    assert updated.children[1] is not tree.children[1]

def test_update_missing_id_returns_same_tree(tree):
    assert update_node(tree, "nope", blend=0.5) is tree

def test_delete_node(tree):
    pruned = delete_node(tree, "b")
    assert _ids(pruned.children[1]) == ["c"]
    assert _ids(tree.children[1]) == ["b", "c"]
    assert delete_node(tree, "u") is None
    assert delete_node(tree, "nope") is tree

# --- insert ---

def test_insert_inside_appends(tree):
    new = circle(id="n")
    result = insert_node(tree, "m", new, 'inside')
    assert _ids(result.children[1]) == ["b", "c", "n"]

def test_insert_inside_primitive_is_ignored(tree):
    assert insert_node(tree, "a", circle(id="n"), 'inside') is tree

def test_insert_before_and_after(tree):
    assert _ids(insert_node(tree, "c", circle(id="n"), 'before').children[1]) == ["b", "n", "c"]
    assert _ids(insert_node(tree, "c", circle(id="n"), 'after').children[1]) == ["b", "c", "n"]

def test_insert_next_to_root_is_ignored(tree):
    assert insert_node(tree, "u", circle(id="n"), 'after') is tree

def test_insert_rejects_unknown_position(tree):
    with pytest.raises(ValueError):
        insert_node(tree, "m", circle(id="n"), 'over')

def test_displace_accepts_at_most_two_children():
    d = operation('displace', [circle(id="base")], id="d")
    d = insert_node(d, "d", circle(id="source"), 'inside')
    assert _ids(d) == ["base", "source"]
    assert insert_node(d, "d", circle(id="extra"), 'inside') is d

# --- move ---

def test_move_between_parents(tree):
    moved = move_node(tree, "a", "m", 'inside')
    assert _ids(moved) == ["m"]
    assert _ids(moved.children[0]) == ["b", "c", "a"]

def test_move_before_sibling(tree):
    moved = move_node(tree, "c", "b", 'before')
    assert _ids(moved.children[1]) == ["c", "b"]

def test_move_operation_into_primitive_wraps_it(tree):
    wrapper = operation('dilate', [], id="w")
    root = insert_node(tree, "u", wrapper, 'inside')
    moved = move_node(root, "w", "a", 'inside')
    assert _ids(moved) == ["w", "m"]
    assert _ids(moved.children[0]) == ["a"]

def test_move_into_own_descendant_is_ignored(tree):
    assert move_node(tree, "m", "c", 'after') is tree
    assert move_node(tree, "m", "m", 'inside') is tree

def test_move_missing_nodes_is_ignored(tree):
    assert move_node(tree, "nope", "m") is tree
    assert move_node(tree, "a", "nope") is tree

# --- reorder ---

def test_reorder(tree):
    assert _ids(reorder_node(tree, "c", 'up').children[1]) == ["c", "b"]
    assert _ids(reorder_node(tree, "b", 'down').children[1]) == ["c", "b"]
    assert reorder_node(tree, "b", 'up') is tree
    assert reorder_node(tree, "u", 'down') is tree

# --- set_kind ---

def test_set_kind_keeps_children_and_params(tree):
    changed = set_kind(tree, "m", 'repeat')
    node = find_node(changed, "m")
    assert isinstance(node, DomainOperator)
    assert node.kind == 'repeat'
    assert _ids(node) == ["b", "c"]

def test_set_kind_switches_class():
    root = create_node('union').replace(id="op")
    changed = set_kind(root, "op", 'mirror')
    assert isinstance(changed, DomainOperator)
    assert changed.name == label_for('mirror')
    assert changed.blend == root.blend
    assert set_kind(changed, "op", 'group').kind == 'group'
    assert isinstance(set_kind(changed, "op", 'group'), Group)

def test_set_kind_keeps_custom_name():
    root = operation('union', [], id="op", name="Body")
    assert set_kind(root, "op", 'intersect').name == "Body"

def test_set_kind_rejects_primitives(tree):
    with pytest.raises(ValueError):
        set_kind(tree, "a", 'union')
    with pytest.raises(ValueError):
        set_kind(tree, "u", 'circle')

def test_set_kind_missing_id(tree):
    assert set_kind(tree, "nope", 'xor') is tree

def test_move_into_full_displace_keeps_tree():
    d = operation('displace', [circle(id="base"), circle(id="src")], id="d")
    root = operation('union', [d, circle(id="x")], id="u")
    moved = move_node(root, "x", "d", 'inside')
    assert moved is root
    assert find_node(moved, "x") is not None

def test_move_primitive_into_primitive_keeps_tree(tree):
    assert move_node(tree, "c", "a", 'inside') is tree

def test_move_next_to_root_keeps_tree(tree):
    assert move_node(tree, "a", "u", 'after') is tree

def test_update_node_validates_fields():
    m = operation('mirror', [circle(id="c")], id="m")
    with pytest.raises(ValueError):
        update_node(m, "m", axis='z')

def test_update_box_size_with_scalar_emits_vector():
    b = update_node(box(0.2, id="b"), "b", size=0.3)
    statements, _ = Scene(b).statements()
    assert statements[-1] == "float d_b = sdBox(p_b, vec2(0.3000, 0.3000));"
