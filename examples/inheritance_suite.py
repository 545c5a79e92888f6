from precisionfield import create_node

def inheritance_suite():
    """Union of three mirror setups exercising domain inheritance."""
    scene = create_node('union').replace(name="Domain Inheritance Regression Suite", blend=0.0)

    test1 = create_node('mirror').replace(name="1: Parent Mirror + 2 Siblings", offset=-0.8, axis='x')
    test1 = test1.replace(children=[create_node('capsule', (-0.5, 0.6)), create_node('circle', (-0.6, 0.3))])

    group = create_node('group').replace(children=[create_node('box', (0.5, -0.6)), create_node('box', (0.65, -0.4))])
    test2 = create_node('mirror').replace(name="2: Parent Mirror + Nested Group", offset=0.8, axis='x', children=[group])

    inner = create_node('mirror').replace(axis='x', children=[create_node('circle', (0.2, -0.2))])
    test3 = create_node('mirror').replace(name="3: Composed Mirrors", axis='y', offset=-0.4, children=[inner])

    return scene.replace(children=[test1, test2, test3])
