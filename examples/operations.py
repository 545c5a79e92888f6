from precisionfield import circle, box, capsule, operation, Group

def union_example():
    return circle(0.3, position=(-0.2, 0), id="a") | box((0.2, 0.2), position=(0.2, 0), id="b")

def smooth_union_example():
    a = circle(0.3, position=(-0.2, 0), id="a")
    b = circle(0.3, position=(0.2, 0), id="b")
    return operation('smooth_union', [a, b], id="blob", blend=0.2)

def subtract_example():
    plate = box((0.6, 0.3), id="plate")
    holes = [circle(0.1, position=(x, 0), id=f"hole{i}") for i, x in enumerate((-0.3, 0.0, 0.3))]
    return operation('subtract', [plate] + holes, id="cut")

def xor_example():
    return circle(0.4, id="outer") ^ box(0.3, rotation=0.785398, id="diamond")

def repeat_example():
    cell = capsule(0.05, 0.2, rotation=0.5, id="cell")
    return operation('repeat', [cell], id="tiles", period=(0.5, 0.5))

def displace_example():
    base = circle(0.4, id="base")
    source = circle(0.1, position=(0.3, 0.3), id="source")
    return operation('displace', [base, source], id="warp", strength=0.5)

def noise_displace_example():
    return operation('displace', [box(0.3, id="slab")], id="ripple", strength=0.05)

def outline_example():
    shapes = Group([circle(0.3, id="ring"), box((0.1, 0.5), id="bar")], id="logo")
    return operation('shell', [shapes], id="outline", thickness=0.02)

def twisted_example():
    arm = capsule(0.05, 0.8, position=(0.2, 0), id="arm")
    return operation('twist', [operation('mirror', [arm], id="sym", axis='x')], id="swirl", strength=2.0)
