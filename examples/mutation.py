from precisionfield import Operation, ir_hash
from examples.regression_suites import mirror_siblings

SEEDS = [1, 7, 42, 1337, 9001]
STEPS = 50

class DeterministicRNG:
    """Linear congruential generator with the Numerical Recipes constants."""
    def __init__(self, seed: int):
        self.seed = seed

    def next(self) -> float:
        self.seed = (self.seed * 1664525 + 1013904223) % 4294967296
        return self.seed / 4294967296

def mutate_graph(node, rng: DeterministicRNG):
    """Swaps two children or nudges the blend of the root operation. Never mutates its input."""
    if isinstance(node, Operation) and len(node.children) > 1:
        r = rng.next()
        if r < 0.33:
            children = list(node.children)
            i = int(rng.next() * len(children))
            j = int(rng.next() * len(children))
            children[i], children[j] = children[j], children[i]
            return node.replace(children=children)
        if r < 0.66:
            return node.replace(blend=max(0.0, node.blend + (rng.next() - 0.5) * 0.1))
    return node

def run_sequence(seed: int, steps: int = STEPS, start=mirror_siblings) -> list:
    """Digest of the tree after each mutation step."""
    rng = DeterministicRNG(seed)
    graph = start()
    hashes = []
    for _ in range(steps):
        graph = mutate_graph(graph, rng)
        hashes.append(ir_hash(graph))
    return hashes

if __name__ == '__main__':
    for seed in SEEDS:
        first, second = run_sequence(seed), run_sequence(seed)
        status = "PASS" if first == second else "FAIL"
        print(f"[{status}] Seed {seed} ({STEPS} steps)")
