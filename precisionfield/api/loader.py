from pathlib import Path
from functools import lru_cache

# A dictionary to hold all loaded GLSL file contents, mapping stem -> full_code
GLSL_SOURCES = {}

# Order in which the GLSL files are concatenated into the preamble.
# Files not in this list are appended alphabetically after these.
GLSL_ORDER = [
    'common',      # precision, rotate()
    'primitives',  # sdCircle, sdBox, sdCapsule
    'operations',  # boolean combinators
    'transforms',  # domain warps
]

GLSL_DIR = Path(__file__).parent.parent / 'glsl'

def load_all_glsl():
    """Finds and loads all .glsl files into GLSL_SOURCES."""
    if GLSL_SOURCES:
        return
    if not GLSL_DIR.exists():
        raise FileNotFoundError(f"GLSL library not found at '{GLSL_DIR}'.")

    for glsl_file in GLSL_DIR.glob('*.glsl'):
        with open(glsl_file, 'r') as f:
            GLSL_SOURCES[glsl_file.stem] = f.read().strip()

@lru_cache(maxsize=None)
def get_preamble() -> str:
    """
    Returns the fixed GLSL library prepended to every generated shader.
    The text is identical for every compile.
    """
    load_all_glsl()

    def sort_key(name):
        try:
            return (GLSL_ORDER.index(name), name)
        except ValueError:
            return (len(GLSL_ORDER), name)

    return "\n\n".join(GLSL_SOURCES[stem] for stem in sorted(GLSL_SOURCES, key=sort_key)) + "\n"
