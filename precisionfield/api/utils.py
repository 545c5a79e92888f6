import re
import numpy as np

# Decimal places used for every numeric literal written into GLSL.
FLOAT_PRECISION = 4

_IDENT_PATTERN = re.compile(r'[^0-9A-Za-z]+')

def _glsl_format(val):
    """Formats a Python value for injection into a GLSL string."""
    if isinstance(val, (bool, np.bool_)):
        return 'true' if val else 'false'
    if isinstance(val, str):
        return val
    if isinstance(val, (list, tuple, np.ndarray)):
        components = [_glsl_format(v) for v in np.asarray(val, dtype=float).flatten()]
        if len(components) == 2: return f"vec2({components[0]}, {components[1]})"
        if len(components) == 3: return f"vec3({components[0]}, {components[1]}, {components[2]})"
        raise ValueError(f"Cannot format a vector of length {len(components)} for GLSL.")
    return f"{float(val):.{FLOAT_PRECISION}f}"

def _glsl_ident(node_id: str) -> str:
    """
    Turns a node id into a fragment usable inside a GLSL identifier. Runs of
    other characters become a single underscore and edge underscores are
    dropped, so no generated name contains the reserved "__".
    """
    return _IDENT_PATTERN.sub('_', str(node_id)).strip('_')

def _vec2(val):
    """Normalizes a 2-component value to a tuple of floats."""
    x, y = val
    return (float(x), float(y))

# --- NumPy counterparts of the GLSL library ---

def _mix(a, b, h):
    return a * (1.0 - h) + b * h

def _glsl_mod(x, y):
    """GLSL mod(): x - y * floor(x / y)."""
    return x - y * np.floor(x / y)

def _rotate(points: np.ndarray, angle) -> np.ndarray:
    """Matches rotate(p, a) in common.glsl; angle may be a scalar or per-point array."""
    c, s = np.cos(angle), np.sin(angle)
    x, y = points[:, 0], points[:, 1]
    return np.stack([c * x + s * y, -s * x + c * y], axis=-1)

def _smooth_union(d1, d2, k):
    h = np.clip(0.5 + 0.5 * (d2 - d1) / max(k, 1e-4), 0.0, 1.0)
    return _mix(d2, d1, h) - k * h * (1.0 - h)

def _smooth_subtraction(d1, d2, k):
    h = np.clip(0.5 - 0.5 * (d2 + d1) / max(k, 1e-4), 0.0, 1.0)
    return _mix(d2, -d1, h) + k * h * (1.0 - h)

def _smooth_intersection(d1, d2, k):
    h = np.clip(0.5 - 0.5 * (d2 - d1) / max(k, 1e-4), 0.0, 1.0)
    return _mix(d2, d1, h) + k * h * (1.0 - h)

def _xor(d1, d2):
    return np.maximum(np.minimum(d1, d2), -np.maximum(d1, d2))
