import pytest
import numpy as np
import os
import shutil
import subprocess
import tempfile
from precisionfield import circle, box

GLSL_VALIDATOR = shutil.which("glslangValidator")
SKIP_GLSL = os.environ.get("SKIP_GLSL", "") == "1"

requires_glsl_validator = pytest.mark.skipif(
    not GLSL_VALIDATOR or SKIP_GLSL,
    reason="Requires glslangValidator."
)

@pytest.fixture
def shapes():
    """Two primitives with fixed ids."""
    return circle(0.3, position=(0.0, 0.0), id="a"), box((0.2, 0.1), position=(0.25, 0.0), id="b")

@pytest.fixture
def points():
    """Deterministic sample points covering [-2, 2]^2."""
    rng = np.random.default_rng(1234)
    return rng.uniform(-2.0, 2.0, size=(200, 2))

@pytest.fixture(scope="session")
def validate_glsl():
    def _validator(shader_code: str):
        shader = f"""#version 330 core
out vec4 f_color;
{shader_code}
void main() {{
    f_color = vec4(map(gl_FragCoord.xy));
}}
"""
        with tempfile.NamedTemporaryFile(suffix=".frag", mode="w", delete=True) as f:
            f.write(shader)
            f.flush()
            result = subprocess.run([GLSL_VALIDATOR, "-S", "frag", f.name], capture_output=True, text=True)
        if result.returncode != 0:
            raise AssertionError(f"GLSL Validation Failed:\n{result.stdout}{result.stderr}\nSOURCE:\n{shader_code}")
    return _validator
