# tests/conftest.py
import numpy as np
import pytest

from gearopt_core import DesignRequirements, solve

# Requirements used throughout: 50 N*m at 120 rpm from a 1200 rpm source, mild steel.
REFERENCE_REQUIREMENTS = dict(
    target_output_torque=50.0,
    target_output_rpm=120.0,
    nominal_input_rpm=1200.0,
    material_yield_strength=250.0,
)

def lewis_stress_mpa(torque_nm, teeth, module_mm):
    """Independent evaluation of the Lewis root stress with face width 10 * module."""
    y = 0.484 - 2.87 / teeth
    pitch_radius_m = teeth * module_mm / 2 / 1000
    face_width_m = 10 * module_mm / 1000
    module_m = module_mm / 1000
    return (torque_nm / pitch_radius_m) / (face_width_m * module_m * y) / 1e6

@pytest.fixture
def reference_requirements():
    return DesignRequirements(**REFERENCE_REQUIREMENTS)

@pytest.fixture
def reference_design(reference_requirements):
    return solve(reference_requirements)

@pytest.fixture
def make_requirements():
    """Factory for requirements that differ from the reference in a few fields."""
    def _make(**overrides):
        values = dict(REFERENCE_REQUIREMENTS)
        values.update(overrides)
        return DesignRequirements(**values)
    return _make

@pytest.fixture
def seeded_rng():
    return np.random.default_rng(12345)

@pytest.fixture
def lewis_stress():
    return lewis_stress_mpa
