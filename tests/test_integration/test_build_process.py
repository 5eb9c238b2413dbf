# tests/test_integration/test_build_process.py

"""
End-to-end tests: requirements file -> design -> review -> simulation.
"""

import numpy as np
import pytest

from gearopt_core import (
    DesignError,
    DesignReviewer,
    SimulationHistory,
    format_design_summary,
    run_simulation,
    run_with_settings,
    solve_requirements_file,
)


@pytest.fixture(scope="module")
def requirements_dir(tmp_path_factory):
    root = tmp_path_factory.mktemp("design_runs")

    (root / "winch.yaml").write_text("""
name: winch
target_output:
  rpm: 120 rpm
  torque: 50 N*m
nominal_input_rpm: 1200 rpm
material: mild_steel
input_variability: noise
simulation:
  duration: 15 s
  dt: 0.05 s
""")

    (root / "mixer.yaml").write_text("""
name: mixer
target_output:
  rpm: 130
  power: "0.9 kW"
nominal_input_rpm: 1000
yield_strength: "200 MPa"
input_variability: sine
simulation:
  duration: 3.2
  dt: 0.1
  history_capacity: 16
""")

    (root / "motor.yaml").write_text("""
name: motor_limited
target_output:
  rpm: 120 rpm
input_source:
  torque: 5 N*m
nominal_input_rpm: 1200 rpm
material: mild_steel
""")

    (root / "typo.yaml").write_text("""
name: typo
target_output: {rpm: 120, torque: 50}
nominal_input_rpm: 1200
material: mild_steel
input_varibility: sine
""")
    return root


def test_file_to_simulation_with_noise(requirements_dir):
    design, built = solve_requirements_file(requirements_dir / "winch.yaml")
    assert DesignReviewer(built.requirements, design).review_or_raise() == []

    settings = built.simulation
    trace, history = run_simulation(
        design, built.requirements, settings.duration, settings.dt,
        rng=np.random.default_rng(11), history=SimulationHistory(settings.history_capacity),
    )
    assert len(trace) == 200
    assert trace.time[0] == pytest.approx(5.05)
    low, high = trace.input_rpm_range
    assert 960.0 <= low < high < 1440.0
    np.testing.assert_allclose(trace.stress, trace.stress[0])


def test_file_to_simulation_with_custom_history(requirements_dir):
    design, built = solve_requirements_file(requirements_dir / "mixer.yaml")
    issues = DesignReviewer(built.requirements, design).review_or_raise()
    assert [issue.code for issue in issues] == ["RATIO_ROUNDING"]

    trace, history = run_with_settings(design, built.requirements, built.simulation)
    assert history.capacity == 16
    assert len(trace) == 16
    assert trace.time[-1] == pytest.approx(3.2)


def test_summary_for_solved_file(requirements_dir):
    design, _ = solve_requirements_file(requirements_dir / "winch.yaml")
    summary = format_design_summary(design)
    assert "- Ratio: 10.00:1" in summary
    assert "- Module: 1.25 mm" in summary
    assert "- Pinion: 18 teeth, 1200 RPM, 22.5mm Dia" in summary
    assert "- Gear: 180 teeth, 50.0 Nm Torque, 225.0mm Dia" in summary
    assert "- Safety Factor (Bending): ~2.00" in summary


def test_misspelled_key_is_a_design_error(requirements_dir):
    with pytest.raises(DesignError) as excinfo:
        solve_requirements_file(requirements_dir / "typo.yaml")
    assert "input_varibility" in str(excinfo.value)


def test_source_torque_file_matches_output_torque_design(requirements_dir):
    from_source, built = solve_requirements_file(requirements_dir / "motor.yaml")
    from_output, _ = solve_requirements_file(requirements_dir / "winch.yaml")
    assert built.requirements.target_output_torque == pytest.approx(50.0)
    assert from_source.module == from_output.module == 1.25
    assert from_source.gear.teeth == from_output.gear.teeth == 180
