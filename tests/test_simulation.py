# tests/test_simulation.py
import math

import numpy as np
import pytest

from gearopt_core import (
    InputVariability,
    NonFiniteStateError,
    SimulationConfigError,
    SimulationHistory,
    SimulationPoint,
    SimulationRunError,
    SimulationSettings,
    run_simulation,
    run_with_settings,
    solve,
    step,
)
from gearopt_core.simulation import input_factor, time_grid


# --- Single step ---

class TestConstantForcing:

    def test_step_at_time_zero(self, reference_design, reference_requirements, lewis_stress):
        point = step(0.0, reference_design, reference_requirements)

        assert point.time == 0.0
        assert point.output_torque == 50.0
        assert point.input_torque == pytest.approx(5.0)
        assert point.output_rpm == pytest.approx(120.0)
        assert point.input_rpm == 1200.0
        assert point.stress == pytest.approx(lewis_stress(5.0, 18, 1.25), rel=1e-12)
        assert point.stress == pytest.approx(87.6412, abs=1e-3)

    def test_constant_mode_is_time_invariant(self, reference_design, reference_requirements):
        points = [step(t, reference_design, reference_requirements) for t in (0.0, 0.37, 1.0, 12.5, 100.0)]
        first = points[0]
        for point in points[1:]:
            assert point.input_rpm == first.input_rpm
            assert point.output_rpm == first.output_rpm
            assert point.input_torque == first.input_torque
            assert point.output_torque == first.output_torque
            assert point.stress == first.stress
        assert [p.time for p in points] == [0.0, 0.37, 1.0, 12.5, 100.0]

    def test_stress_equals_design_stress_at_realized_module(self, reference_design, reference_requirements):
        point = step(0.0, reference_design, reference_requirements)
        assert 250.0 / point.stress == pytest.approx(reference_design.realized_safety_factor)


class TestSineForcing:

    @pytest.fixture
    def sine_requirements(self, reference_requirements):
        return reference_requirements.replace(input_variability=InputVariability.SINE)

    def test_peak_and_trough(self, reference_design, sine_requirements):
        peak = step(math.pi / 4, reference_design, sine_requirements)
        trough = step(3 * math.pi / 4, reference_design, sine_requirements)
        assert peak.input_rpm == pytest.approx(1200.0 * 1.3)
        assert trough.input_rpm == pytest.approx(1200.0 * 0.7)
        assert peak.output_rpm == pytest.approx(peak.input_rpm / 10.0)

    @pytest.mark.parametrize("t", [0.0, 0.3, 1.1, 2.9, 7.25])
    def test_periodic_with_period_pi(self, reference_design, sine_requirements, t):
        a = step(t, reference_design, sine_requirements)
        b = step(t + math.pi, reference_design, sine_requirements)
        assert a.input_rpm == pytest.approx(b.input_rpm, rel=1e-9)

    def test_ripple_stays_within_thirty_percent(self, reference_design, sine_requirements):
        rpms = np.array([step(t, reference_design, sine_requirements).input_rpm for t in np.linspace(0, 10, 501)])
        assert np.all(rpms >= 1200.0 * 0.7 - 1e-9)
        assert np.all(rpms <= 1200.0 * 1.3 + 1e-9)

    def test_torque_and_stress_do_not_follow_speed(self, reference_design, sine_requirements):
        peak = step(math.pi / 4, reference_design, sine_requirements)
        trough = step(3 * math.pi / 4, reference_design, sine_requirements)
        assert peak.input_torque == trough.input_torque
        assert peak.stress == trough.stress


class TestNoiseForcing:

    @pytest.fixture
    def noise_requirements(self, reference_requirements):
        return reference_requirements.replace(input_variability="noise")

    def test_jitter_stays_within_twenty_percent(self, reference_design, noise_requirements, seeded_rng):
        rpms = [step(0.1 * i, reference_design, noise_requirements, rng=seeded_rng).input_rpm for i in range(2000)]
        assert min(rpms) >= 1200.0 * 0.8
        assert max(rpms) < 1200.0 * 1.2
        assert len(set(rpms)) > 1

    def test_same_seed_reproduces_sequence(self, reference_design, noise_requirements):
        rng_a = np.random.default_rng(7)
        rng_b = np.random.default_rng(7)
        seq_a = [step(t, reference_design, noise_requirements, rng=rng_a).input_rpm for t in range(20)]
        seq_b = [step(t, reference_design, noise_requirements, rng=rng_b).input_rpm for t in range(20)]
        assert seq_a == seq_b

    def test_matches_uniform_draw(self, reference_design, noise_requirements):
        expected_u = np.random.default_rng(99).random()
        point = step(0.0, reference_design, noise_requirements, rng=np.random.default_rng(99))
        assert point.input_rpm == pytest.approx(1200.0 * (1 + (expected_u - 0.5) * 0.4))

    def test_default_generator_is_used_when_none_given(self, reference_design, noise_requirements):
        point = step(0.0, reference_design, noise_requirements)
        assert 1200.0 * 0.8 <= point.input_rpm < 1200.0 * 1.2


def test_input_factor_constant_ignores_generator(seeded_rng):
    assert input_factor(3.0, InputVariability.CONSTANT, seeded_rng) == 1.0


# --- History buffer ---

class TestSimulationHistory:

    @staticmethod
    def _point(t):
        return SimulationPoint(time=t, input_torque=5.0, output_torque=50.0, input_rpm=1200.0, output_rpm=120.0, stress=1.0)

    def test_evicts_oldest_first(self):
        history = SimulationHistory()
        for i in range(250):
            history.append(self._point(float(i)))
        assert history.capacity == 200
        assert len(history) == 200
        assert history.is_full
        times = [p.time for p in history]
        assert times[0] == 50.0
        assert history.latest.time == 249.0

    def test_custom_capacity_and_clear(self):
        history = SimulationHistory(capacity=3)
        for i in range(5):
            history.append(self._point(float(i)))
        assert [p.time for p in history] == [2.0, 3.0, 4.0]
        history.clear()
        assert len(history) == 0
        assert history.latest is None

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            SimulationHistory(capacity=0)

    def test_trace_columns(self):
        history = SimulationHistory(capacity=10)
        for i in range(4):
            history.append(self._point(float(i)))
        trace = history.to_trace()
        assert len(trace) == 4
        np.testing.assert_allclose(trace.time, [0.0, 1.0, 2.0, 3.0])
        assert trace.peak_stress == 1.0
        assert trace.mean_input_rpm == 1200.0


# --- Driver ---

class TestRunSimulation:

    def test_time_grid(self):
        times = time_grid(duration=1.0, dt=0.25)
        np.testing.assert_allclose(times, [0.25, 0.5, 0.75, 1.0])
        np.testing.assert_allclose(time_grid(0.5, 0.25, start_time=2.0), [2.25, 2.5])
        assert len(time_grid(0.0, 0.1)) == 0

    def test_run_fills_history(self, reference_design, reference_requirements):
        trace, history = run_simulation(reference_design, reference_requirements, duration=10.0, dt=0.05)
        assert len(trace) == 200
        assert len(history) == 200
        assert trace.time[0] == pytest.approx(0.05)
        assert trace.time[-1] == pytest.approx(10.0)
        assert np.all(np.diff(trace.time) > 0)
        np.testing.assert_allclose(trace.output_torque, 50.0)

    def test_long_run_keeps_trailing_window(self, reference_design, reference_requirements):
        trace, _ = run_simulation(reference_design, reference_requirements, duration=15.0, dt=0.05)
        assert len(trace) == 200
        assert trace.time[0] == pytest.approx(5.05)
        assert trace.time[-1] == pytest.approx(15.0)

    def test_resume_from_history(self, reference_design, reference_requirements):
        sine_req = reference_requirements.replace(input_variability="sine")
        first, history = run_simulation(reference_design, sine_req, duration=1.0, dt=0.1)
        second, history = run_simulation(
            reference_design, sine_req, duration=1.0, dt=0.1, start_time=first.time[-1], history=history,
        )
        assert len(second) == 20
        assert second.time[-1] == pytest.approx(2.0)
        low, high = second.input_rpm_range
        assert 840.0 <= low < high <= 1560.0

    def test_seeded_noise_runs_are_reproducible(self, reference_design, reference_requirements):
        noise_req = reference_requirements.replace(input_variability="noise")
        a, _ = run_simulation(reference_design, noise_req, 2.0, 0.1, rng=np.random.default_rng(3))
        b, _ = run_simulation(reference_design, noise_req, 2.0, 0.1, rng=np.random.default_rng(3))
        np.testing.assert_array_equal(a.input_rpm, b.input_rpm)

    def test_input_power_varies_under_sine(self, reference_design, reference_requirements):
        sine_req = reference_requirements.replace(input_variability="sine")
        trace, _ = run_simulation(reference_design, sine_req, duration=3.2, dt=0.1)
        power = trace.input_power_kw()
        assert power.max() > power.min()
        np.testing.assert_allclose(trace.input_torque, 5.0)

    @pytest.mark.parametrize("duration, dt", [(1.0, 0.0), (1.0, -0.1), (-1.0, 0.1)])
    def test_invalid_time_grid(self, reference_design, reference_requirements, duration, dt):
        with pytest.raises(SimulationRunError) as excinfo:
            run_simulation(reference_design, reference_requirements, duration=duration, dt=dt)
        assert isinstance(excinfo.value.__cause__, SimulationConfigError)
        assert "Invalid Simulation Configuration" in str(excinfo.value)

    def test_degenerate_design_reports_non_finite_state(self, make_requirements):
        req = make_requirements(target_output_rpm=100000.0, nominal_input_rpm=100.0)
        design = solve(req)
        with pytest.raises(SimulationRunError) as excinfo:
            run_simulation(design, req, duration=0.5, dt=0.1)
        cause = excinfo.value.__cause__
        assert isinstance(cause, NonFiniteStateError)
        assert cause.quantity == "output_rpm"


class TestRunWithSettings:

    def test_history_capacity_comes_from_settings(self, reference_design, reference_requirements):
        settings = SimulationSettings(duration=1.0, dt=0.25, history_capacity=3)
        trace, history = run_with_settings(reference_design, reference_requirements, settings)
        assert history.capacity == 3
        np.testing.assert_allclose(trace.time, [0.5, 0.75, 1.0])

    def test_given_history_is_kept(self, reference_design, reference_requirements):
        history = SimulationHistory(capacity=10)
        trace, returned = run_with_settings(
            reference_design, reference_requirements, SimulationSettings(duration=1.0, dt=0.25, history_capacity=2),
            history=history,
        )
        assert returned is history
        assert len(trace) == 4
