"""
Unit Tests for the Force Model
==============================
Atmosphere, impact kinematics, constants derivation, acceleration and the
single-step state transition.
Run: python -m pytest tests/ -v
"""

import numpy as np
import pytest

from battedball.units import (
    f_to_c, in_hg_to_mm_hg, mph_to_fps, rpm_to_rad_s, MPH_TO_FPS, RPM_TO_RAD_S,
)
from battedball.atmosphere import Environment, density_profile
from battedball.projectile import Ball, Impact
from battedball.aerodynamics import (
    GRAVITY, STATIC_DRAG_COEFFICIENT, calculate_c_0, omega_to_omega_r,
    calculate_drag_decay, calculate_lift_coefficient, calculate_drag_coefficient,
    calculate_relative_wind_speed, calculate_spin_parameter, wind_offset,
)
from battedball.trajectory import Constants, State, Trajectory
from battedball.exceptions import DegenerateImpactError, TrajectoryError


class TestUnits:

    def test_freezing_and_boiling(self):
        assert f_to_c(32.0) == 0.0
        assert f_to_c(212.0) == pytest.approx(100.0)

    def test_standard_pressure(self):
        assert in_hg_to_mm_hg(29.92) == pytest.approx(759.97, abs=0.01)

    def test_speed_and_spin_factors(self):
        assert mph_to_fps(100.0) == pytest.approx(146.7)
        assert rpm_to_rad_s(60.0) == pytest.approx(2.0 * np.pi)


class TestAtmosphere:
    """Air density and wind decomposition."""

    def test_default_density(self):
        assert Environment().calculate_rho() == pytest.approx(0.07465, abs=5e-4)

    def test_density_increases_as_elevation_decreases(self):
        rhos = [Environment(elevation=h).calculate_rho() for h in (5200, 2500, 1000, 0)]
        assert rhos[0] < rhos[1] < rhos[2] < rhos[3]

    def test_density_decreases_as_temperature_increases(self):
        rhos = [Environment(temperature=t).calculate_rho() for t in (40, 60, 80, 100)]
        assert rhos[0] > rhos[1] > rhos[2] > rhos[3]

    def test_humid_air_is_lighter(self):
        assert (Environment(relative_humidity=90).calculate_rho()
                < Environment(relative_humidity=10).calculate_rho())

    def test_saturation_vapour_pressure_at_freezing(self):
        assert Environment(temperature=32.0).calculate_svp() == pytest.approx(4.5841)

    def test_wind_toward_center_field(self):
        wind = Environment(wind_speed=10.0, wind_direction=0.0).calculate_wind_velocity()
        assert wind[0] == 0.0
        assert wind[1] == 10.0 * 1.467

    def test_wind_toward_right_field_line(self):
        wind = Environment(wind_speed=10.0, wind_direction=90.0).calculate_wind_velocity()
        assert wind[0] == pytest.approx(10.0 * 1.467)
        assert wind[1] == pytest.approx(0.0, abs=1e-12)

    def test_density_profile(self):
        profile = density_profile(np.array([0.0, 3000.0, 6000.0]))
        assert np.all(np.diff(profile['density']) < 0)


class TestImpact:
    """Launch velocity and spin vectors."""

    def test_velocity_magnitude(self):
        v = Impact.calculate_velocity(100.0, 30.0, 20.0)
        assert np.linalg.norm(v) == pytest.approx(146.7)

    def test_straightaway_has_no_lateral_component(self):
        v = Impact.calculate_velocity(103.0, 27.5, 0.0)
        assert v[0] == 0.0
        assert v[2] == pytest.approx(103.0 * MPH_TO_FPS * np.sin(np.radians(27.5)))

    def test_vertical_launch(self):
        v = Impact.calculate_velocity(50.0, 90.0, 0.0)
        np.testing.assert_allclose(v, [0.0, 0.0, 50.0 * 1.467], atol=1e-9)

    def test_pull_direction(self):
        v = Impact.calculate_velocity(90.0, 20.0, -30.0)
        assert v[0] < 0 and v[1] > 0

    def test_pure_back_spin(self):
        impact = Impact()
        spin = impact.calculate_cartesian_spin(impact.calculate_initial_velocity())
        np.testing.assert_allclose(spin, [2500.0 * RPM_TO_RAD_S, 0.0, 0.0], atol=1e-12)

    def test_side_spin_on_a_line_drive(self):
        impact = Impact(launch_angle=0.0, back_spin=0.0, side_spin=1000.0)
        spin = impact.calculate_cartesian_spin(impact.calculate_initial_velocity())
        np.testing.assert_allclose(spin, [0.0, 0.0, 1000.0 * np.pi / 30.0], atol=1e-12)

    def test_gyro_spin_is_along_velocity(self):
        impact = Impact(back_spin=0.0, gyro_spin=1200.0, direction=15.0)
        velocity = impact.calculate_initial_velocity()
        spin = impact.calculate_cartesian_spin(velocity)
        np.testing.assert_allclose(np.cross(spin, velocity), 0.0, atol=1e-9)
        assert np.linalg.norm(spin) == pytest.approx(1200.0 * np.pi / 30.0)


class TestConstants:

    def test_reference_ball_coefficient(self):
        rho = Environment().calculate_rho()
        assert calculate_c_0(5.125, 9.125, rho) == pytest.approx(0.07182 * rho)

    def test_heavier_ball_has_smaller_coefficient(self):
        assert calculate_c_0(6.0, 9.125, 0.075) < calculate_c_0(5.0, 9.125, 0.075)

    def test_surface_speed(self):
        omega = 2500.0 * np.pi / 30.0
        radius_ft = 9.125 / 2.0 / np.pi / 12.0
        assert omega_to_omega_r(9.125, omega) == pytest.approx(radius_ft * omega)

    def test_from_conditions(self):
        ball, env, impact = Ball(), Environment(), Impact()
        constants = Constants.from_conditions(ball, env, impact)
        np.testing.assert_array_equal(constants.initial_position, [0.0, 2.0, 3.0])
        np.testing.assert_array_equal(constants.initial_spin, [2500.0, 0.0, 0.0])
        assert constants.omega == pytest.approx(2500.0 * np.pi / 30.0)
        assert constants.wind_height == env.wind_height
        np.testing.assert_array_equal(constants.wind_velocity, [0.0, 0.0])

    def test_zero_exit_speed_is_degenerate(self):
        with pytest.raises(DegenerateImpactError) as err:
            Trajectory(impact=Impact(exit_speed=0.0))
        assert err.value.impact.exit_speed == 0.0
        assert isinstance(err.value, ValueError)
        assert isinstance(err.value, TrajectoryError)

    def test_nan_atmosphere_is_degenerate(self):
        with pytest.raises(DegenerateImpactError):
            Trajectory(environment=Environment(temperature=float('nan')))

    def test_zero_spin_is_allowed(self):
        trajectory = Trajectory(impact=Impact(back_spin=0.0))
        assert trajectory.constants.omega == 0.0

    def test_trajectory_keeps_its_own_copies(self):
        impact = Impact()
        trajectory = Trajectory(impact=impact)
        velocity = trajectory.constants.initial_velocity.copy()
        impact.exit_speed = 60.0
        assert trajectory.impact.exit_speed == 103.0
        np.testing.assert_array_equal(trajectory.constants.initial_velocity, velocity)

    def test_constants_are_frozen(self, default_trajectory):
        with pytest.raises(AttributeError):
            default_trajectory.constants.c_0 = 1.0

    def test_constant_vectors_are_read_only(self, default_trajectory):
        constants = default_trajectory.constants
        with pytest.raises(ValueError):
            constants.cartesian_spin[0] = 0.0
        with pytest.raises(ValueError):
            constants.initial_velocity[1] = 0.0
        assert constants.cartesian_spin[0] == pytest.approx(2500.0 * RPM_TO_RAD_S)

    @pytest.mark.parametrize('ball', [
        Ball(mass=0.0),
        Ball(mass=-5.125),
        Ball(mass=float('nan')),
        Ball(circumference=0.0),
    ])
    def test_non_physical_ball_is_degenerate(self, ball):
        with pytest.raises(DegenerateImpactError):
            Trajectory(ball=ball)

    @pytest.mark.parametrize('env', [
        Environment(wind_speed=float('nan')),
        Environment(wind_speed=float('inf')),
        Environment(wind_speed=10.0, wind_height=float('nan')),
    ])
    def test_non_finite_wind_is_degenerate(self, env):
        with pytest.raises(DegenerateImpactError):
            Trajectory(environment=env)

    def test_infinite_wind_height_means_no_wind(self):
        calm = Trajectory()
        sheltered = Trajectory(environment=Environment(wind_speed=10.0,
                                                       wind_height=float('inf')))
        state = calm.get_initial_state()
        np.testing.assert_allclose(sheltered.calculate_acceleration(state),
                                   calm.calculate_acceleration(state))


class TestAerodynamics:

    def test_no_decay_at_contact(self):
        assert calculate_drag_decay(0.0, 150.0) == 1.0

    def test_decay_faster_at_higher_speed(self):
        assert calculate_drag_decay(2.0, 200.0) < calculate_drag_decay(2.0, 100.0)

    def test_decay_for_ball_at_rest(self):
        assert calculate_drag_decay(3.0, 0.0) == 1.0

    def test_drag_coefficient_without_spin(self):
        assert calculate_drag_coefficient(np.zeros(3), 1.0) == STATIC_DRAG_COEFFICIENT

    def test_drag_coefficient_with_spin(self):
        cd = calculate_drag_coefficient(np.array([2500.0, 0.0, 0.0]), 1.0)
        assert cd == pytest.approx(0.3008 + 0.0292 * 2.5)

    def test_lift_coefficient(self):
        assert calculate_lift_coefficient(0.0) == 0.0
        assert calculate_lift_coefficient(0.2) == pytest.approx(1.0 / 4.32)
        assert calculate_lift_coefficient(1e9) == pytest.approx(1.0 / 2.32)

    def test_wind_ignored_below_wind_height(self):
        v = np.array([0.0, 100.0, 20.0])
        wind = np.array([0.0, 20.0])
        assert calculate_relative_wind_speed(wind, 50.0, v, 10.0) == pytest.approx(np.linalg.norm(v))
        assert calculate_relative_wind_speed(wind, 50.0, v, 60.0) == pytest.approx(np.hypot(80.0, 20.0))

    def test_wind_offset(self):
        assert wind_offset(14.67, 5.0) == pytest.approx(9.67)
        assert wind_offset(3.0, 5.0) == 0.0
        assert wind_offset(-14.67, 0.0) == 0.0


class TestAcceleration:
    """Structural properties of drag + Magnus + gravity."""

    @pytest.mark.parametrize('impact', [
        Impact(),
        Impact(side_spin=800.0, gyro_spin=300.0, direction=25.0),
        Impact(back_spin=-1500.0, launch_angle=-5.0, direction=-40.0),
    ])
    def test_magnus_has_no_x_component(self, impact):
        env = Environment(wind_speed=12.0, wind_direction=45.0)
        trajectory = Trajectory(environment=env, impact=impact)
        state = trajectory.get_initial_state()
        for _ in range(50):
            magnus = trajectory.calculate_magnus_acceleration(0.3, state.velocity, 120.0)
            assert magnus[0] == 0.0
            state = state.step(trajectory, 0.01)

    def test_back_spin_lifts(self, default_trajectory):
        state = default_trajectory.get_initial_state()
        magnus = default_trajectory.calculate_magnus_acceleration(0.2, state.velocity, state.speed)
        assert magnus[2] > 0

    def test_zero_spin_is_drag_only(self):
        trajectory = Trajectory(impact=Impact(back_spin=0.0))
        state = trajectory.get_initial_state()
        a = trajectory.calculate_acceleration(state)
        np.testing.assert_array_equal(
            trajectory.calculate_magnus_acceleration(0.0, state.velocity, state.speed), 0.0)
        drag = a + np.array([0.0, 0.0, GRAVITY])
        assert np.dot(drag, state.velocity) < 0
        np.testing.assert_allclose(np.cross(drag, state.velocity), 0.0, atol=1e-9)

    def test_ball_at_rest_only_feels_gravity(self, default_trajectory):
        state = State(position=np.array([0.0, 0.0, 10.0]), velocity=np.zeros(3),
                      spin=np.array([2500.0, 0.0, 0.0]), hang_time=1.0)
        a = default_trajectory.calculate_acceleration(state)
        np.testing.assert_allclose(a, [0.0, 0.0, -GRAVITY])

    def test_acceleration_does_not_mutate_state(self, default_trajectory):
        state = default_trajectory.get_initial_state()
        velocity = state.velocity.copy()
        default_trajectory.calculate_acceleration(state)
        np.testing.assert_array_equal(state.velocity, velocity)

    def test_drag_uses_offset_wind(self):
        # 10 mph toward center field, applied from 5 ft up
        trajectory = Trajectory(environment=Environment(wind_speed=10.0, wind_height=5.0))
        constants = trajectory.constants
        velocity = np.array([5.0, 120.0, 30.0])
        drag = trajectory.calculate_drag_acceleration(
            velocity, constants.wind_velocity, 110.0, 0.35)
        k = -constants.c_0 * 0.35 * 110.0
        np.testing.assert_allclose(drag, [k * 5.0, k * (120.0 - 9.67), k * 30.0])

    def test_magnus_uses_offset_wind(self):
        trajectory = Trajectory(environment=Environment(wind_speed=10.0, wind_height=5.0))
        constants = trajectory.constants
        velocity = np.array([5.0, 120.0, 30.0])
        magnus = trajectory.calculate_magnus_acceleration(0.2, velocity, 110.0)
        wx, wy, wz = constants.cartesian_spin
        scale = constants.c_0 * (calculate_lift_coefficient(0.2) / constants.omega) * 110.0
        np.testing.assert_allclose(magnus, [
            0.0,
            scale * (wz * 5.0 - wx * 30.0),
            scale * (wx * (120.0 - 9.67) - wy * 5.0),
        ])

    @pytest.mark.parametrize('z, relative_wind', [
        (2.0, np.array([0.0, 0.0])),
        (50.0, np.array([0.0, 14.67])),
    ])
    def test_acceleration_with_wind(self, z, relative_wind):
        trajectory = Trajectory(environment=Environment(wind_speed=10.0, wind_height=5.0))
        c = trajectory.constants
        velocity = np.array([5.0, 120.0, 30.0])
        state = State(position=np.array([0.0, 50.0, z]), velocity=velocity,
                      spin=c.initial_spin, hang_time=0.5)

        v_rel = np.linalg.norm(velocity - np.append(relative_wind, 0.0))
        decay = calculate_drag_decay(0.5, np.linalg.norm(velocity))
        s = calculate_spin_parameter(c.omega_r, v_rel, decay)
        cd = calculate_drag_coefficient(c.initial_spin, decay)
        offset_velocity = velocity - np.array([0.0, 9.67, 0.0])
        drag = -c.c_0 * cd * v_rel * offset_velocity
        scale = c.c_0 * (calculate_lift_coefficient(s) / c.omega) * v_rel
        wx, wy, wz = c.cartesian_spin
        magnus = scale * np.array([
            0.0,
            wz * velocity[0] - wx * velocity[2],
            wx * offset_velocity[1] - wy * velocity[0],
        ])
        expected = drag + magnus - np.array([0.0, 0.0, GRAVITY])

        np.testing.assert_allclose(trajectory.calculate_acceleration(state), expected,
                                   rtol=1e-9)


class TestState:
    """The single-step transition."""

    def test_initial_state(self, default_trajectory):
        state = default_trajectory.get_initial_state()
        assert state.hang_time == 0.0
        assert state.get_position() == (0.0, 2.0, 3.0)

    def test_states_do_not_share_vectors(self, default_trajectory):
        first = default_trajectory.get_initial_state()
        for step in (first.step, first.step_rk4):
            second = step(default_trajectory, 0.01)
            assert second.spin is not first.spin
            with pytest.raises(ValueError):
                second.spin[0] = 0.0
            with pytest.raises(ValueError):
                second.position[2] = 0.0
        np.testing.assert_array_equal(first.spin, [2500.0, 0.0, 0.0])

    def test_state_copies_caller_arrays(self):
        position = np.array([0.0, 0.0, 10.0])
        state = State(position=position, velocity=np.zeros(3),
                      spin=np.zeros(3), hang_time=0.0)
        position[2] = -1.0
        assert state.position[2] == 10.0
        assert not state.has_landed

    def test_step_formula(self, default_trajectory):
        state = default_trajectory.get_initial_state()
        delta = 0.01
        a = default_trajectory.calculate_acceleration(state)
        new = state.step(default_trajectory, delta)
        np.testing.assert_array_equal(
            new.position, state.position + state.velocity * delta + a * (delta * delta) / 2.0)
        np.testing.assert_array_equal(new.velocity, state.velocity + a * delta)
        np.testing.assert_array_equal(new.spin, state.spin)

    def test_step_is_pure(self, default_trajectory):
        state = default_trajectory.get_initial_state()
        position = state.position.copy()
        state.step(default_trajectory, 0.01)
        np.testing.assert_array_equal(state.position, position)
        assert state.hang_time == 0.0

    def test_step_is_deterministic(self, default_trajectory):
        state = default_trajectory.get_initial_state()
        for _ in range(100):
            state = state.step(default_trajectory, 0.01)
        a = state.step(default_trajectory, 0.01)
        b = state.step(default_trajectory, 0.01)
        assert np.array_equal(a.position, b.position)
        assert np.array_equal(a.velocity, b.velocity)
        assert a.hang_time == b.hang_time

    def test_hang_time_increases_by_delta(self, default_trajectory):
        state = default_trajectory.get_initial_state()
        for _ in range(200):
            new = state.step(default_trajectory, 0.01)
            assert new.hang_time == state.hang_time + 0.01
            assert new.hang_time > state.hang_time
            state = new

    def test_step_keeps_going_below_ground(self, default_trajectory):
        state = State(position=np.array([0.0, 400.0, -5.0]),
                      velocity=np.array([0.0, 60.0, -80.0]),
                      spin=np.array([2500.0, 0.0, 0.0]), hang_time=6.0)
        assert state.has_landed
        assert state.step(default_trajectory, 0.01).position[2] < -5.0

    def test_rk4_step_matches_euler_for_small_delta(self, default_trajectory):
        state = default_trajectory.get_initial_state()
        euler = state.step(default_trajectory, 1e-4)
        rk4 = state.step_rk4(default_trajectory, 1e-4)
        np.testing.assert_allclose(rk4.position, euler.position, atol=1e-8)
        assert rk4.hang_time == euler.hang_time


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
