#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  BATTED BALL TRAJECTORY SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete simulation pipeline:
    1. Air density verification
    2. Reference flight (default batted ball)
    3. Validation against the reference landing point
    4. Back-spin comparison
    5. Euler vs RK4 accuracy comparison
    6. Wind effects
    7. Ballpark conditions (elevation and temperature)
    8. Full dashboard

  All outputs saved to outputs/ directory.

  Usage:
    python main.py              # Run everything
    python main.py --debug      # Also write battedball.log at DEBUG level
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import os
import time

from battedball import (
    Ball, Environment, Impact, Trajectory, simulate,
    run_all_validations, enable_file_logging, disable_file_logging,
)
from battedball.visualization import (
    plot_trajectory, plot_spin_comparison, plot_density_profile,
    plot_method_comparison, plot_dashboard, ensure_output_dir,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def main():
    start_time = time.time()
    debug = '--debug' in sys.argv
    if debug:
        enable_file_logging('battedball.log')

    out = ensure_output_dir('outputs')

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Air Density
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Air Density")
    print(f"  {'Elev (ft)':>9} {'50 °F':>10} {'70 °F':>10} {'90 °F':>10}")
    for h in [0, 1000, 2500, 5200]:
        rhos = [Environment(temperature=t, elevation=h).calculate_rho()
                for t in (50.0, 70.0, 90.0)]
        print(f"  {h:>9} " + " ".join(f"{r:>10.5f}" for r in rhos))

    fig_rho = plot_density_profile(save_path=f'{out}/01_density_profile.png')
    plt.close(fig_rho)
    print(f"\n  ✓ Saved: {out}/01_density_profile.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Reference Flight
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Reference Flight (103 mph, 27.5°, 2500 rpm)")
    trajectory = Trajectory(Ball(), Environment(), Impact())
    result = simulate(trajectory, delta=0.01)
    print(result.summary())

    fig_traj = plot_trajectory(result, save_path=f'{out}/02_reference_trajectory.png')
    plt.close(fig_traj)
    print(f"  ✓ Saved: {out}/02_reference_trajectory.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Validation — Reference Landing Point")
    run_all_validations(verbose=True)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Spin Comparison
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Back Spin Comparison")
    spin_results = {}
    for rpm in [1000, 1800, 2500, 3500]:
        r = simulate(Trajectory(impact=Impact(back_spin=rpm)), delta=0.01)
        spin_results[f'{rpm} rpm'] = r
        print(f"  {rpm:>5} rpm   Distance: {r.distance:>6.1f} ft  "
              f"Apex: {r.apex:>5.1f} ft  Hang: {r.hang_time:>5.2f} s")

    fig_spin = plot_spin_comparison(spin_results, save_path=f'{out}/03_spin_comparison.png')
    plt.close(fig_spin)
    print(f"\n  ✓ Saved: {out}/03_spin_comparison.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Euler vs RK4
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Euler vs RK4 Numerical Accuracy")
    dt_test = 0.1  # Large timestep to show differences
    result_euler = simulate(trajectory, delta=dt_test, method='euler')
    result_rk4 = simulate(trajectory, delta=dt_test, method='rk4')
    print(f"  Timestep: {dt_test} s")
    print(f"  Euler  — Distance: {result_euler.distance:.2f} ft  |  Apex: {result_euler.apex:.2f} ft")
    print(f"  RK4    — Distance: {result_rk4.distance:.2f} ft  |  Apex: {result_rk4.apex:.2f} ft")

    fig_cmp = plot_method_comparison(result_euler, result_rk4,
                                     save_path=f'{out}/04_euler_vs_rk4.png')
    plt.close(fig_cmp)
    print(f"\n  ✓ Saved: {out}/04_euler_vs_rk4.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Wind Effects
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 6: Wind Effects")
    wind_cases = [
        ("No Wind", 0.0, 0.0),
        ("Out to CF 10 mph", 10.0, 0.0),
        ("In from CF 10 mph", 10.0, 180.0),
        ("Left to right 10 mph", 10.0, 90.0),
    ]
    for label, speed, direction in wind_cases:
        env = Environment(wind_speed=speed, wind_direction=direction)
        r = simulate(Trajectory(environment=env), delta=0.01)
        print(f"  {label:<25s}  Distance: {r.distance:>6.1f} ft  Lateral: {r.lateral:>+6.1f} ft")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 7: Ballpark Conditions
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 7: Ballpark Conditions")
    parks = [
        ("Sea level, 70 °F", Environment(elevation=15.0)),
        ("Denver, 70 °F", Environment(elevation=5200.0)),
        ("Sea level, 45 °F", Environment(temperature=45.0)),
        ("Sea level, 95 °F", Environment(temperature=95.0)),
    ]
    for label, env in parks:
        r = simulate(Trajectory(environment=env), delta=0.01)
        print(f"  {label:<25s}  ρ={env.calculate_rho():.5f} lb/ft³  "
              f"Distance: {r.distance:>6.1f} ft")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 8: Dashboard
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 8: Full Dashboard")
    fig_dash = plot_dashboard(result, save_path=f'{out}/05_dashboard.png')
    plt.close(fig_dash)
    print(f"  ✓ Saved: {out}/05_dashboard.png")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"""
  All outputs saved to: {os.path.abspath(out)}/

  Generated files:
    01_density_profile.png       — Air density vs elevation
    02_reference_trajectory.png  — Side and top view of the reference flight
    03_spin_comparison.png       — Back-spin comparison
    04_euler_vs_rk4.png          — Numerical method comparison
    05_dashboard.png             — Full flight data dashboard

  Total runtime: {elapsed:.1f} seconds
""")
    if debug:
        disable_file_logging()


if __name__ == "__main__":
    main()
