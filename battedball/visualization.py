"""
Visualization
=============
Figures for flight analysis:
  1. Trajectory (side view: height vs downrange, top view: lateral vs downrange)
  2. Back-spin comparison
  3. Air density vs elevation
  4. Euler vs RK4 comparison
  5. Dashboard with key metrics
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec
from typing import Dict, Sequence
import os

from .integrator import FlightResult
from .atmosphere import density_profile


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
}

LEGEND_STYLE = dict(facecolor='#1a1a1a', edgecolor='#444',
                    labelcolor=STYLE['text_color'])


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _save(fig, save_path):
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Single Trajectory Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(result: FlightResult, save_path: str = None,
                    show: bool = False) -> plt.Figure:
    """Side and top view of a single flight."""
    fig, axes = plt.subplots(1, 2, figsize=(16, 6))
    _apply_dark_style(fig, axes)
    impact = result.trajectory.impact

    ax = axes[0]
    ax.plot(result.y, result.z, color=STYLE['accent_colors'][0], linewidth=2.5,
            label=f'{result.method.upper()} (dt={result.dt}s)')
    ax.plot(result.y[0], result.z[0], 'o', color='#00e676', markersize=10,
            label='Contact', zorder=5)
    ax.plot(result.y[-1], result.z[-1], 'x', color='#ff5252', markersize=12,
            markeredgewidth=3, label='Landing', zorder=5)
    idx_max = np.argmax(result.z)
    ax.plot(result.y[idx_max], result.z[idx_max], '^', color='#ffeb3b',
            markersize=10, label='Apex', zorder=5)
    ax.set_xlabel('Downrange (ft)', fontsize=12)
    ax.set_ylabel('Height (ft)', fontsize=12)
    ax.set_title(f'Side View — {impact.exit_speed:.0f} mph, '
                 f'θ={impact.launch_angle:.1f}°, {impact.back_spin:.0f} rpm',
                 fontsize=13, fontweight='bold')
    ax.legend(loc='upper right', fontsize=10, **LEGEND_STYLE)
    ax.set_ylim(bottom=0)

    ax = axes[1]
    ax.plot(result.y, result.x, color=STYLE['accent_colors'][4], linewidth=2.5)
    ax.axhline(y=0, color='#555', linestyle='--', alpha=0.5)
    ax.set_xlabel('Downrange (ft)', fontsize=12)
    ax.set_ylabel('Lateral (ft)', fontsize=12)
    ax.set_title('Top View', fontsize=13, fontweight='bold')

    plt.tight_layout()
    _save(fig, save_path)
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Spin Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_spin_comparison(results: Dict[str, FlightResult],
                         save_path: str = None) -> plt.Figure:
    """Trajectories and carries for the same launch at different spin rates."""
    fig, axes = plt.subplots(1, 2, figsize=(16, 6))
    _apply_dark_style(fig, axes)
    colors = STYLE['accent_colors']

    ax = axes[0]
    for (label, res), color in zip(results.items(), colors):
        ax.plot(res.y, res.z, color=color, linewidth=2, label=label)
    ax.set_xlabel('Downrange (ft)')
    ax.set_ylabel('Height (ft)')
    ax.set_title('Trajectory Comparison', fontweight='bold')
    ax.legend(fontsize=9, **LEGEND_STYLE)
    ax.set_ylim(bottom=0)

    ax = axes[1]
    names = list(results)
    carries = [results[k].distance for k in names]
    bars = ax.barh(names, carries, color=colors[:len(names)], alpha=0.85,
                   edgecolor='#555')
    ax.set_xlabel('Distance (ft)')
    ax.set_title('Distance Comparison', fontweight='bold')
    for bar, d in zip(bars, carries):
        ax.text(bar.get_width() + 2, bar.get_y() + bar.get_height()/2,
                f'{d:.0f} ft', va='center', color=STYLE['text_color'], fontsize=10)

    fig.suptitle('Effect of Back Spin — Same Exit Speed and Launch Angle',
                 fontsize=15, fontweight='bold', color=STYLE['text_color'], y=1.02)
    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Air Density Profile
# ══════════════════════════════════════════════════════════════════════════

def plot_density_profile(temperatures: Sequence[float] = (50.0, 70.0, 90.0),
                         save_path: str = None) -> plt.Figure:
    """Air density from sea level to 7000 ft at several temperatures."""
    elevations = np.linspace(0, 7000, 200)

    fig, ax = plt.subplots(figsize=(10, 6))
    _apply_dark_style(fig, ax)

    for temperature, color in zip(temperatures, STYLE['accent_colors']):
        profile = density_profile(elevations, temperature=temperature)
        ax.plot(profile['density'], profile['elevation'], color=color,
                linewidth=2, label=f'{temperature:.0f} °F')

    ax.set_xlabel('Air Density (lb/ft³)', fontsize=12)
    ax.set_ylabel('Elevation (ft)', fontsize=12)
    ax.set_title('Air Density vs Elevation (29.92 inHg, 50% RH)',
                 fontsize=14, fontweight='bold')
    ax.legend(fontsize=11, **LEGEND_STYLE)

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Euler vs RK4 Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_method_comparison(euler_result: FlightResult, rk4_result: FlightResult,
                           save_path: str = None) -> plt.Figure:
    """Compare Euler and RK4 flights of the same batted ball."""
    fig, axes = plt.subplots(1, 2, figsize=(16, 5))
    _apply_dark_style(fig, axes)

    ax = axes[0]
    ax.plot(euler_result.y, euler_result.z, color='#ff6b35', linewidth=2,
            linestyle='--', label=f'Euler (dt={euler_result.dt}s)')
    ax.plot(rk4_result.y, rk4_result.z, color='#00d4ff', linewidth=2,
            label=f'RK4 (dt={rk4_result.dt}s)')
    ax.set_xlabel('Downrange (ft)')
    ax.set_ylabel('Height (ft)')
    ax.set_title('Trajectory Comparison', fontweight='bold')
    ax.legend(fontsize=10, **LEGEND_STYLE)
    ax.set_ylim(bottom=0)

    ax = axes[1]
    ax.axis('off')
    text_lines = [
        f"{'Metric':<18} {'Euler':>10} {'RK4':>10} {'Δ':>9}",
        f"{'─'*49}",
        f"{'Distance (ft)':<18} {euler_result.distance:>10.2f} "
        f"{rk4_result.distance:>10.2f} "
        f"{euler_result.distance - rk4_result.distance:>+9.2f}",
        f"{'Apex (ft)':<18} {euler_result.apex:>10.2f} "
        f"{rk4_result.apex:>10.2f} "
        f"{euler_result.apex - rk4_result.apex:>+9.2f}",
        f"{'Hang time (s)':<18} {euler_result.hang_time:>10.2f} "
        f"{rk4_result.hang_time:>10.2f} "
        f"{euler_result.hang_time - rk4_result.hang_time:>+9.2f}",
    ]
    ax.text(0.05, 0.85, '\n'.join(text_lines), transform=ax.transAxes,
            fontsize=10, fontfamily='monospace', color=STYLE['text_color'],
            verticalalignment='top')
    ax.set_title('Numerical Comparison', fontweight='bold',
                 color=STYLE['text_color'])

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  5. Dashboard
# ══════════════════════════════════════════════════════════════════════════

def plot_dashboard(result: FlightResult, save_path: str = None) -> plt.Figure:
    """Trajectory, flight metrics and time histories on one page."""
    fig = plt.figure(figsize=(18, 10))
    fig.patch.set_facecolor(STYLE['bg_color'])
    gs = gridspec.GridSpec(2, 3, figure=fig, hspace=0.35, wspace=0.3)

    ax1 = fig.add_subplot(gs[0, :2])
    _apply_dark_style(fig, ax1)
    ax1.plot(result.y, result.z, color='#00d4ff', linewidth=2.5)
    ax1.set_xlabel('Downrange (ft)')
    ax1.set_ylabel('Height (ft)')
    ax1.set_title('TRAJECTORY', fontweight='bold', fontsize=13)
    ax1.set_ylim(bottom=0)

    ax_info = fig.add_subplot(gs[0, 2])
    ax_info.set_facecolor('#111111')
    ax_info.axis('off')
    impact = result.trajectory.impact
    metrics = [
        ('EXIT', f'{impact.exit_speed:.0f} mph @ {impact.launch_angle:.1f}°'),
        ('SPIN', f'{impact.back_spin:.0f} rpm'),
        ('DISTANCE', f'{result.distance:.1f} ft'),
        ('APEX', f'{result.apex:.1f} ft'),
        ('HANG TIME', f'{result.hang_time:.2f} s'),
        ('LAND ANGLE', f'{result.landing_angle_deg:.1f}°'),
        ('METHOD', result.method.upper()),
    ]
    for i, (label, value) in enumerate(metrics):
        y_pos = 0.9 - i * 0.13
        ax_info.text(0.05, y_pos, label, fontsize=10, fontweight='bold',
                     color='#888888', transform=ax_info.transAxes, fontfamily='monospace')
        ax_info.text(0.95, y_pos, value, fontsize=11, fontweight='bold',
                     color='#00d4ff', transform=ax_info.transAxes,
                     ha='right', fontfamily='monospace')
    ax_info.set_title('FLIGHT DATA', fontweight='bold',
                      color=STYLE['text_color'], fontsize=13, pad=10)

    ax2 = fig.add_subplot(gs[1, 0])
    _apply_dark_style(fig, ax2)
    ax2.plot(result.time, result.speed, color='#ff6b35', linewidth=2)
    ax2.set_xlabel('Time (s)')
    ax2.set_ylabel('Speed (ft/s)')
    ax2.set_title('SPEED', fontweight='bold')

    ax3 = fig.add_subplot(gs[1, 1])
    _apply_dark_style(fig, ax3)
    ax3.plot(result.time, result.z, color='#ffeb3b', linewidth=2)
    ax3.set_xlabel('Time (s)')
    ax3.set_ylabel('Height (ft)')
    ax3.set_title('HEIGHT', fontweight='bold')

    ax4 = fig.add_subplot(gs[1, 2])
    _apply_dark_style(fig, ax4)
    ax4.plot(result.time, result.vy, label='vy (downrange)', color='#00d4ff', linewidth=1.5)
    ax4.plot(result.time, result.vz, label='vz (vertical)', color='#ff6b35', linewidth=1.5)
    if np.max(np.abs(result.vx)) > 0.1:
        ax4.plot(result.time, result.vx, label='vx (lateral)', color='#00e676', linewidth=1.5)
    ax4.set_xlabel('Time (s)')
    ax4.set_ylabel('Velocity (ft/s)')
    ax4.set_title('VELOCITY COMPONENTS', fontweight='bold')
    ax4.legend(fontsize=8, **LEGEND_STYLE)

    fig.suptitle('BATTED BALL FLIGHT DASHBOARD', fontsize=16, fontweight='bold',
                 color='#00d4ff', y=0.98)
    _save(fig, save_path)
    return fig
