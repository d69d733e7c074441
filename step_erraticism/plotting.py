"""
Erraticism plots: dead-reckoned path coloured by score, and score over time.
"""

import matplotlib

matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np

from .scorers.utils import positions_array


def plot_erraticism(steps, scored, output_file, title='Step Erraticism'):
    """
    Save a two-panel figure for one scored run.

    Args:
        steps (Sequence[PositionedStep]): Reconstructed trajectory
        scored (Sequence[ScoredStep]): Scores, same length and order as steps
        output_file: PNG path
        title (str): Figure title
    """
    if len(steps) != len(scored):
        raise ValueError(f"steps and scores differ in length: {len(steps)} != {len(scored)}")

    positions = positions_array(steps)
    scores = np.array([s.score for s in scored], dtype=float)

    fig, axes = plt.subplots(1, 2, figsize=(16, 6))
    fig.suptitle(title, fontsize=14, fontweight='bold')

    # Plot 1: XY trajectory
    ax = axes[0]
    if len(positions):
        ax.plot(positions[:, 0], positions[:, 1], color='gray', linewidth=1, alpha=0.5, zorder=2)
        points = ax.scatter(positions[:, 0], positions[:, 1], c=scores, cmap='RdYlGn',
                            vmin=0.0, vmax=1.0, s=15, zorder=3)
        ax.scatter([positions[0, 0]], [positions[0, 1]], marker='o', s=100, color='green',
                   zorder=5, edgecolors='black', label='Start')
        ax.scatter([positions[-1, 0]], [positions[-1, 1]], marker='s', s=100, color='red',
                   zorder=5, edgecolors='black', label='End')
        fig.colorbar(points, ax=ax, label='Erraticism')
        ax.legend(loc='best')
    ax.set_xlabel('East (m)')
    ax.set_ylabel('North (m)')
    ax.set_title('Dead-Reckoned Path')
    ax.grid(True, alpha=0.3)
    ax.axis('equal')

    # Plot 2: Score vs time since first step
    ax = axes[1]
    if len(scored):
        t0 = scored[0].timestamp
        elapsed = [(s.timestamp - t0) / 1e9 for s in scored]
        ax.plot(elapsed, scores, 'b-', linewidth=1, alpha=0.8)
        ax.axhline(y=float(np.mean(scores)), color='r', linestyle='--',
                   label=f'Mean: {np.mean(scores):.3f}')
        ax.legend(loc='best')
    ax.set_xlabel('Time since first step (s)')
    ax.set_ylabel('Erraticism')
    ax.set_ylim(-0.05, 1.05)
    ax.set_title('Erraticism per Step')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    plt.close(fig)
