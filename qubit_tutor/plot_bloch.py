# qubit_tutor/plot_bloch.py
import os
from typing import Dict, Sequence
import numpy as np
import matplotlib.pyplot as plt

from .bloch import compute_bloch_point
from .circuit import HistoryEntry
from .state import State

def draw_sphere(ax):
    u = np.linspace(0, 2 * np.pi, 30)
    v = np.linspace(0, np.pi, 20)
    x = np.outer(np.cos(u), np.sin(v))
    y = np.outer(np.sin(u), np.sin(v))
    z = np.outer(np.ones(np.size(u)), np.cos(v))
    ax.plot_wireframe(x, y, z, alpha=0.1, color="#4a9fff")

    # equator
    t = np.linspace(0, 2 * np.pi, 100)
    ax.plot(np.cos(t), np.sin(t), 0, "c--", alpha=0.4)

    n = 1.2
    ax.plot([-n, n], [0, 0], [0, 0], "k-", alpha=0.3, linewidth=1)
    ax.plot([0, 0], [-n, n], [0, 0], "k-", alpha=0.3, linewidth=1)
    ax.plot([0, 0], [0, 0], [-n, n], "k-", alpha=0.3, linewidth=1)
    ax.text(0, 0, 1.35, "|0>", ha="center")
    ax.text(0, 0, -1.45, "|1>", ha="center")

def draw_bloch(ax, state: State, history: Sequence[HistoryEntry] = ()):
    draw_sphere(ax)

    if history:
        pts = [compute_bloch_point(State.zero())] + [compute_bloch_point(h.state) for h in history]
        xs, ys, zs = zip(*(p.vector() for p in pts))
        ax.plot(xs, ys, zs, "o:", color="#6366f1", alpha=0.6, markersize=4)
        for h, p in zip(history, pts[1:]):
            ax.text(p.x * 1.08, p.y * 1.08, p.z * 1.08, h.gate, fontsize=8)

    p = compute_bloch_point(state)
    ax.quiver(0, 0, 0, p.x, p.y, p.z, color="#0ea5e9", arrow_length_ratio=0.12, linewidth=3)
    ax.scatter([p.x], [p.y], [p.z], color="#0369a1", s=60)

    ax.set_xlim([-1.2, 1.2])
    ax.set_ylim([-1.2, 1.2])
    ax.set_zlim([-1.2, 1.2])
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    ax.set_title(f"θ: {p.theta:.2f}   φ: {p.phi:.2f}\n|ψ> = {state.ket()}", fontsize=10)
    return p

def render_bloch(state: State, path: str, history: Sequence[HistoryEntry] = (), dpi=200) -> str:
    """Save a Bloch-sphere PNG of `state` (plus the history trajectory) to `path`."""
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    fig = plt.figure(figsize=(6, 6))
    ax = fig.add_subplot(1, 1, 1, projection="3d")
    draw_bloch(ax, state, history)
    fig.tight_layout()
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    return path

def plot_measurement_counts(counts: Dict[int, int], path: str, dpi=200) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    shots = sum(counts.values())
    fig = plt.figure()
    ax = fig.add_subplot(1, 1, 1)
    ax.bar(["|0>", "|1>"], [counts.get(0, 0), counts.get(1, 0)], color=["#10b981", "#f43f5e"], width=0.5)
    ax.set_ylabel("Counts")
    ax.set_title(f"Measurement outcomes ({shots} shots)")
    ax.grid(True, axis="y")
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
    return path
