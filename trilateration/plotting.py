"""
Optional rendering of a trilateration result (needs the `viz` extra).

Kept apart from the solver: it only consumes the same inputs plus the
EstimatedPosition that estimate_position() returned.
"""

from typing import Optional, Sequence

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from .contracts import EstimatedPosition
from .errors import InvalidInput
from .solver import SiteSet, _as_site_array, pseudo_distances


def _draw_waveforms(ax, X: np.ndarray, waveforms: np.ndarray) -> None:
    # each average waveform is drawn centred on its own site
    m = waveforms.shape[1]
    t = (np.arange(1, m + 1) - m / 2.0) / 6.0
    for (x, y), wf in zip(X, waveforms):
        ax.plot(t + x, wf / 15.0 + y - 2.0, "b")


def plot_estimate(sites: SiteSet,
                  amplitudes: Sequence[float],
                  position: EstimatedPosition,
                  waveforms: Optional[np.ndarray] = None,
                  scale: float = 1000.0) -> Figure:
    X = _as_site_array(sites)
    d = pseudo_distances(amplitudes, scale)
    if len(d) != len(X):
        raise InvalidInput(f"got {len(X)} sites but {len(d)} amplitudes")
    if waveforms is not None:
        waveforms = np.asarray(waveforms, dtype=np.float64)
        if waveforms.ndim != 2 or waveforms.shape[0] != len(X):
            raise InvalidInput(f"waveforms must have shape ({len(X)}, m), got {waveforms.shape}")

    fig = Figure(figsize=(10, 5))
    ax_circ, ax_wave = fig.subplots(1, 2)

    for (x, y), r in zip(X, d):
        ax_circ.add_patch(Circle((x, y), r, fill=False, edgecolor=(0, 0, 0, 0.1)))
    ax_circ.scatter([position.x], [position.y], s=70, color=(0, 0, 1))
    ax_circ.scatter(X[:, 0], X[:, 1], s=70, color=(0, 0, 0))
    ax_circ.set_aspect("equal", adjustable="datalim")
    ax_circ.autoscale_view()

    ax_wave.scatter(X[:, 0], X[:, 1], s=70, color=(0, 0, 0))
    if waveforms is not None:
        _draw_waveforms(ax_wave, X, waveforms)
    ax_wave.plot([position.x], [position.y], "ob", markersize=10, fillstyle="none")
    ax_wave.autoscale(tight=True)
    ax_wave.set_title("Trilaterated spatial location")
    ax_wave.set_xlabel("µm")
    ax_wave.set_ylabel("Depth (µm)")
    return fig
