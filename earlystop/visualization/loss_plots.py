# earlystop/visualization/loss_plots.py

"""Loss curves with the early-stopping point marked."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt

from earlystop.visualization.base_plot import PlotConfig, save_figure, setup_theme


def plot_loss_curve(losses: Sequence[float],
                    is_training: Optional[Sequence[bool]],
                    t_stop: int,
                    out_dir: str | Path,
                    cfg: PlotConfig = PlotConfig(),
                    name: str = "loss_curve",
                    title: str = "Loss vs out-of-sample updates") -> List[Path]:
    """Plot out-of-sample (and training) losses against the out-of-sample update count.

    Training losses are drawn at fractional positions between the surrounding
    out-of-sample updates. `t_stop == 0` means no stop and draws no marker.
    """
    flags = list(is_training) if is_training is not None else [False] * len(losses)
    val_x, val_y, tr_x, tr_y = [], [], [], []
    t = 0
    pending = []
    for loss, training in zip(losses, flags):
        if training:
            pending.append(loss)
            continue
        for j, tl in enumerate(pending, start=1):
            tr_x.append(t + j / (len(pending) + 1))
            tr_y.append(tl)
        pending = []
        t += 1
        val_x.append(t)
        val_y.append(loss)
    for j, tl in enumerate(pending, start=1):
        tr_x.append(t + j / (len(pending) + 1))
        tr_y.append(tl)

    setup_theme(cfg)
    fig = plt.figure()
    ax = fig.add_subplot(111)
    ax.plot(val_x, val_y, marker="o", label="out-of-sample")
    if tr_x:
        ax.plot(tr_x, tr_y, marker=".", linestyle="--", label="training")
    if t_stop > 0:
        ax.axvline(t_stop, color="red", linestyle=":", label=f"stop (t={t_stop})")
    ax.set_xlabel("Out-of-sample updates")
    ax.set_ylabel("Loss")
    ax.set_title(title)
    ax.legend()
    paths = save_figure(fig, out_dir, name, cfg)
    plt.close(fig)
    return paths
