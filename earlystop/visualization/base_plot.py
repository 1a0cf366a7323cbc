# earlystop/visualization/base_plot.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns


@dataclass(frozen=True)
class PlotConfig:
    formats: tuple = ("png", "pdf")
    dpi: int = 200
    seaborn_theme: str = "whitegrid"


def setup_theme(cfg: PlotConfig) -> None:
    """Apply a consistent theme across figures."""
    sns.set_theme(style=cfg.seaborn_theme)


def save_figure(fig: plt.Figure, out_dir: str | Path, name: str, cfg: PlotConfig) -> List[Path]:
    """Write `fig` once per configured format; returns the written paths."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    paths = [out / f"{name}.{fmt}" for fmt in cfg.formats]
    for p in paths:
        fig.savefig(p, dpi=cfg.dpi, bbox_inches="tight")
    return paths
