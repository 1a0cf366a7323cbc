# experiments/simulate_stopping.py

"""Replay a recorded loss log through a stopping policy.

Approach:
1) Merge YAML configs and build the criteria of the `early_stopping` section
2) Read the loss log (CSV with `loss` and optional `is_training` columns)
3) Simulate: report the out-of-sample update at which the run would have stopped

Outputs: result.json, config_merged.yaml, figures/loss_curve.png
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from earlystop.criteria.disjunction import Disjunction
from earlystop.criteria.factory import build_criterion
from earlystop.learning.logging_utils import read_loss_log
from earlystop.simulation import simulate
from earlystop.utils.config_loader import merge_configs, save_config_snapshot
from earlystop.utils.logger import build_logger
from earlystop.visualization.base_plot import PlotConfig
from earlystop.visualization.loss_plots import plot_loss_curve


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--configs", nargs="+", default=["configs/early_stopping.yaml"])
    ap.add_argument("--losses", required=True, help="CSV loss log")
    ap.add_argument("--out", default="runs/simulate_stopping")
    ap.add_argument("--no-plot", action="store_true")
    args = ap.parse_args()

    cfg = merge_configs(args.configs)
    log_cfg = cfg.get("logging", {})
    logger = build_logger("earlystop", log_cfg.get("level", "INFO"),
                          f"{args.out}/run.log" if log_cfg.get("log_to_file") else None)

    out = Path(args.out)
    out.mkdir(parents=True, exist_ok=True)
    save_config_snapshot(cfg, out / "config_merged.yaml")

    es_cfg = cfg["early_stopping"]
    criteria = [build_criterion(s) for s in es_cfg["criteria"]]
    criterion = criteria[0] if len(criteria) == 1 else Disjunction(*criteria)
    logger.info(f"criterion={criterion!r}")

    losses, is_training = read_loss_log(args.losses)
    res = simulate(criterion, losses, is_training, verbosity=int(es_cfg.get("verbosity", 0)))

    if res.stopped:
        logger.info(f"stop at update t={res.t_stop} (entry {res.n_observations} of {len(losses)}): {res.message}")
    else:
        logger.info(f"no stop after {res.n_updates} out-of-sample updates")

    result = {
        "criterion": repr(criterion),
        "t_stop": res.t_stop,
        "n_updates": res.n_updates,
        "n_observations": res.n_observations,
        "fired": repr(res.fired) if res.fired is not None else None,
        "message": res.message,
    }
    with open(out / "result.json", "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2)

    if not args.no_plot:
        plot_loss_curve(losses, is_training, res.t_stop, out / "figures", PlotConfig(formats=("png",)))


if __name__ == "__main__":
    main()
