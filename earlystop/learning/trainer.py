# earlystop/learning/trainer.py

"""Training loop with early stopping.

The loop is the "external process" of the stopping protocol: it computes the
losses, hands them to an EarlyStopper, and decides to break when told so.

Per epoch:
- the mean training loss is reported as a training observation, but only when
  the stopper's criterion uses training losses (e.g. PQ)
- the mean validation loss is reported as the out-of-sample observation

The caller supplies a 'step_fn' that returns a dict containing 'loss'.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

import torch

from earlystop.learning.callbacks import EarlyStopper


@dataclass(frozen=True)
class TrainerConfig:
    max_epochs: int = 100
    lr: float = 1e-3
    weight_decay: float = 0.0
    grad_clip_norm: float = 0.0
    log_every_steps: int = 50


@dataclass(frozen=True)
class FitResult:
    epochs: int
    stopped: bool
    message: Optional[str] = None
    val_loss: Optional[float] = None


class Trainer:
    def __init__(self,
                 model: torch.nn.Module,
                 device: torch.device,
                 cfg: TrainerConfig,
                 stopper: EarlyStopper,
                 logger):
        self.model = model.to(device)
        self.device = device
        self.cfg = cfg
        self.stopper = stopper
        self.logger = logger

        self.optimizer = torch.optim.AdamW(self.model.parameters(), lr=cfg.lr, weight_decay=cfg.weight_decay)

    def _train_epoch(self, train_loader: Iterable, step_fn, epoch: int, global_step: int):
        self.model.train()
        losses = []
        for batch in train_loader:
            self.optimizer.zero_grad(set_to_none=True)
            loss = step_fn(self.model, batch, self.device)["loss"]
            loss.backward()

            if self.cfg.grad_clip_norm and self.cfg.grad_clip_norm > 0:
                torch.nn.utils.clip_grad_norm_(self.model.parameters(), self.cfg.grad_clip_norm)
            self.optimizer.step()
            losses.append(loss.detach())

            global_step += 1
            if global_step % self.cfg.log_every_steps == 0:
                self.logger.info(f"epoch={epoch} step={global_step} loss={loss.item():.6f}")
        return torch.stack(losses).mean(), global_step

    @torch.no_grad()
    def _validate(self, val_loader: Iterable, step_fn) -> torch.Tensor:
        self.model.eval()
        losses = [step_fn(self.model, batch, self.device)["loss"].detach() for batch in val_loader]
        return torch.stack(losses).mean()

    def fit(self,
            train_loader: Iterable,
            val_loader: Iterable,
            step_fn: Callable[[torch.nn.Module, Dict, torch.device], Dict[str, torch.Tensor]]) -> FitResult:
        global_step = 0
        use_training_losses = self.stopper.criterion.needs_training_losses
        val_loss = None

        for epoch in range(1, self.cfg.max_epochs + 1):
            train_loss, global_step = self._train_epoch(train_loader, step_fn, epoch, global_step)
            if use_training_losses:
                self.stopper.done(train_loss, training=True)

            val_loss = self._validate(val_loader, step_fn).item()
            self.logger.info(f"epoch={epoch} train_loss={train_loss.item():.6f} val_loss={val_loss:.6f}")

            if self.stopper.done(val_loss):
                msg = self.stopper.message()
                self.logger.info(msg)
                return FitResult(epochs=epoch, stopped=True, message=msg, val_loss=val_loss)

        return FitResult(epochs=self.cfg.max_epochs, stopped=False, val_loss=val_loss)
