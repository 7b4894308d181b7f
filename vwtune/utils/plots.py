from __future__ import annotations

import logging
from typing import Dict, List

import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


def plot_search_history(history: Dict) -> None:
    """Per-trial loss as points and the best-so-far loss as a step line."""
    trials: List[int] = history.get("trial", [])
    losses = history.get("loss", [])
    best = history.get("best_loss", [])

    if not trials:
        logger.info("No trials found in history.")
        return

    ok = [(t, l) for t, l in zip(trials, losses) if l is not None]
    failed = history.get("failed", [])

    plt.figure(figsize=(7, 4))
    if ok:
        xs, ys = zip(*ok)
        plt.scatter(xs, ys, s=12, alpha=0.6, label="trial loss")
    best_pts = [(t, b) for t, b in zip(trials, best) if b is not None]
    if best_pts:
        xs, ys = zip(*best_pts)
        plt.step(xs, ys, where="post", color="tab:red", label="best so far")
    for t in failed:
        plt.axvline(t, color="tab:gray", alpha=0.2, linewidth=1)

    plt.xlabel("trial")
    plt.ylabel("loss")
    plt.title("Random search")
    plt.legend()
    plt.grid(True)
    plt.tight_layout()


def plot_fold_losses(fold_losses: List[float]) -> None:
    plt.figure()
    plt.bar(range(len(fold_losses)), fold_losses)
    if fold_losses:
        mean = sum(fold_losses) / len(fold_losses)
        plt.axhline(mean, color="tab:red", linestyle="--", label=f"mean={mean:.4f}")
        plt.legend()
    plt.xlabel("fold")
    plt.ylabel("loss")
    plt.tight_layout()
