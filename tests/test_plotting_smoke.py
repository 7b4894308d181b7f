import matplotlib

matplotlib.use("Agg")  # headless backend for CI

import matplotlib.pyplot as plt

from vwtune.utils import plot_fold_losses, plot_search_history


def test_plot_functions_smoke():
    history = {
        "trial": [0, 1, 2, 3],
        "loss": [1.0, None, 0.6, 0.8],
        "best_loss": [1.0, 1.0, 0.6, 0.6],
        "elapsed": [0.1, 0.2, 0.3, 0.4],
        "failed": [1],
    }

    # Smoke test: ensure plotting functions run without error
    plot_search_history(history)
    plot_fold_losses([0.3, 0.25, 0.35])
    plot_search_history({"trial": []})
    plt.close("all")
