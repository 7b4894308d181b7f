import numpy as np

from vwtune import (
    CrossValidationConfig,
    CrossValidationObjective,
    HistoryCallback,
    RandomSearch,
    SearchConfig,
    log_uniform,
    randint,
)
from vwtune.utils import configure_logging, plot_fold_losses, plot_search_history


def make_classification(n_samples: int = 1000, n_features: int = 20, seed: int = 0):
    """Linearly separable-ish toy data as vw text examples."""
    rng = np.random.default_rng(seed)
    X = rng.normal(size=(n_samples, n_features))
    w = rng.normal(size=n_features)
    y = np.where(X @ w + rng.normal(scale=2.0, size=n_samples) > 0, 1, -1)

    records = []
    for label, row in zip(y, X):
        features = " ".join(f"f{j}:{v:.4f}" for j, v in enumerate(row))
        records.append(f"{label} | {features}")
    return records


def main():
    configure_logging("INFO")

    records = make_classification()

    search_cfg = SearchConfig(
        base_seed=42,
        max_trials=20,
        max_duration=600,
        trial_batch_size=4,
        backend="threads",
        max_workers=4,
    )
    cv_cfg = CrossValidationConfig(
        num_folds=5,
        train_params="-b 20 --holdout_off --loss_function logistic",
        test_params="--loss_function logistic",
    )

    space = search_cfg.make_space(
        {
            "l": log_uniform(1e-3, 10.0),
            "l2": log_uniform(1e-8, 1e-3),
            "passes": randint(1, 5),
        }
    )

    history = HistoryCallback()
    with CrossValidationObjective.from_config(cv_cfg, records) as objective:
        with search_cfg.make_backend() as backend:
            search = RandomSearch(
                backend=backend,
                trial_batch_size=search_cfg.trial_batch_size,
                callbacks=[history],
            )
            result = search.minimize(objective, space, search_cfg.stop_strategy())

        fold_losses = objective.fold_losses(result.best_point)

    plot_search_history(history.history)
    plot_fold_losses(fold_losses)

    print("Best loss:", result.best_loss)
    print("Best point:", dict(result.best_point))
    print("Failed trials:", result.n_failed)


if __name__ == "__main__":
    main()
