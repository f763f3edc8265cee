"""Estimate-overrun prediction over completed tasks.

A task "overran" when its actual time exceeded its estimate. The table built
here feeds a small benchmark of scikit-learn classifiers so the best one can
flag open tasks likely to take longer than planned.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np
from sklearn.ensemble import GradientBoostingClassifier, RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import accuracy_score, f1_score, roc_auc_score
from sklearn.model_selection import StratifiedKFold, cross_validate, train_test_split
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from suggestion_engine.schema import PRIORITY_WEIGHT, Task

logger = logging.getLogger(__name__)

_TEST_SIZE = 0.25
_BASE_FEATURES = ["estimated_time", "priority_weight", "word_count", "tag_count", "assignee_count"]


def _category(task: Task) -> str:
    return (task.category or "").strip() or "unknown"


def _feature_row(task: Task, categories: list[str]) -> list[float]:
    text = f"{task.title} {task.description or ''}"
    row = [
        float(task.estimated_time or 0.0),
        float(PRIORITY_WEIGHT.get(task.priority, 0)),
        float(len(text.split())),
        float(len(task.tags)),
        float(len(task.assigned_to)),
    ]
    row.extend(1.0 if _category(task) == category else 0.0 for category in categories)
    return row


def _training_tasks(tasks: list[Task]) -> list[Task]:
    usable = [task for task in tasks if task.is_completed and task.estimated_time and task.actual_time]
    return sorted(usable, key=lambda task: task.id)


def build_training_table(tasks: list[Task]) -> tuple[np.ndarray, np.ndarray, list[str]]:
    """Build (X, y, feature_names) from completed tasks with both estimate and actual time."""

    usable = _training_tasks(tasks)
    if not usable:
        return np.empty((0, 0)), np.array([], dtype=int), []

    categories = sorted({_category(task) for task in usable})
    feature_names = _BASE_FEATURES + [f"category={category}" for category in categories]

    rows = [_feature_row(task, categories) for task in usable]
    labels = [1 if task.actual_time > task.estimated_time else 0 for task in usable]
    return np.asarray(rows, dtype=float), np.asarray(labels, dtype=int), feature_names


def _overrun_classifiers(seed: int) -> dict[str, Any]:
    # overruns are usually the minority outcome in a snapshot
    return {
        "LogisticRegression": Pipeline(
            [
                ("scaler", StandardScaler()),
                ("clf", LogisticRegression(max_iter=1000, class_weight="balanced", random_state=seed)),
            ]
        ),
        "RandomForest": RandomForestClassifier(
            n_estimators=100, min_samples_leaf=2, class_weight="balanced", random_state=seed
        ),
        "GradientBoosting": GradientBoostingClassifier(max_depth=2, random_state=seed),
    }


def _holdout_metrics(y_test: np.ndarray, y_pred: np.ndarray, y_score: np.ndarray) -> dict:
    # a held-out slice with only one outcome says nothing about ranking overruns
    roc_auc = float(roc_auc_score(y_test, y_score)) if len(np.unique(y_test)) > 1 else 0.5
    return {
        "roc_auc": roc_auc,
        "f1": float(f1_score(y_test, y_pred, zero_division=0)),
        "accuracy": float(accuracy_score(y_test, y_pred)),
    }


def _cv_summary(model: Any, X: np.ndarray, y: np.ndarray, folds: int, seed: int) -> dict:
    cv = StratifiedKFold(n_splits=folds, shuffle=True, random_state=seed)
    scores = cross_validate(model, X, y, cv=cv, scoring=("roc_auc", "f1", "accuracy"))
    return {
        metric: {"mean": float(np.mean(scores[f"test_{metric}"])), "std": float(np.std(scores[f"test_{metric}"]))}
        for metric in ("roc_auc", "f1", "accuracy")
    }


def _can_stratify(y: np.ndarray, test_size: float) -> bool:
    classes = len(np.unique(y))
    if classes < 2 or int(np.bincount(y).min()) < 2:
        return False
    n_test = math.ceil(test_size * len(y))
    return n_test >= classes and len(y) - n_test >= classes


def benchmark_models(X: np.ndarray, y: np.ndarray, seed: int = 42) -> dict:
    """Compare candidate classifiers on a held-out split plus cross-validation."""

    if len(X) < 2 or len(y) < 2:
        return {"models": {}, "ranking": [], "best_model": None}

    stratify = y if _can_stratify(y, _TEST_SIZE) else None
    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=_TEST_SIZE, random_state=seed, stratify=stratify
    )

    train_classes = np.bincount(y_train) if len(np.unique(y_train)) > 1 else None
    smallest_class = int(train_classes.min()) if train_classes is not None else 1
    folds = max(2, min(5, smallest_class))

    report: dict[str, Any] = {"models": {}}
    for name, model in _overrun_classifiers(seed).items():
        if train_classes is not None and smallest_class >= 2:
            cv_metrics = _cv_summary(model, X_train, y_train, folds, seed)
        else:
            cv_metrics = {
                "roc_auc": {"mean": 0.5, "std": 0.0},
                "f1": {"mean": 0.0, "std": 0.0},
                "accuracy": {"mean": float(np.mean(y_train == y_train[0])), "std": 0.0},
            }

        if train_classes is None:
            # a single class cannot be fit; predict it everywhere
            y_pred = np.full(len(y_test), y_train[0])
            y_score = y_pred.astype(float)
        else:
            fitted = model.fit(X_train, y_train)
            y_pred = fitted.predict(X_test)
            y_score = fitted.predict_proba(X_test)[:, 1]

        report["models"][name] = {"cv": cv_metrics, "test": _holdout_metrics(y_test, y_pred, y_score)}

    ranked = sorted(report["models"].items(), key=lambda item: item[1]["cv"]["roc_auc"]["mean"], reverse=True)
    report["ranking"] = [{"model": name, "cv_roc_auc_mean": metrics["cv"]["roc_auc"]["mean"]} for name, metrics in ranked]
    report["best_model"] = ranked[0][0]
    logger.info(f"Benchmarked {len(ranked)} models on {len(y)} tasks, best: {report['best_model']}")
    return report


def train_best_model(X: np.ndarray, y: np.ndarray, seed: int = 42) -> tuple[Any, dict]:
    """Fit the best model by CV ROC-AUC on the full table."""

    if len(X) == 0:
        raise ValueError("Cannot train overrun model on empty table")
    if len(np.unique(y)) < 2:
        raise ValueError("Cannot train overrun model: every task has the same outcome")

    report = benchmark_models(X, y, seed=seed)
    model = _overrun_classifiers(seed)[report["best_model"]]
    model.fit(X, y)
    return model, report


def _task_row(task: Task, feature_names: list[str]) -> np.ndarray:
    categories = [name.split("=", 1)[1] for name in feature_names if name.startswith("category=")]
    return np.asarray(_feature_row(task, categories), dtype=float)


def overrun_probability(model: Any, feature_names: list[str], task: Task) -> float:
    """Probability that ``task`` takes longer than its estimate."""

    return float(model.predict_proba(_task_row(task, feature_names).reshape(1, -1))[0, 1])


def overrun_drivers(model: Any, X: np.ndarray, feature_names: list[str], task: Task, limit: int = 5) -> list[dict]:
    """Features of ``task`` that push its overrun probability up.

    Each feature is reset to its average over the training table ``X``; the
    drop in probability that causes is the feature's effect. Only features
    with a positive effect are returned, strongest first.
    """

    row = _task_row(task, feature_names)
    typical = np.asarray(X, dtype=float).mean(axis=0)

    # one row per feature, differing from the task only in that feature
    variants = np.repeat(row.reshape(1, -1), len(row), axis=0)
    variants[np.arange(len(row)), np.arange(len(row))] = typical
    probabilities = model.predict_proba(np.vstack([row, variants]))[:, 1]
    effects = probabilities[0] - probabilities[1:]

    drivers = [
        {"feature": name, "value": float(value), "effect": float(effect)}
        for name, value, effect in zip(feature_names, row, effects)
        if effect > 0
    ]
    drivers.sort(key=lambda driver: driver["effect"], reverse=True)
    logger.debug(f"Task {task.id}: {len(drivers)} overrun drivers at p={probabilities[0]:.2f}")
    return drivers[:limit]
