# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

import pandas as pd
from sklearn.metrics import accuracy_score, f1_score, precision_score, recall_score, roc_auc_score
from sklearn.pipeline import Pipeline

from ..errors import TrainingDataError
from ..features import LABEL_COLUMN, TEXT_COLUMNS
from ..schemas import TrainingMetrics
from ..storage import load_joblib
from ..training.dataset import read_samples, to_dataframe


def _safe_auc(y_true: pd.Series, y_prob: list[float]) -> float:
    try:
        value = float(roc_auc_score(y_true, y_prob))
    except ValueError:
        # Single-class holdout.
        return 0.0
    if value != value:  # NaN
        return 0.0
    return value


def evaluate_model(model: Pipeline, holdout: pd.DataFrame, *, train_rows: int = 0) -> TrainingMetrics:
    y_true = holdout[LABEL_COLUMN].astype(int)
    x_eval = holdout[TEXT_COLUMNS]
    y_prob = model.predict_proba(x_eval)[:, 1].tolist()
    y_pred = [int(value) for value in model.predict(x_eval)]
    return TrainingMetrics(
        accuracy=float(accuracy_score(y_true, y_pred)),
        auc=_safe_auc(y_true, y_prob),
        f1=float(f1_score(y_true, y_pred, zero_division=0)),
        precision=float(precision_score(y_true, y_pred, zero_division=0)),
        recall=float(recall_score(y_true, y_pred, zero_division=0)),
        train_rows=int(train_rows),
        test_rows=int(len(holdout)),
    )


def evaluate_saved_model(*, model_path: Path, dataset_path: Path, has_header: bool = True) -> TrainingMetrics:
    """Score a persisted artifact against a labeled TSV file."""
    model = load_joblib(model_path)
    frame = to_dataframe(read_samples(dataset_path, has_header=has_header))
    if frame.empty:
        raise TrainingDataError(f"No labeled rows to evaluate in {dataset_path}")
    return evaluate_model(model, frame)
