# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import pandas as pd
from sklearn.model_selection import train_test_split
from sklearn.pipeline import Pipeline

from ..config import SpamDetectorSettings
from ..console import MLConsole
from ..errors import PersistenceError, TrainingDataError
from ..evaluation.evaluate import evaluate_model
from ..features import LABEL_COLUMN, build_pipeline, fit_pipeline
from ..inference.predictor import SpamPredictor
from ..schemas import EmailSample, TrainingMetrics
from ..storage import dump_joblib, dump_json, load_joblib
from .dataset import load_corpus, to_dataframe
from .feedback import FeedbackRecorder


class ModelState(Enum):
    UNLOADED = "unloaded"
    READY = "ready"
    RETRAINING = "retraining"


@dataclass(frozen=True)
class TrainedModel:
    pipeline: Pipeline
    metrics: TrainingMetrics | None = None
    version: str = "unknown"

    def predictor(self) -> SpamPredictor:
        return SpamPredictor(self.pipeline)


def _timestamp_key() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _check_corpus(frame: pd.DataFrame) -> None:
    if frame.empty:
        raise TrainingDataError("Corpus is empty; nothing to train on.")
    if frame[LABEL_COLUMN].nunique() < 2:
        raise TrainingDataError("Corpus contains a single class; both spam and non-spam examples are required.")


def split_corpus(
    frame: pd.DataFrame,
    *,
    test_fraction: float,
    seed: int | None = None,
    console: MLConsole | None = None,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Random train/holdout partition, recomputed on every call.

    Stratifies when every class can land on both sides. When the corpus is
    too small for a usable split, both sides fall back to the full corpus.
    """
    total = len(frame)
    n_test = math.ceil(total * test_fraction)
    n_train = total - n_test
    counts = frame[LABEL_COLUMN].value_counts()
    n_classes = len(counts)

    train = holdout = None
    if n_test >= 1 and n_train >= 1:
        can_stratify = int(counts.min()) >= 2 and n_test >= n_classes and n_train >= n_classes
        train, holdout = train_test_split(
            frame,
            test_size=test_fraction,
            random_state=seed,
            shuffle=True,
            stratify=frame[LABEL_COLUMN] if can_stratify else None,
        )

    if train is None or holdout is None or holdout.empty or train[LABEL_COLUMN].nunique() < 2:
        if console:
            console.warn(f"Corpus of {total} rows is too small for a held-out split; training and evaluating on all rows.")
        return frame.reset_index(drop=True), frame.reset_index(drop=True)
    return train.reset_index(drop=True), holdout.reset_index(drop=True)


class ModelLifecycle:
    """Owns the live model and every path that produces or replaces it.

    States move UNLOADED -> RETRAINING -> READY on a cold start, or
    UNLOADED -> READY when a saved artifact is found. A failed retrain
    returns to the previous state and keeps the previous model.
    """

    def __init__(
        self,
        settings: SpamDetectorSettings,
        console: MLConsole | None = None,
        *,
        blueprint: Pipeline | None = None,
    ) -> None:
        self.settings = settings
        self.console = console or MLConsole(enabled=False)
        self.blueprint = blueprint if blueprint is not None else build_pipeline(settings.seed)
        self.recorder = FeedbackRecorder(settings.feedback_path)
        self.state = ModelState.UNLOADED
        self.current: TrainedModel | None = None

    def startup(self) -> TrainedModel:
        if self.state is ModelState.READY and self.current is not None:
            return self.current
        model_path = self.settings.model_path
        if model_path.exists():
            self.console.info(f"Loading saved model from {model_path}...")
            self.current = TrainedModel(pipeline=load_joblib(model_path), version=self._stored_version())
            self.state = ModelState.READY
            return self.current
        self.console.info("The model is not found. Training a new model...")
        return self.retrain()

    def load_corpus(self) -> list[EmailSample]:
        return load_corpus(self.settings, self.console)

    def retrain(self) -> TrainedModel:
        return self.train_evaluate_save(self.load_corpus())

    def learn_from_correction(self, sender: str, subject: str, body: str, is_spam: bool) -> TrainedModel:
        # The append must be durable before the corpus is reloaded.
        self.recorder.record(sender, subject, body, is_spam)
        self.console.success("The feedback has been saved. Retraining the model with the full dataset...")
        return self.retrain()

    def train_evaluate_save(self, corpus: list[EmailSample]) -> TrainedModel:
        previous_state = self.state
        self.state = ModelState.RETRAINING
        try:
            model = self._train_and_evaluate(corpus)
        except BaseException:
            self.state = previous_state
            raise

        try:
            dump_joblib(model.pipeline, self.settings.model_path)
        except OSError as exc:
            self._adopt(model)
            raise PersistenceError(
                f"Could not save the model to {self.settings.model_path}: {exc}. "
                "The new model is active for this session only.",
                model=model,
            ) from exc

        self._adopt(model)
        self._write_metadata(model, rows_total=len(corpus))
        self.console.success(f"The model was saved to {self.settings.model_path}")
        return model

    def predictor(self) -> SpamPredictor:
        if self.current is None:
            raise RuntimeError("No model is loaded; call startup() first.")
        return self.current.predictor()

    def _adopt(self, model: TrainedModel) -> None:
        self.current = model
        self.state = ModelState.READY

    def _train_and_evaluate(self, corpus: list[EmailSample]) -> TrainedModel:
        frame = to_dataframe(corpus)
        _check_corpus(frame)
        train_df, holdout_df = split_corpus(
            frame,
            test_fraction=self.settings.test_fraction,
            seed=self.settings.seed,
            console=self.console,
        )
        self.console.info(f"Training model on {len(train_df)} rows...")
        pipeline = fit_pipeline(self.blueprint, train_df)
        self.console.info(f"Evaluating model on {len(holdout_df)} rows...")
        metrics = evaluate_model(pipeline, holdout_df, train_rows=len(train_df))
        self.console.metrics_table(
            {"Accuracy": metrics.accuracy, "AUC": metrics.auc, "F1 Score": metrics.f1},
            title="Model evaluation",
        )
        return TrainedModel(pipeline=pipeline, metrics=metrics, version=_timestamp_key())

    def _write_metadata(self, model: TrainedModel, *, rows_total: int) -> None:
        metadata: dict[str, Any] = {
            "model_version": model.version,
            "rows_total": int(rows_total),
            "created_at_utc": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
            "test_fraction": float(self.settings.test_fraction),
            "seed": self.settings.seed,
            "metrics": model.metrics.to_dict() if model.metrics else {},
        }
        try:
            # A stale sidecar would report the previous version for the new artifact.
            self.settings.metadata_path.unlink(missing_ok=True)
            dump_json(metadata, self.settings.metadata_path)
        except OSError as exc:
            self.console.warn(f"Could not write model metadata to {self.settings.metadata_path}: {exc}")

    def _stored_version(self) -> str:
        path = self.settings.metadata_path
        if not path.exists():
            return "unknown"
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return "unknown"
        if not isinstance(payload, dict):
            return "unknown"
        return str(payload.get("model_version") or "unknown")
