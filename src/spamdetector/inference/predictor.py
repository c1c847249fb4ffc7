# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

from sklearn.pipeline import Pipeline

from ..features import feature_frame
from ..schemas import SpamPrediction
from ..storage import load_joblib


class SpamPredictor:
    """Stateless prediction engine bound to one fitted pipeline."""

    def __init__(self, model: Pipeline) -> None:
        self.model = model

    def predict(self, *, sender: str, subject: str, body: str) -> SpamPrediction:
        frame = feature_frame(sender, subject, body)
        probability = float(self.model.predict_proba(frame)[0][1])
        score = float(self.model.decision_function(frame)[0])
        label = bool(int(self.model.predict(frame)[0]))
        return SpamPrediction(is_spam=label, probability=probability, score=score)


def load_predictor(model_path: Path) -> SpamPredictor:
    return SpamPredictor(load_joblib(model_path))
