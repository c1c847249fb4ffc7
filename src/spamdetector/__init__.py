# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Spam detector with a feedback-driven retraining loop."""

from .config import SpamDetectorSettings
from .inference.predictor import SpamPredictor, load_predictor
from .schemas import EmailSample, SpamPrediction, TrainingMetrics
from .training.trainer import ModelLifecycle, ModelState, TrainedModel

__all__ = [
    "EmailSample",
    "SpamPrediction",
    "TrainingMetrics",
    "SpamDetectorSettings",
    "SpamPredictor",
    "load_predictor",
    "ModelLifecycle",
    "ModelState",
    "TrainedModel",
]
