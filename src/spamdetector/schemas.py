# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

TSV_COLUMNS = ("Sender", "Subject", "Body", "IsSpam")


@dataclass(frozen=True, slots=True)
class EmailSample:
    sender: str
    subject: str
    body: str
    is_spam: bool


@dataclass(frozen=True, slots=True)
class SpamPrediction:
    is_spam: bool
    probability: float
    score: float


@dataclass(frozen=True, slots=True)
class TrainingMetrics:
    accuracy: float
    auc: float
    f1: float
    precision: float
    recall: float
    train_rows: int
    test_rows: int

    def rates(self) -> dict[str, float]:
        return {
            "accuracy": self.accuracy,
            "auc": self.auc,
            "f1": self.f1,
            "precision": self.precision,
            "recall": self.recall,
        }

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
