# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import re

import pandas as pd
from sklearn.base import clone
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import GradientBoostingClassifier
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import Normalizer

from .errors import TrainingDataError

TEXT_COLUMNS = ["sender", "subject", "body"]
LABEL_COLUMN = "is_spam"

# Stands in for a field with nothing to featurize, so a column that is empty on
# every row still yields a vocabulary.
EMPTY_FIELD_TOKEN = "__empty__"
WORD_TOKEN_RE = re.compile(r"(?u)\b\w\w+\b")


def preprocess_words(text: str) -> str:
    lowered = str(text or "").lower()
    return lowered if WORD_TOKEN_RE.search(lowered) else EMPTY_FIELD_TOKEN


def preprocess_chars(text: str) -> str:
    lowered = str(text or "").lower()
    return lowered if lowered.strip() else EMPTY_FIELD_TOKEN


def _build_featurizer() -> ColumnTransformer:
    return ColumnTransformer(
        transformers=[
            (
                "sender_features",
                TfidfVectorizer(analyzer="char_wb", ngram_range=(2, 4), min_df=1, preprocessor=preprocess_chars),
                "sender",
            ),
            (
                "subject_features",
                TfidfVectorizer(analyzer="word", ngram_range=(1, 2), min_df=1, preprocessor=preprocess_words),
                "subject",
            ),
            (
                "body_features",
                TfidfVectorizer(analyzer="word", ngram_range=(1, 2), min_df=1, preprocessor=preprocess_words),
                "body",
            ),
        ],
        sparse_threshold=1.0,
    )


def build_pipeline(seed: int | None = None) -> Pipeline:
    """Unfitted blueprint: per-field text features, concatenated, L2-normalized, boosted trees."""
    return Pipeline(
        steps=[
            ("features", _build_featurizer()),
            ("normalize", Normalizer(norm="l2")),
            ("clf", GradientBoostingClassifier(n_estimators=100, learning_rate=0.1, max_depth=3, random_state=seed)),
        ]
    )


def feature_frame(sender: str, subject: str, body: str) -> pd.DataFrame:
    return pd.DataFrame([{"sender": sender or "", "subject": subject or "", "body": body or ""}], columns=TEXT_COLUMNS)


def fit_pipeline(blueprint: Pipeline, frame: pd.DataFrame) -> Pipeline:
    # The blueprint is cloned so repeated fits never share fitted state.
    model = clone(blueprint)
    labels = frame[LABEL_COLUMN].astype(int)
    if labels.nunique() < 2:
        raise TrainingDataError("Training split contains a single class; cannot fit a binary classifier.")
    try:
        model.fit(frame[TEXT_COLUMNS], labels)
    except ValueError as exc:
        raise TrainingDataError(f"Cannot fit the spam pipeline: {exc}") from exc
    return model
