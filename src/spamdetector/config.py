# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from .env import get_env, get_float_env, get_int_env

DEFAULT_DATA_FILE = "email_dataset.tsv"
DEFAULT_FEEDBACK_FILE = "feedback.tsv"
DEFAULT_MODEL_FILE = "spam_model.joblib"
DEFAULT_TEST_FRACTION = 0.2


@dataclass(frozen=True)
class SpamDetectorSettings:
    """Resolved storage locations and training knobs.

    One instance is passed to every component; nothing reads the working
    directory on its own.
    """

    data_path: Path
    feedback_path: Path
    model_path: Path
    test_fraction: float = DEFAULT_TEST_FRACTION
    seed: int | None = None

    def __post_init__(self) -> None:
        if not 0.0 < self.test_fraction < 1.0:
            raise ValueError(f"test_fraction must be in (0, 1), got {self.test_fraction}")

    @property
    def metadata_path(self) -> Path:
        return self.model_path.with_suffix(".json")

    @classmethod
    def in_directory(cls, base_dir: Path, **overrides: object) -> SpamDetectorSettings:
        settings = cls(
            data_path=base_dir / DEFAULT_DATA_FILE,
            feedback_path=base_dir / DEFAULT_FEEDBACK_FILE,
            model_path=base_dir / DEFAULT_MODEL_FILE,
        )
        return replace(settings, **overrides) if overrides else settings

    @classmethod
    def from_env(cls, base_dir: Path | None = None) -> SpamDetectorSettings:
        root = base_dir or Path.cwd()

        def _resolve(name: str, default: str) -> Path:
            path = Path(get_env(name, default) or default)
            return path if path.is_absolute() else root / path

        return cls(
            data_path=_resolve("SPAM_DATA_PATH", DEFAULT_DATA_FILE),
            feedback_path=_resolve("SPAM_FEEDBACK_PATH", DEFAULT_FEEDBACK_FILE),
            model_path=_resolve("SPAM_MODEL_PATH", DEFAULT_MODEL_FILE),
            test_fraction=get_float_env("SPAM_TEST_FRACTION", DEFAULT_TEST_FRACTION),
            seed=get_int_env("SPAM_SEED", None),
        )
