# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Error taxonomy shared by the corpus loader, the trainer and the session."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .training.trainer import TrainedModel


class SpamDetectorError(Exception):
    """Base class for every error surfaced to the interactive boundary."""


class DatasetNotFoundError(SpamDetectorError, FileNotFoundError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Base dataset not found: {path}")


class CorpusFormatError(SpamDetectorError):
    """A row of the base dataset or the feedback log cannot be parsed."""

    def __init__(self, path: Path, line_no: int, reason: str) -> None:
        self.path = path
        self.line_no = line_no
        self.reason = reason
        super().__init__(f"{path}:{line_no}: {reason}")


class TrainingDataError(SpamDetectorError):
    """The corpus cannot be used to fit a binary classifier."""


class PersistenceError(SpamDetectorError):
    """The artifact could not be written.

    ``model`` holds the freshly trained in-memory model, which stays valid for
    the rest of the session even though it will not survive a restart.
    """

    def __init__(self, message: str, *, model: TrainedModel | None = None) -> None:
        self.model = model
        super().__init__(message)


class FeedbackWriteError(SpamDetectorError, OSError):
    """A correction could not be appended to the feedback log."""


class CorpusReadError(SpamDetectorError, OSError):
    """The base dataset or the feedback log exists but cannot be read."""


class ModelLoadError(SpamDetectorError):
    """The saved artifact exists but cannot be deserialized."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not load the model from {path}: {reason}")
