# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from typing import Callable

from .console import MLConsole
from .errors import (
    CorpusFormatError,
    CorpusReadError,
    DatasetNotFoundError,
    FeedbackWriteError,
    PersistenceError,
    TrainingDataError,
)
from .inference.predictor import SpamPredictor
from .training.trainer import ModelLifecycle

EXIT_WORD = "q"


class SessionExit(Exception):
    pass


class InteractiveSession:
    """Predict, ask for agreement, and feed corrections back into the model."""

    def __init__(
        self,
        lifecycle: ModelLifecycle,
        console: MLConsole,
        reader: Callable[[str], str] | None = None,
    ) -> None:
        self.lifecycle = lifecycle
        self.console = console
        self.reader = reader or console.ask
        self.predictor: SpamPredictor | None = None

    def _read(self, prompt: str) -> str:
        try:
            value = self.reader(prompt)
        except EOFError:
            raise SessionExit() from None
        value = value or ""
        if value.strip().lower() == EXIT_WORD:
            raise SessionExit()
        return value

    def run(self) -> int:
        try:
            model = self.lifecycle.startup()
        except PersistenceError as exc:
            if exc.model is None:
                raise
            self.console.warn(f"{exc} It will not survive a restart.")
            model = exc.model
        self.predictor = model.predictor()
        self.console.info("=== Interactive email checking ===")
        self.console.info(f"Enter '{EXIT_WORD}' at any prompt to exit")
        try:
            while True:
                self.step()
                self.console.rule()
        except SessionExit:
            pass
        self.console.success("The app completed successfully. Goodbye!")
        return 0

    def step(self) -> None:
        sender = self._read("Sender email:")
        subject = self._read("Email subject:")
        body = self._read("Email body:")

        if self.predictor is None:
            self.predictor = self.lifecycle.startup().predictor()
        prediction = self.predictor.predict(sender=sender, subject=subject, body=body)
        self.console.prediction_panel(prediction)

        agreement = self._read("Do you agree with the result? (y/n):").strip().lower()
        if agreement != "n":
            return
        is_spam = self._read("Is it SPAM? (y/n):").strip().lower() == "y"
        self.correct(sender, subject, body, is_spam)

    def correct(self, sender: str, subject: str, body: str, is_spam: bool) -> bool:
        """Record a correction and retrain; returns True when the predictor was replaced."""
        try:
            model = self.lifecycle.learn_from_correction(sender, subject, body, is_spam)
        except FeedbackWriteError as exc:
            self.console.error(f"Your correction was lost: {exc}")
            return False
        except PersistenceError as exc:
            self.console.warn(f"{exc} It will not survive a restart.")
            if exc.model is None:
                return False
            model = exc.model
        except (TrainingDataError, CorpusFormatError, CorpusReadError, DatasetNotFoundError) as exc:
            self.console.error(f"Retraining failed, keeping the previous model: {exc}")
            return False
        self.predictor = model.predictor()
        self.console.success("The model has been retrained with the full dataset and your feedback.")
        return True
