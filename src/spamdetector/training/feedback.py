# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import os
import re
from pathlib import Path

from ..errors import FeedbackWriteError
from ..schemas import EmailSample

FIELD_BREAK_RE = re.compile(r"[\t\r\n]+")


def _clean_field(value: str) -> str:
    return FIELD_BREAK_RE.sub(" ", value or "")


def format_feedback_line(sample: EmailSample) -> str:
    return "\t".join(
        (
            _clean_field(sample.sender),
            _clean_field(sample.subject),
            _clean_field(sample.body),
            str(bool(sample.is_spam)),
        )
    )


class FeedbackRecorder:
    """Append-only writer for the feedback log.

    ``record`` returns only once the line is flushed and fsynced, so a retrain
    started afterwards always reads it back.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def record(self, sender: str, subject: str, body: str, is_spam: bool) -> EmailSample:
        sample = EmailSample(
            sender=_clean_field(sender),
            subject=_clean_field(subject),
            body=_clean_field(body),
            is_spam=bool(is_spam),
        )
        line = format_feedback_line(sample)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as exc:
            raise FeedbackWriteError(f"Could not append feedback to {self.path}: {exc}") from exc
        return sample
