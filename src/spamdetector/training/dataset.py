# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..config import SpamDetectorSettings
from ..console import MLConsole
from ..errors import CorpusFormatError, CorpusReadError, DatasetNotFoundError
from ..schemas import TSV_COLUMNS, EmailSample

FRAME_COLUMNS = ["sender", "subject", "body", "is_spam"]

TRUE_WORDS = {"true", "1"}
FALSE_WORDS = {"false", "0"}


def parse_bool(raw: str) -> bool | None:
    lowered = raw.strip().lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    return None


def _parse_line(line: str, *, path: Path, line_no: int) -> EmailSample:
    fields = line.split("\t")
    if len(fields) != len(TSV_COLUMNS):
        raise CorpusFormatError(path, line_no, f"expected {len(TSV_COLUMNS)} tab-separated fields, got {len(fields)}")
    sender, subject, body, raw_label = fields
    label = parse_bool(raw_label)
    if label is None:
        raise CorpusFormatError(path, line_no, f"cannot parse IsSpam value {raw_label!r}")
    return EmailSample(sender=sender, subject=subject, body=body, is_spam=label)


def _decode_line(raw: bytes, *, path: Path, line_no: int) -> str:
    try:
        text = raw.decode("utf-8-sig" if line_no == 1 else "utf-8")
    except UnicodeDecodeError as exc:
        raise CorpusFormatError(path, line_no, f"invalid UTF-8 at byte {exc.start}") from exc
    return text.rstrip("\r\n")


def read_samples(path: Path, *, has_header: bool) -> list[EmailSample]:
    rows: list[EmailSample] = []
    try:
        with path.open("rb") as handle:
            raw_lines = list(handle)
    except OSError as exc:
        raise CorpusReadError(f"Could not read {path}: {exc}") from exc
    for line_no, raw in enumerate(raw_lines, 1):
        line = _decode_line(raw, path=path, line_no=line_no)
        if has_header and line_no == 1:
            continue
        if not line.strip():
            continue
        rows.append(_parse_line(line, path=path, line_no=line_no))
    return rows


def load_corpus(settings: SpamDetectorSettings, console: MLConsole | None = None) -> list[EmailSample]:
    """Base dataset rows followed by feedback rows, in file order.

    Rebuilt from disk on every call so a retrain always sees the latest
    feedback. Nothing is deduplicated or shuffled here.
    """
    if not settings.data_path.exists():
        raise DatasetNotFoundError(settings.data_path)
    rows = read_samples(settings.data_path, has_header=True)
    base_count = len(rows)

    if settings.feedback_path.exists():
        feedback = read_samples(settings.feedback_path, has_header=False)
        rows.extend(feedback)
        if console:
            console.info(f"Found feedback data. Including {len(feedback)} feedback rows with {base_count} base rows.")
    elif console:
        console.info(f"No feedback data. Training on {base_count} base rows only.")
    return rows


def to_dataframe(rows: list[EmailSample]) -> pd.DataFrame:
    data = [
        {
            "sender": row.sender,
            "subject": row.subject,
            "body": row.body,
            "is_spam": int(row.is_spam),
        }
        for row in rows
    ]
    return pd.DataFrame(data, columns=FRAME_COLUMNS)
