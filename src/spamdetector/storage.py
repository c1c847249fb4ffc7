# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Iterator

import joblib

from .errors import ModelLoadError


@contextmanager
def atomic_write(path: Path) -> Iterator[BinaryIO]:
    """Stage a write beside ``path`` and move it into place only on success.

    The previous file at ``path`` stays untouched if the body raises or the
    process dies mid-write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def dump_joblib(obj: Any, path: Path) -> None:
    with atomic_write(path) as handle:
        joblib.dump(obj, handle)


def load_joblib(path: Path) -> Any:
    try:
        return joblib.load(path)
    except Exception as exc:
        # Truncated or foreign files fail with KeyError, EOFError or UnpicklingError.
        raise ModelLoadError(path, f"{type(exc).__name__}: {exc}") from exc


def dump_json(payload: dict[str, Any], path: Path) -> None:
    data = (json.dumps(payload, ensure_ascii=False, indent=2) + "\n").encode("utf-8")
    with atomic_write(path) as handle:
        handle.write(data)
