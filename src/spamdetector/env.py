# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import os


def get_env(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


def get_int_env(name: str, default: int | None) -> int | None:
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_float_env(name: str, default: float) -> float:
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
