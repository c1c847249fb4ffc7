# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from .config import SpamDetectorSettings
from .console import MLConsole
from .errors import SpamDetectorError
from .evaluation.evaluate import evaluate_saved_model
from .session import InteractiveSession
from .training.trainer import ModelLifecycle


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive spam detector that retrains on your corrections.")
    parser.add_argument("--data", type=Path, help="Base dataset TSV (with header)")
    parser.add_argument("--feedback", type=Path, help="Feedback log TSV (no header)")
    parser.add_argument("--model", type=Path, help="Model artifact path")
    parser.add_argument("--seed", type=int, help="Seed for the train/test split and the classifier")
    parser.add_argument("--test-fraction", type=float, help="Held-out fraction for evaluation")
    parser.add_argument("--evaluate", type=Path, metavar="TSV", help="Evaluate the saved model on a labeled TSV and exit")
    parser.add_argument("--quiet", action="store_true", help="Disable console output")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> SpamDetectorSettings:
    settings = SpamDetectorSettings.from_env()
    overrides = {
        "data_path": args.data,
        "feedback_path": args.feedback,
        "model_path": args.model,
        "seed": args.seed,
        "test_fraction": args.test_fraction,
    }
    return replace(settings, **{key: value for key, value in overrides.items() if value is not None})


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    console = MLConsole(enabled=not args.quiet)
    try:
        settings = build_settings(args)
    except ValueError as exc:
        console.error(str(exc))
        return 2

    if args.evaluate:
        try:
            metrics = evaluate_saved_model(model_path=settings.model_path, dataset_path=args.evaluate)
        except (OSError, SpamDetectorError) as exc:
            console.error(f"Evaluation failed: {exc}")
            return 1
        console.metrics_table(metrics.rates(), title=f"Evaluation on {args.evaluate}")
        return 0

    console.banner()
    lifecycle = ModelLifecycle(settings, console)
    session = InteractiveSession(lifecycle, console)
    try:
        return session.run()
    except SpamDetectorError as exc:
        # Only startup errors reach here: nothing to serve and nothing to train from.
        console.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
