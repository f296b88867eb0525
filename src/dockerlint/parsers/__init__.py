# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers turning raw linter output into diagnostics."""

from __future__ import annotations

from .base import capture, capture_int, iter_pattern_matches
from .extractor import ExtractionConfig, build_diagnostic, extract, iter_matches

__all__ = [
    "ExtractionConfig",
    "build_diagnostic",
    "capture",
    "capture_int",
    "extract",
    "iter_matches",
    "iter_pattern_matches",
]
