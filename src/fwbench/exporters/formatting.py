# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Presentation helpers used by the human-readable reports only."""

_MEDALS = ("🥇", "🥈", "🥉")


def medal(index: int) -> str:
    """Medal for the first three places, then "4.", "5.", ..."""
    if index < len(_MEDALS):
        return _MEDALS[index]
    return f"{index + 1}."


def format_rps(rps: float) -> str:
    if rps >= 1_000_000:
        return f"{rps / 1_000_000:.2f}M"
    if rps >= 1_000:
        return f"{rps / 1_000:.2f}K"
    return f"{rps:.2f}"


def format_time(ms: float) -> str:
    if ms >= 1000:
        return f"{ms / 1000:.2f}s"
    if ms >= 1:
        return f"{ms:.2f}ms"
    return f"{ms * 1000:.2f}μs"


def format_memory(mb: float | None) -> str:
    if mb is None:
        return "n/a"
    if mb >= 1024:
        return f"{mb / 1024:.2f}GB"
    return f"{mb:.2f}MB"
