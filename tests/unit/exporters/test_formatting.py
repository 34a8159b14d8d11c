# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from fwbench.exporters.formatting import format_memory, format_rps, format_time, medal


@pytest.mark.parametrize(
    "index,expected", [(0, "🥇"), (1, "🥈"), (2, "🥉"), (3, "4."), (9, "10.")]
)
def test_medal(index, expected):
    assert medal(index) == expected


@pytest.mark.parametrize(
    "rps,expected",
    [(512.3, "512.30"), (1_000, "1.00K"), (45_678.9, "45.68K"), (2_500_000, "2.50M")],
)
def test_format_rps(rps, expected):
    assert format_rps(rps) == expected


@pytest.mark.parametrize(
    "ms,expected",
    [(0.25, "250.00μs"), (1.0, "1.00ms"), (999.5, "999.50ms"), (1500.0, "1.50s")],
)
def test_format_time(ms, expected):
    assert format_time(ms) == expected


@pytest.mark.parametrize(
    "mb,expected", [(None, "n/a"), (12.5, "12.50MB"), (2048.0, "2.00GB")]
)
def test_format_memory(mb, expected):
    assert format_memory(mb) == expected
