# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

MILLIS_PER_SECOND = 1000
NANOS_PER_MILLIS = 1_000_000
NANOS_PER_SECOND = 1_000_000_000
BYTES_PER_MIB = 1024 * 1024

LOOPBACK_HOST = "127.0.0.1"

# Inclusive lower and exclusive upper bounds of accepted status codes.
HEALTH_CHECK_STATUS_RANGE = (200, 500)
LOAD_STATUS_RANGE = (200, 300)
