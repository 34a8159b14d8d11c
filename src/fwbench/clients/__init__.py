# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.clients.protocols import RequestDriverProtocol
from fwbench.clients.request_driver import RequestDriver

__all__ = ["RequestDriver", "RequestDriverProtocol"]
