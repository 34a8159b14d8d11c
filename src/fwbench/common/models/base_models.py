# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pydantic import BaseModel, ConfigDict


class FwbenchBaseModel(BaseModel):
    """Base for result models. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class FrozenFwbenchModel(FwbenchBaseModel):
    """Immutable result model."""

    model_config = ConfigDict(extra="forbid", frozen=True)
