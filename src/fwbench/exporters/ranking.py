# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Ordering targets by a metric, and finding the ones no other target beats."""

from enum import Enum
from typing import NamedTuple

from fwbench.common.models import PerformanceMetrics


class OptimizationDirection(Enum):
    """Direction of optimization for a metric."""

    MAXIMIZE = "maximize"  # Higher is better (e.g., RPS)
    MINIMIZE = "minimize"  # Lower is better (e.g., latency)


class RankingObjective(NamedTuple):
    """A PerformanceMetrics field and which way is better.

    Args:
        metric_key: Field name on PerformanceMetrics
        direction: Whether to maximize or minimize the field
        title: Heading used in reports
        unit: Unit suffix used in reports
    """

    metric_key: str
    direction: OptimizationDirection
    title: str
    unit: str = ""

    def value_of(self, metrics: PerformanceMetrics) -> float:
        return getattr(metrics, self.metric_key)


RPS_OBJECTIVE = RankingObjective(
    "requests_per_second", OptimizationDirection.MAXIMIZE, "Requests per second"
)
LATENCY_OBJECTIVE = RankingObjective(
    "average_latency_ms", OptimizationDirection.MINIMIZE, "Average latency", "ms"
)
COLD_START_OBJECTIVE = RankingObjective(
    "cold_start_time_ms", OptimizationDirection.MINIMIZE, "Cold start time", "ms"
)

# Keyed by the name used in the JSON summary.
DEFAULT_RANKINGS: dict[str, RankingObjective] = {
    "by_rps": RPS_OBJECTIVE,
    "by_latency": LATENCY_OBJECTIVE,
    "by_cold_start": COLD_START_OBJECTIVE,
}

DEFAULT_PARETO_OBJECTIVES = [RPS_OBJECTIVE, LATENCY_OBJECTIVE]


def rankings_for(manual_start: bool) -> dict[str, RankingObjective]:
    """Rankings that carry information for this run mode.

    Cold start is always 0 when targets were started by hand, so it is left out.
    """
    if manual_start:
        return {k: v for k, v in DEFAULT_RANKINGS.items() if v is not COLD_START_OBJECTIVE}
    return dict(DEFAULT_RANKINGS)


def rank_results(
    results: list[PerformanceMetrics], objective: RankingObjective
) -> list[PerformanceMetrics]:
    """Best first. Ties keep test order."""
    return sorted(
        results,
        key=objective.value_of,
        reverse=objective.direction == OptimizationDirection.MAXIMIZE,
    )


def identify_pareto_optimal(
    results: list[PerformanceMetrics],
    objectives: list[RankingObjective] | None = None,
) -> list[str]:
    """Names of targets that no other target beats on every objective at once.

    A target is dominated when another is better or equal on all objectives and
    strictly better on at least one.
    """
    if objectives is None:
        objectives = DEFAULT_PARETO_OBJECTIVES

    pareto_optimal = []
    for candidate in results:
        values1 = [obj.value_of(candidate) for obj in objectives]

        is_dominated = False
        for other in results:
            if other is candidate:
                continue
            values2 = [obj.value_of(other) for obj in objectives]

            better_or_equal = 0
            strictly_better = 0
            for i, obj in enumerate(objectives):
                if obj.direction == OptimizationDirection.MAXIMIZE:
                    better, equal = values2[i] > values1[i], values2[i] == values1[i]
                else:
                    better, equal = values2[i] < values1[i], values2[i] == values1[i]
                if better:
                    strictly_better += 1
                if better or equal:
                    better_or_equal += 1

            if better_or_equal == len(objectives) and strictly_better > 0:
                is_dominated = True
                break

        if not is_dominated:
            pareto_optimal.append(candidate.target_name)

    return pareto_optimal
