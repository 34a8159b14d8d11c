# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from fwbench.exporters.ranking import (
    COLD_START_OBJECTIVE,
    LATENCY_OBJECTIVE,
    RPS_OBJECTIVE,
    OptimizationDirection,
    RankingObjective,
    identify_pareto_optimal,
    rank_results,
    rankings_for,
)


class TestRankResults:
    def test_rps_highest_first(self, sample_results):
        ranked = rank_results(sample_results, RPS_OBJECTIVE)
        assert [m.target_name for m in ranked] == ["fast", "lean", "slow"]

    def test_latency_lowest_first(self, sample_results):
        ranked = rank_results(sample_results, LATENCY_OBJECTIVE)
        assert [m.target_name for m in ranked] == ["lean", "fast", "slow"]

    def test_cold_start_lowest_first(self, sample_results):
        ranked = rank_results(sample_results, COLD_START_OBJECTIVE)
        assert [m.target_name for m in ranked] == ["lean", "slow", "fast"]

    def test_ties_keep_test_order(self, metrics_factory):
        results = [metrics_factory("b"), metrics_factory("a"), metrics_factory("c")]
        for objective in (RPS_OBJECTIVE, LATENCY_OBJECTIVE):
            assert [m.target_name for m in rank_results(results, objective)] == ["b", "a", "c"]

    def test_does_not_mutate_input(self, sample_results):
        before = list(sample_results)
        rank_results(sample_results, LATENCY_OBJECTIVE)
        assert sample_results == before


class TestRankingsFor:
    def test_automatic_mode_has_all_rankings(self):
        assert list(rankings_for(manual_start=False)) == ["by_rps", "by_latency", "by_cold_start"]

    def test_manual_mode_drops_cold_start(self):
        assert list(rankings_for(manual_start=True)) == ["by_rps", "by_latency"]


class TestIdentifyParetoOptimal:
    def test_dominated_target_excluded(self, sample_results):
        assert identify_pareto_optimal(sample_results) == ["fast", "lean"]

    def test_single_result(self, metrics_factory):
        assert identify_pareto_optimal([metrics_factory("solo")]) == ["solo"]

    def test_identical_results_are_all_optimal(self, metrics_factory):
        results = [metrics_factory("a"), metrics_factory("b")]
        assert identify_pareto_optimal(results) == ["a", "b"]

    def test_empty(self):
        assert identify_pareto_optimal([]) == []

    def test_custom_objectives(self, sample_results):
        objectives = [
            RankingObjective("cold_start_time_ms", OptimizationDirection.MINIMIZE, "Cold start"),
        ]
        assert identify_pareto_optimal(sample_results, objectives) == ["lean"]
