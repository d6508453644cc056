"""Tests for running policies side by side and the experiment series."""

import pytest

from disk_sim.evaluation import DEFAULT_POLICIES, ExperimentConfig, evaluate_suite, run_experiments
from disk_sim.workload import generate_requests

SEED = 2024


class TestEvaluateSuite:
    """Each policy runs on its own copy of the workload."""

    def test_input_untouched(self) -> None:
        """The shared workload keeps its zero sentinels after both runs."""
        requests = generate_requests(40.0, 16, 4000.0, seed=SEED)
        evaluate_suite(DEFAULT_POLICIES, requests)
        assert all(not r.dispatched for r in requests)
        assert all(r.start_time == 0.0 and r.completion_time == 0.0 for r in requests)

    def test_runs_are_independent(self) -> None:
        """Both policies serve the whole workload on separate request objects."""
        requests = generate_requests(40.0, 16, 4000.0, seed=SEED)
        fifo, sstf = evaluate_suite(DEFAULT_POLICIES, requests)
        assert (fifo.name, sstf.name) == ("FIFO", "SSTF")
        assert fifo.stats.request_count == sstf.stats.request_count == len(requests)
        assert not set(map(id, fifo.simulation.requests)) & set(map(id, sstf.simulation.requests))

    def test_histograms_cover_every_request(self) -> None:
        """Histogram counts add up to the served count."""
        requests = generate_requests(40.0, 16, 4000.0, seed=SEED)
        for outcome in evaluate_suite(DEFAULT_POLICIES, requests):
            assert outcome.histogram is not None
            assert sum(b.count for b in outcome.histogram.bins) == outcome.stats.request_count
            assert outcome.histogram.mean_time == pytest.approx(outcome.stats.mean_time)


class TestExperimentConfig:
    """Defaults and validation."""

    def test_default_scales(self) -> None:
        """Three experiments at 2000, 200 and 20 ms."""
        assert ExperimentConfig().scales() == pytest.approx([2000.0, 200.0, 20.0])

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"horizon": -1.0},
            {"interarrival_scale": 0.0},
            {"max_transfer_size": 0},
            {"experiments": 0},
            {"scale_divisor": 1.0},
        ],
    )
    def test_invalid_config(self, kwargs: dict) -> None:
        """Out-of-range parameters raise ValueError."""
        with pytest.raises(ValueError):
            ExperimentConfig(**kwargs)


class TestRunExperiments:
    """The three-step series with shrinking inter-arrival scale."""

    def test_series_shape(self) -> None:
        """Each step generates more requests and runs both policies."""
        config = ExperimentConfig(horizon=3000.0, interarrival_scale=200.0, seed=SEED)
        results = run_experiments(config)
        assert [r.number for r in results] == [1, 2, 3]
        assert [r.interarrival_scale for r in results] == pytest.approx([200.0, 20.0, 2.0])
        assert results[0].request_count < results[2].request_count
        for result in results:
            assert [o.name for o in result.outcomes] == ["FIFO", "SSTF"]
            for outcome in result.outcomes:
                assert outcome.stats.request_count == result.request_count

    def test_seed_reproduces_series(self) -> None:
        """The same seed gives the same counts and statistics."""
        config = ExperimentConfig(horizon=2000.0, interarrival_scale=100.0, experiments=2, seed=SEED)
        first = run_experiments(config)
        second = run_experiments(config)
        assert [r.request_count for r in first] == [r.request_count for r in second]
        assert [o.stats for r in first for o in r.outcomes] == [o.stats for r in second for o in r.outcomes]

    def test_degenerate_horizon(self) -> None:
        """A zero horizon yields no requests and no histograms."""
        results = run_experiments(ExperimentConfig(horizon=0.0, experiments=1, seed=SEED))
        assert results[0].request_count == 0
        for outcome in results[0].outcomes:
            assert outcome.histogram is None
            assert outcome.stats.request_count == 0
