"""Tests for the command-line driver."""

import json
import logging

import pytest

from disk_sim.__main__ import main, parse_policies

_SMALL_RUN = ["--seed", "3", "--horizon", "2000", "--scale", "100", "--experiments", "2"]


class TestParsePolicies:
    """Policy list parsing."""

    def test_default_pair(self) -> None:
        """Both policies in the order given."""
        assert [name for name, _ in parse_policies("fifo,sstf")] == ["FIFO", "SSTF"]

    def test_case_and_spaces(self) -> None:
        """Names are trimmed and case-insensitive."""
        assert [name for name, _ in parse_policies(" SSTF ")] == ["SSTF"]

    @pytest.mark.parametrize("raw", ["", "scan", "fifo,elevator"])
    def test_rejects_unknown(self, raw: str) -> None:
        """Empty or unknown policy lists raise ValueError."""
        with pytest.raises(ValueError):
            parse_policies(raw)


class TestMain:
    """End-to-end runs of the driver."""

    def test_text_report(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The text report covers the header, each experiment and both histograms."""
        main(_SMALL_RUN)
        out = capsys.readouterr().out
        assert "Cylinders: 500" in out
        assert "Experiment 1" in out
        assert "Experiment 2" in out
        assert "FIFO results" in out
        assert "SSTF results" in out
        assert "Response time distribution (FIFO)" in out
        assert "Response time distribution (SSTF)" in out

    def test_no_histograms(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Histograms can be switched off."""
        main([*_SMALL_RUN, "--no-histograms"])
        out = capsys.readouterr().out
        assert "Response time distribution" not in out
        assert "SSTF results" in out

    def test_json_report(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The JSON report carries stats and bins per policy."""
        main([*_SMALL_RUN, "--json", "--policies", "sstf"])
        report = json.loads(capsys.readouterr().out)
        assert report["geometry"]["cylinders"] == 500
        assert len(report["experiments"]) == 2
        for experiment in report["experiments"]:
            assert list(experiment["policies"]) == ["SSTF"]
            entry = experiment["policies"]["SSTF"]
            assert entry["stats"]["request_count"] == experiment["request_count"]
            if experiment["request_count"]:
                assert sum(b["count"] for b in entry["histogram"]["bins"]) == experiment["request_count"]

    def test_invalid_configuration_exits(self) -> None:
        """Bad parameters end the run with a diagnostic."""
        with pytest.raises(SystemExit):
            main(["--cylinders", "0"])

    def test_unknown_policy_exits(self) -> None:
        """An unknown policy name ends the run with a diagnostic."""
        with pytest.raises(SystemExit):
            main(["--policies", "scan"])

    def test_allocation_failure_is_fatal(
        self,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Running out of memory for the request stream exits with status 1."""

        def _exhausted(*args: object, **kwargs: object) -> None:
            raise MemoryError

        monkeypatch.setattr("disk_sim.__main__.run_experiments", _exhausted)
        with caplog.at_level(logging.CRITICAL), pytest.raises(SystemExit) as excinfo:
            main(_SMALL_RUN)
        assert excinfo.value.code == 1
        critical = [r for r in caplog.records if r.levelno == logging.CRITICAL]
        assert critical
        assert critical[0].name == "disk_sim.__main__"
