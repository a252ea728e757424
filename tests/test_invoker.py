"""Tests for solver.invoker (clingo process contract)."""
from __future__ import annotations

import logging
import pathlib
import subprocess
from http import HTTPStatus

import pytest

from solver import Calculate, SolverSettings
from solver.invoker import (
    SOLVER_ERROR_MESSAGE,
    SolverInvoker,
    classify,
    install_guidance,
    query_program,
    solver_command,
)
from solver.types import DerivedFact


class FakeRun:
    """Stands in for subprocess.run and records the call."""

    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0, raises=None) -> None:
        self.result = (stdout, stderr, returncode)
        self.raises = raises
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, argv, **kwargs):
        self.calls.append((argv, kwargs))
        if self.raises is not None:
            raise self.raises
        stdout, stderr, returncode = self.result
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)


class TestQueryProgram:
    def test_restricts_to_card_and_non_user_fields(self) -> None:
        text = query_program("card1")
        assert text.count("Cardkey = card1") == 2
        assert text.count("not userfield(Cardkey, Field)") == 2
        assert "#show." in text

    def test_command_line(self) -> None:
        argv = solver_command("clingo", pathlib.Path("/p/.calc/main.lp"))
        assert argv == ["clingo", "-", "--outf=0", "--out-ifs=\\n", "-V0", "/p/.calc/main.lp"]


class TestClassify:
    def test_stdout_is_success(self) -> None:
        status = classify('field(card1,"priority","3")\nSATISFIABLE\n', "", 30)
        assert status.status_code == HTTPStatus.OK
        assert status.payload == [DerivedFact("card1", "priority", "3")]

    def test_stdout_without_derivations(self) -> None:
        status = classify("SATISFIABLE\n", "", 30)
        assert status.ok
        assert status.payload == []

    def test_error_status_is_validation_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="solver.invoker"):
            status = classify("", "<stdin>:1:1: error: syntax error", 65)
        assert status.status_code == HTTPStatus.BAD_REQUEST
        assert status.message == SOLVER_ERROR_MESSAGE
        assert any("Błąd" in r.getMessage() for r in caplog.records)

    def test_success_bits_without_stdout_still_fail(self) -> None:
        status = classify("", "warning", 30)
        assert status.status_code == HTTPStatus.BAD_REQUEST

    def test_killed_by_signal(self) -> None:
        assert classify("", "killed", -9).status_code == HTTPStatus.BAD_REQUEST

    @pytest.mark.parametrize("stderr, code", [("", 0), ("", 65), ("something", 0), (None, None)])
    def test_nothing_usable_is_environment_failure(self, stderr, code) -> None:
        status = classify("", stderr, code)
        assert status.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert "Clingo" in status.message


@pytest.mark.parametrize(
    "platform, expected",
    [("darwin", "brew install clingo"), ("win32", "Windows"), ("linux", "Linux")],
)
def test_install_guidance(platform: str, expected: str) -> None:
    assert expected in install_guidance(platform)


class TestSolverInvoker:
    def test_passes_query_on_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = FakeRun(stdout='field(c1,"x","1")\nSATISFIABLE\n', returncode=30)
        monkeypatch.setattr(subprocess, "run", fake)
        settings = SolverSettings(clingo_binary="/opt/clingo", timeout=3.0)

        status = SolverInvoker(settings).run(pathlib.Path("/p/main.lp"), "c1")

        assert status.payload == [DerivedFact("c1", "x", "1")]
        argv, kwargs = fake.calls[0]
        assert argv[0] == "/opt/clingo"
        assert argv[-1] == "/p/main.lp"
        assert "Cardkey = c1" in kwargs["input"]
        assert kwargs["timeout"] == 3.0

    def test_missing_binary(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(subprocess, "run", FakeRun(raises=FileNotFoundError("clingo")))
        status = SolverInvoker().run(pathlib.Path("main.lp"), "c1")
        assert status.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert "Zainstaluj" in status.message

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            subprocess, "run", FakeRun(raises=subprocess.TimeoutExpired(["clingo"], 1.0))
        )
        status = SolverInvoker(SolverSettings(timeout=1.0)).run(pathlib.Path("main.lp"), "c1")
        assert status.status_code == HTTPStatus.GATEWAY_TIMEOUT


class TestCalculateRun:
    def test_runs_against_generated_main(
        self, calc: Calculate, project: pathlib.Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calc.generate(project)
        fake = FakeRun(stdout='field(childA,"derived","yes")\nSATISFIABLE\n', returncode=30)
        monkeypatch.setattr(subprocess, "run", fake)

        status = calc.run(project, "childA")

        assert status.ok
        assert status.payload == [DerivedFact("childA", "derived", "yes")]
        assert fake.calls[0][0][-1] == str(project / ".calc" / "main.lp")

    def test_empty_key(self, calc: Calculate, project: pathlib.Path) -> None:
        status = calc.run(project, "")
        assert status.status_code == HTTPStatus.BAD_REQUEST

    def test_unknown_card(self, calc: Calculate, project: pathlib.Path) -> None:
        status = calc.run(project, "ghost")
        assert status.status_code == HTTPStatus.BAD_REQUEST
        assert "ghost" in status.message
