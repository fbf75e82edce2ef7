"""
Runs the API scenarios through pytest and prints a pass/fail/skip summary.

    api-tests                 # whole suite: live scenarios and offline tests
    api-tests -m "not api"    # offline tests only
    api-tests -m api          # live scenarios only
    pytest -p runner          # same summary from a plain pytest run
"""
import glob
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import pytest

from logging_helper import GREEN, RED, RESET, YELLOW

HERE = os.path.dirname(os.path.abspath(__file__))

TEST_MODULE_PATTERN = "test_*.py"

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass
class RunSummary:
    outcomes: Dict[str, str] = field(default_factory=dict)

    def record(self, nodeid: str, outcome: str):
        if outcome not in (PASSED, FAILED, SKIPPED):
            raise ValueError(f"Unknown outcome {outcome!r} for {nodeid}")
        # a failure in any phase sticks, even if teardown passes afterwards
        if self.outcomes.get(nodeid) == FAILED:
            return
        self.outcomes[nodeid] = outcome

    def _count(self, outcome: str) -> int:
        return sum(1 for o in self.outcomes.values() if o == outcome)

    @property
    def passed(self) -> int:
        return self._count(PASSED)

    @property
    def failed(self) -> int:
        return self._count(FAILED)

    @property
    def skipped(self) -> int:
        return self._count(SKIPPED)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def failed_tests(self) -> List[str]:
        return [nodeid for nodeid, o in self.outcomes.items() if o == FAILED]

    def lines(self) -> List[str]:
        return [
            "===== TEST EXECUTION SUMMARY =====",
            f"Passed tests: {self.passed}",
            f"Failed tests: {self.failed}",
            f"Skipped tests: {self.skipped}",
            f"Total tests: {self.total}",
        ]


def outcome_of(report) -> Optional[str]:
    """Map one pytest phase report to a scenario outcome (None = nothing to record)."""
    if report.outcome == "failed":
        return FAILED
    if report.outcome == "skipped":
        return SKIPPED
    if report.when == "call":
        return PASSED
    return None


class SummaryPlugin:
    def __init__(self):
        self.summary = RunSummary()

    def pytest_runtest_logreport(self, report):
        outcome = outcome_of(report)
        if outcome is not None:
            self.summary.record(report.nodeid, outcome)

    def pytest_terminal_summary(self, terminalreporter, exitstatus, config):
        summary = self.summary
        color = RED if summary.failed else (YELLOW if summary.skipped else GREEN)
        terminalreporter.write_line("")
        for line in summary.lines():
            terminalreporter.write_line(f"{color}{line}{RESET}")
        for nodeid in summary.failed_tests:
            terminalreporter.write_line(f"{RED}FAILED {nodeid}{RESET}")


def pytest_configure(config):
    # loaded with `pytest -p runner`; main() registers its own instance
    if not any(isinstance(p, SummaryPlugin) for p in config.pluginmanager.get_plugins()):
        config.pluginmanager.register(SummaryPlugin(), "api-summary")


def default_args() -> List[str]:
    """Every test module beside this file, so `-m` filters pick from the whole suite."""
    return sorted(glob.glob(os.path.join(HERE, TEST_MODULE_PATTERN)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not any(os.path.exists(a.split("::")[0]) for a in args):
        args += default_args()

    plugin = SummaryPlugin()
    exit_code = int(pytest.main(args, plugins=[plugin]))
    if plugin.summary.failed and exit_code == 0:
        exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
