"""Per-operation conformance report over the unittest suites.

The suite runs once. Each test is then attributed to exactly one operation
by the words of its method name, checked against the sections in order, so
the per-operation rows always add up to the number of tests discovered.
"""

from __future__ import annotations

import unittest
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Iterator


@dataclass(frozen=True)
class OperationSection:
    operation: str
    contract: str
    phrases: tuple[str, ...]

    def matches(self, words: tuple[str, ...]) -> bool:
        for phrase in self.phrases:
            parts = tuple(phrase.split("_"))
            width = len(parts)
            if any(words[i : i + width] == parts for i in range(len(words) - width + 1)):
                return True
        return False


# Longer phrases come before their prefixes: flat_map before map, find_last before find.
_SECTIONS: Final[tuple[OperationSection, ...]] = (
    OperationSection("Chain", "chained calls match the free functions", ("chain", "pipeline", "terminals")),
    OperationSection("flat_map", "map then spread results one level", ("flat_map",)),
    OperationSection("find_last", "first match scanning from the end", ("find_last",)),
    OperationSection("find_index", "lowest matching index, else -1, stops at the match", ("find_index",)),
    OperationSection("find", "lowest matching element, else None, stops at the match", ("find",)),
    OperationSection("filter_", "order-preserving subsequence; always-true copies the input", ("filter",)),
    OperationSection("for_each", "visits every index ascending, never stops early", ("for_each",)),
    OperationSection("map_", "result length equals input length", ("map",)),
    OperationSection(
        "some / every",
        "some([]) is False, every([]) is True, both stop at the deciding element",
        ("some", "every", "quantifiers"),
    ),
    OperationSection("reduce_right", "fold from the last element down", ("reduce_right",)),
    OperationSection("reduce", "empty without seed raises; identity reducer returns the seed", ("reduce",)),
    OperationSection("includes", "SameValueZero membership, NaN is found", ("includes",)),
    OperationSection("last_index_of", "strict equality scanning from the end", ("last_index_of",)),
    OperationSection("index_of", "strict equality, NaN never found", ("index_of",)),
    OperationSection("slice_", "bounds clamped into [0, len], never raises", ("slice",)),
    OperationSection("concat", "items spread one level", ("concat",)),
    OperationSection("join", "None renders empty, nested sequences comma-joined", ("join",)),
    OperationSection("reverse", "reversed copy", ("reverse",)),
    OperationSection("flat", "flatten to depth", ("flat",)),
    OperationSection("sort", "stable copy, string order by default", ("sort",)),
    OperationSection(
        "receivers",
        "receiver validation, result containers, equality and callback adaptation",
        ("receiver", "receivers", "sequence", "collect", "callback", "callbacks", "equals", "same", "numpy", "scenarios", "never_mutate"),
    ),
    OperationSection("report", "conformance report bookkeeping", ("report",)),
)

UNMATCHED: Final = OperationSection("other", "tests no operation claims", ())

_OUTCOMES: Final[tuple[str, ...]] = ("passed", "failed", "errors", "skipped")


def method_words(test_id: str) -> tuple[str, ...]:
    name = test_id.rsplit(".", 1)[-1]
    return tuple(word for word in name.lower().split("_") if word and word != "test")


def section_for(test_id: str, sections: tuple[OperationSection, ...] | None = None) -> OperationSection:
    words = method_words(test_id)
    for section in sections if sections is not None else _SECTIONS:
        if section.matches(words):
            return section
    return UNMATCHED


class OutcomeResult(unittest.TestResult):
    """Test result keeping one outcome per test id."""

    def __init__(self) -> None:
        super().__init__()
        self.outcomes: dict[str, str] = {}

    def addSuccess(self, test) -> None:
        super().addSuccess(test)
        self.outcomes.setdefault(test.id(), "passed")

    def addFailure(self, test, err) -> None:
        super().addFailure(test, err)
        self.outcomes[test.id()] = "failed"

    def addError(self, test, err) -> None:
        super().addError(test, err)
        self.outcomes[test.id()] = "errors"

    def addSkip(self, test, reason) -> None:
        super().addSkip(test, reason)
        self.outcomes[test.id()] = "skipped"

    def addExpectedFailure(self, test, err) -> None:
        super().addExpectedFailure(test, err)
        self.outcomes[test.id()] = "passed"

    def addUnexpectedSuccess(self, test) -> None:
        super().addUnexpectedSuccess(test)
        self.outcomes[test.id()] = "failed"

    def addSubTest(self, test, subtest, err) -> None:
        super().addSubTest(test, subtest, err)
        if err is None or self.outcomes.get(test.id()) == "errors":
            return
        failed = issubclass(err[0], test.failureException)
        self.outcomes[test.id()] = "failed" if failed else "errors"


@dataclass(frozen=True)
class OperationStats:
    operation: str
    contract: str
    passed: int = 0
    failed: int = 0
    errors: int = 0
    skipped: int = 0

    @property
    def tests_run(self) -> int:
        return self.passed + self.failed + self.errors + self.skipped

    @property
    def pass_rate(self) -> float | None:
        executable = self.tests_run - self.skipped
        return None if executable == 0 else (self.passed / executable) * 100.0

    @property
    def status(self) -> str:
        if self.failed or self.errors:
            return "fail"
        return "skipped" if self.passed == 0 else "pass"

    def to_dict(self) -> dict[str, object]:
        return {
            "operation": self.operation,
            "contract": self.contract,
            "tests_run": self.tests_run,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "skipped": self.skipped,
            "pass_rate": self.pass_rate,
            "status": self.status,
        }


def iter_tests(suite: unittest.TestSuite) -> Iterator[unittest.TestCase]:
    for item in suite:
        if isinstance(item, unittest.TestSuite):
            yield from iter_tests(item)
        else:
            yield item


def load_suite(tests_dir: Path = Path("tests")) -> unittest.TestSuite:
    loader = unittest.TestLoader()
    return loader.discover(start_dir=str(tests_dir), pattern="test*.py", top_level_dir=str(tests_dir))


def tally(
    outcomes: dict[str, str], sections: tuple[OperationSection, ...] | None = None
) -> list[OperationStats]:
    ordered = (*(sections if sections is not None else _SECTIONS), UNMATCHED)
    counts = {section.operation: dict.fromkeys(_OUTCOMES, 0) for section in ordered}
    for test_id, outcome in outcomes.items():
        counts[section_for(test_id, sections).operation][outcome] += 1

    rows = []
    for section in ordered:
        row = OperationStats(section.operation, section.contract, **counts[section.operation])
        if section is not UNMATCHED or row.tests_run:
            rows.append(row)
    return rows


def run_operation_sections(*, tests_dir: Path = Path("tests")) -> list[OperationStats]:
    suite = load_suite(tests_dir)
    # TestSuite.run drops each test once it has run, so ids are taken up front.
    test_ids = [test.id() for test in iter_tests(suite)]
    result = OutcomeResult()
    result.startTestRun()
    suite.run(result)
    result.stopTestRun()
    # Tests behind a failed class or module fixture never report an outcome.
    for test_id in test_ids:
        result.outcomes.setdefault(test_id, "errors")
    return tally(result.outcomes)


def overall(rows: list[OperationStats]) -> OperationStats:
    return OperationStats(
        "all",
        "every operation",
        passed=sum(row.passed for row in rows),
        failed=sum(row.failed for row in rows),
        errors=sum(row.errors for row in rows),
        skipped=sum(row.skipped for row in rows),
    )


def to_markdown(rows: list[OperationStats]) -> str:
    lines = [
        "# Operation Conformance Report",
        "",
        "| Operation | Contract | Run | Passed | Skipped | Failed | Errors | Pass Rate | Status |",
        "|---|---|---:|---:|---:|---:|---:|---:|---|",
    ]
    for row in [*rows, overall(rows)]:
        rate = "n/a" if row.pass_rate is None else f"{row.pass_rate:.2f}%"
        lines.append(
            f"| `{row.operation}` | {row.contract} | {row.tests_run} | {row.passed} | {row.skipped} | {row.failed} | {row.errors} | {rate} | {row.status} |"
        )
    return "\n".join(lines)
