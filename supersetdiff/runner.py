"""Runner for folders of comparison case files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from .engine import DiffEngine
from .exceptions import CaseFileError
from .models import Difference, Options

logger = logging.getLogger(__name__)

CASE_PATTERNS = ("*.json", "*.yaml", "*.yml")


@dataclass
class ScenarioResult:
    """Result of a single comparison case."""
    name: str
    case_path: str
    passed: bool
    expected: Difference
    actual: Difference
    text: str = ""

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "case_path": self.case_path,
            "passed": self.passed,
            "expected": self.expected.value,
            "actual": self.actual.value,
        }
        if not self.passed:
            result["text"] = self.text
        return result


@dataclass
class GlobalReport:
    """Report across all cases of a folder."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    scenarios: list[ScenarioResult] = field(default_factory=list)
    breakdown: dict[str, list[str]] = field(default_factory=dict)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        if not self.breakdown:
            self.breakdown = {d.value: [] for d in Difference}

    def add(self, result: ScenarioResult):
        self.scenarios.append(result)
        self.total += 1
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1
        self.breakdown[result.actual.value].append(result.name)

    def to_dict(self) -> dict:
        pass_rate = f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_cases": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "pass_rate": pass_rate
            },
            "breakdown": {k: v for k, v in self.breakdown.items() if v},
            "scenarios": [s.to_dict() for s in self.scenarios]
        }

    def print_summary(self):
        pass_rate = f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"
        print(f"\nTest Results: {self.passed}/{self.total} passed ({pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")

        for difference, names in self.breakdown.items():
            if names:
                print(f"  {difference}: {len(names)} cases")


def load_case(path: Path) -> dict:
    """
    Load a case file.

    A case is a mapping with the keys first, second and expected, and an
    optional name. first and second are either JSON text or inline values.
    """
    try:
        with open(path, 'r') as f:
            if path.suffix == ".json":
                case = json.load(f)
            else:
                case = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CaseFileError(str(path), f"cannot be parsed: {e}")

    if not isinstance(case, dict):
        raise CaseFileError(str(path), "top level must be a mapping")

    missing = [k for k in ("first", "second", "expected") if k not in case]
    if missing:
        raise CaseFileError(str(path), f"missing keys: {', '.join(missing)}")

    try:
        case["expected"] = Difference.from_name(str(case["expected"]))
    except ValueError as e:
        raise CaseFileError(str(path), str(e))

    return case


class CaseRunner:
    """Runs comparison cases with a fixed set of options."""

    def __init__(self, options: Optional[Options] = None):
        self.engine = DiffEngine(options)

    def run_case(self, case: dict, name: str, case_path: str) -> ScenarioResult:
        """Run a single case."""
        first: Any = case["first"]
        second: Any = case["second"]

        # Text inputs are JSON documents, everything else is an inline value.
        result = self.engine.compare_any(first, second)

        passed = result.difference == case["expected"]
        logger.debug("Case %s: expected %s, got %s", name, case["expected"], result.difference)

        return ScenarioResult(
            name=name,
            case_path=case_path,
            passed=passed,
            expected=case["expected"],
            actual=result.difference,
            text=result.text,
        )

    def run_folder(self, folder: str, print_report: bool = True) -> GlobalReport:
        """Run all case files in a folder."""
        report = GlobalReport()
        folder_path = Path(folder)
        if not folder_path.exists():
            raise FileNotFoundError(f"Case folder not found: {folder_path}")

        case_files = sorted(
            {p for pattern in CASE_PATTERNS for p in folder_path.glob(pattern)}
        )
        for case_file in case_files:
            case = load_case(case_file)
            name = case.get("name", case_file.stem)
            result = self.run_case(case, name, str(case_file))
            report.add(result)

            if print_report:
                print(f"{'PASS' if result.passed else 'FAIL'}: {name}")
                if not result.passed:
                    print(f"  expected {result.expected}, got {result.actual}")

        if print_report:
            report.print_summary()

        return report


def run_cases(
    folder: str,
    options: Optional[Options] = None,
    print_report: bool = True
) -> GlobalReport:
    """
    Run all cases in a folder.

        from supersetdiff.runner import run_cases
        report = run_cases("cases/")

    Args:
        folder: Path to folder containing case files
        options: Optional comparison options
        print_report: Whether to print the summary report

    Returns:
        GlobalReport with all results
    """
    return CaseRunner(options).run_folder(folder, print_report)
