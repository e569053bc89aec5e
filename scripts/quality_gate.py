"""Run lint, format, type and test checks and report results as JSON.

Usage:
    python scripts/quality_gate.py              # run all, JSON output
    python scripts/quality_gate.py --skip-tests # skip pytest
    python scripts/quality_gate.py --fix        # apply ruff fixes first
"""

from __future__ import annotations

import argparse
import json
import re
import subprocess
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent

MYPY_TARGETS = ["wpengine_mcp/"]


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, text=True, cwd=str(ROOT), timeout=300)


def _timed(cmd: list[str]) -> tuple[subprocess.CompletedProcess, float]:
    t0 = time.monotonic()
    r = _run(cmd)
    return r, round(time.monotonic() - t0, 1)


def _count(lines: list[str], pattern: str) -> int:
    return sum(1 for line in lines if re.search(pattern, line))


def check_ruff_lint(fix: bool = False) -> dict:
    if fix:
        _run([sys.executable, "-m", "ruff", "check", "--fix", "."])
    r, duration = _timed([sys.executable, "-m", "ruff", "check", "."])
    return {
        "status": "pass" if r.returncode == 0 else "fail",
        "errors": _count(r.stdout.splitlines(), r"^\S+:\d+:\d+:"),
        "duration_s": duration,
        "output": r.stdout.strip(),
    }


def check_ruff_format() -> dict:
    r, duration = _timed([sys.executable, "-m", "ruff", "format", "--check", "."])
    lines = r.stderr.splitlines() + r.stdout.splitlines()
    return {
        "status": "pass" if r.returncode == 0 else "fail",
        "files_to_reformat": _count(lines, r"^Would reformat"),
        "duration_s": duration,
        "output": r.stdout.strip(),
    }


def check_mypy() -> dict:
    r, duration = _timed([sys.executable, "-m", "mypy", *MYPY_TARGETS])
    return {
        "status": "pass" if r.returncode == 0 else "fail",
        "errors": _count(r.stdout.splitlines(), r": error:"),
        "duration_s": duration,
        "output": r.stdout.strip(),
    }


def check_pytest() -> dict:
    r, duration = _timed([sys.executable, "-m", "pytest", "tests/", "-q", "--no-header"])
    lines = reversed(r.stdout.splitlines())
    summary = next((line for line in lines if re.search(r"\d+ (passed|failed)", line)), "")
    passed = re.search(r"(\d+)\s+passed", summary)
    failed = re.search(r"(\d+)\s+failed", summary)
    return {
        "status": "pass" if r.returncode == 0 else "fail",
        "passed": int(passed.group(1)) if passed else 0,
        "failed": int(failed.group(1)) if failed else 0,
        "duration_s": duration,
        "output": r.stdout.strip()[-2000:],
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Run all quality checks")
    parser.add_argument("--skip-tests", action="store_true", help="Skip pytest")
    parser.add_argument("--fix", action="store_true", help="Apply ruff fixes first")
    args = parser.parse_args()

    t0 = time.monotonic()
    checks: dict[str, dict] = {
        "ruff_lint": check_ruff_lint(fix=args.fix),
        "ruff_format": check_ruff_format(),
        "mypy": check_mypy(),
        "pytest": (
            {"status": "skip", "reason": "--skip-tests"} if args.skip_tests else check_pytest()
        ),
    }
    for check in checks.values():
        if check["status"] == "pass":
            check.pop("output", None)

    ok = all(c["status"] in ("pass", "skip") for c in checks.values())
    result = {
        "overall": "pass" if ok else "fail",
        "checks": checks,
        "total_duration_s": round(time.monotonic() - t0, 1),
    }
    print(json.dumps(result, indent=2))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
