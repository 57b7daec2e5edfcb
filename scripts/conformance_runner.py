"""Run the unittest suites once and report pass rates per sequence operation."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from seqiter.conformance import overall, run_operation_sections, to_markdown


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--tests-dir",
        default="tests",
        help="directory containing unittest test files",
    )
    parser.add_argument(
        "--json-out",
        default="output/conformance/operation_conformance.json",
        help="where to write machine-readable conformance results",
    )
    parser.add_argument(
        "--markdown-out",
        default="output/conformance/operation_conformance.md",
        help="where to write markdown summary",
    )
    args = parser.parse_args()

    rows = run_operation_sections(tests_dir=Path(args.tests_dir))
    summary = overall(rows)

    report = to_markdown(rows)
    print(report)

    json_out = Path(args.json_out)
    json_out.parent.mkdir(parents=True, exist_ok=True)
    payload = {"operations": [row.to_dict() for row in rows], "summary": summary.to_dict()}
    json_out.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")

    markdown_out = Path(args.markdown_out)
    markdown_out.parent.mkdir(parents=True, exist_ok=True)
    markdown_out.write_text(report + "\n", encoding="utf-8")

    return 1 if summary.status == "fail" else 0


if __name__ == "__main__":
    raise SystemExit(main())
