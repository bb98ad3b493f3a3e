#!/usr/bin/env python
"""
Local Parser Coverage Report

Runs the rule-based scenario parser over the built-in presets (and any
extra scenario files) and prints which ones it resolves without the remote
extractor.

Usage:
    python scripts/coverage_report.py
    python scripts/coverage_report.py --scenario notes/vendor_a.txt --json
"""

import argparse
import json
import textwrap
from pathlib import Path

from clinimpact.evaluation.coverage import coverage_summary, local_coverage
from clinimpact.evaluation.presets import SCENARIO_PRESETS, ScenarioPreset


def load_scenarios(paths: list[str]) -> list[ScenarioPreset]:
    """Presets plus one scenario per text file (no reference parameters)."""
    scenarios = list(SCENARIO_PRESETS)
    for path in paths:
        p = Path(path)
        scenarios.append(
            ScenarioPreset(id=p.stem, name=p.stem, description=str(p), context=p.read_text(encoding="utf-8"))
        )
    return scenarios


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Report which scenarios the local parser resolves",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        Examples:
          python scripts/coverage_report.py
          python scripts/coverage_report.py --scenario a.txt --scenario b.txt --json
        """),
    )
    parser.add_argument("--scenario", action="append", default=[], help="Extra scenario text file")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON only")
    args = parser.parse_args()

    frame = local_coverage(load_scenarios(args.scenario))
    summary = coverage_summary(frame)

    if args.json:
        print(json.dumps(summary, indent=2))
        return

    print(frame.to_string())
    print()
    print(f"Scenarios:       {summary['n_scenarios']}")
    print(f"Usable locally:  {summary['usable_rate']:.0%}")
    if summary["field_accuracy"] is not None:
        print(f"Field accuracy:  {summary['field_accuracy']:.0%}")
    if summary["unresolved"]:
        print(f"Need remote:     {', '.join(summary['unresolved'])}")


if __name__ == "__main__":
    main()
