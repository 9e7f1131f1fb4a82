"""
Score a seeded mock population and print the organization rollup.

Usage:
    python -m readiness_engine.scripts.score_demo                        # 50 people, seed 42
    python -m readiness_engine.scripts.score_demo --users 200 --seed 7
    python -m readiness_engine.scripts.score_demo --workers 4 --output out.json
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from readiness_engine.config import COMPONENT_KEYS, get_component_label, get_settings
from readiness_engine.logging_config import configure_logging
from readiness_engine.mock_data import MockDataGenerator
from readiness_engine.models.results import PopulationReadinessResult
from readiness_engine.scoring.readiness_aggregator import ReadinessAggregator

logger = logging.getLogger(__name__)


def run(users: int, seed: int, workers: Optional[int] = None) -> PopulationReadinessResult:
    as_of = datetime.now(timezone.utc)
    population = MockDataGenerator().generate_population(users, seed=seed, as_of=as_of)
    return ReadinessAggregator().calculate_population(
        population.users,
        departments=population.departments,
        organization=population.organization,
        as_of=as_of,
        max_workers=workers,
    )


def format_summary(result: PopulationReadinessResult) -> str:
    org = result.organization
    lines = [
        f"Organization: {org.name or org.department_id}",
        f"  People scored:       {org.people_count} ({org.failed_count} failed)",
        f"  Overall readiness:   {org.overall_score:.2f}",
        f"  Weighted readiness:  {org.weighted_overall_score:.2f}",
        f"  Avg completeness:    {org.average_data_completeness:.2%}",
        f"  Avg confidence:      {org.average_predictive_confidence:.2f}",
        f"  At risk:             {org.at_risk_count}",
        f"  Team competency:     {org.individual_competency:.2f} (risk-adjusted {org.risk_adjusted_competency:.2f})",
        f"  Risk factors:        {', '.join(f.value for f in org.risk_factors) or 'none'}",
        f"  Trend:               {org.trend.value} (projected {org.projected_score:.2f})",
        "  Components:",
    ]
    for key in COMPONENT_KEYS:
        value = getattr(org.components, key)
        coverage = getattr(org.component_coverage, key)
        shown = f"{value:.2f}" if value is not None else "n/a"
        lines.append(f"    {get_component_label(key):<24} {shown:>7}  (n={coverage})")
    lines.append("  Grades: " + ", ".join(f"{g}={n}" for g, n in org.grade_distribution.items()))
    lines.append("Departments:")
    for dept in result.departments:
        lines.append(
            f"    {dept.name or dept.department_id:<14} n={dept.people_count:<4} "
            f"overall={dept.overall_score:6.2f}  at_risk={dept.at_risk_count}"
        )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Score a mock population with the readiness engine")
    ap.add_argument("--users", type=int, default=50, help="Number of mock people (default: 50)")
    ap.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    ap.add_argument("--workers", type=int, default=None, help="Thread pool size for scoring")
    ap.add_argument("--output", type=Path, default=None, help="Write the full result as JSON")
    args = ap.parse_args(argv)

    if args.users < 0:
        ap.error("--users must be >= 0")

    configure_logging(get_settings())

    result = run(args.users, args.seed, args.workers)
    print(format_summary(result))

    if args.output:
        args.output.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Wrote population result to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
