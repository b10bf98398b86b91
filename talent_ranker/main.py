# main.py
import argparse
import logging
from pathlib import Path
from typing import List

from tabulate import tabulate

from .config import DEFAULT_JOB_REQUIREMENT, DEFAULT_PAGE_SIZE, LOG_DIR, LOG_FILE


# ---------- Logging Setup ----------
def setup_logging() -> None:
    LOG_DIR.mkdir(exist_ok=True)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.FileHandler(LOG_FILE),
            logging.StreamHandler(),
        ],
    )


# ---------- Data ----------
def load_dataset(data_file: Path, use_cache: bool = True) -> List:
    from .cache import CandidateCache
    from .loader import parse_candidates, read_raw_candidates

    if not data_file.exists():
        raise FileNotFoundError(f"Candidate data file not found: {data_file}")

    if not use_cache:
        return parse_candidates(read_raw_candidates(data_file))

    cache = CandidateCache()
    key = f"{data_file.resolve()}:{data_file.stat().st_mtime_ns}"
    raw = cache.get(key)
    if raw is None:
        raw = read_raw_candidates(data_file)
        cache.set(key, raw)
    else:
        logging.info("Loaded %s from cache", data_file)
    return parse_candidates(raw)


# ---------- Commands ----------
def run_rank(args: argparse.Namespace) -> None:
    from .models import FilterSpec, LocationCoordinates, SortOption
    from .ranker import format_ranking_table, rank_candidates

    candidates = load_dataset(Path(args.data), use_cache=not args.no_cache)
    filters = FilterSpec(
        search=args.search,
        experience=args.experience,
        skills=args.skill,
        location=args.location,
        employment_status=args.status,
        job_requirement=args.requirement,
    )
    reference = LocationCoordinates(*args.near) if args.near else None

    result = rank_candidates(
        candidates,
        filters=filters,
        sort_option=SortOption(field=args.sort, direction=args.direction),
        reference=reference,
        page=args.page,
        page_size=args.page_size,
        threshold=args.threshold,
        show_progress=True,
    )

    if not result.candidates:
        print("No candidates found.")
        return

    print(format_ranking_table(result))
    print(f"\nShowing {len(result.candidates)} of {result.total_matches} matching candidates")


def run_skills(args: argparse.Namespace) -> None:
    from .normalizer import (
        count_skill_candidates,
        create_skill_normalization_mapping,
        group_by_representative,
    )

    candidates = load_dataset(Path(args.data), use_cache=not args.no_cache)
    mapping = create_skill_normalization_mapping(candidates, args.threshold)
    grouped = group_by_representative(mapping)
    counts = count_skill_candidates(candidates)

    table = [
        [
            representative,
            len(variants),
            ", ".join(f"{v} ({counts.get(v, 0)})" for v in variants),
        ]
        for representative, variants in sorted(grouped.items(), key=lambda item: item[0].lower())
    ]
    print(tabulate(table, headers=["Skill", "Variants", "Raw (candidates)"], tablefmt="github"))


def run_insights(args: argparse.Namespace) -> None:
    from .insights import (
        average_experience_months,
        experience_distribution,
        location_distribution,
        score_distribution,
        top_skills,
    )
    from .ranker import score_candidates

    candidates = load_dataset(Path(args.data), use_cache=not args.no_cache)
    scored = score_candidates(candidates, args.requirement, show_progress=True)

    print(f"Candidates: {len(scored)}")
    print(f"Average experience: {average_experience_months(scored)} months\n")
    for title, rows in (
        ("Experience", experience_distribution(scored)),
        ("Score", score_distribution(scored)),
    ):
        print(tabulate([[r["name"], r["count"]] for r in rows], headers=[title, "Count"], tablefmt="github"))
        print()
    print(tabulate(
        [[s["skill"], s["count"], f'{s["percentage"]}%'] for s in top_skills(scored)],
        headers=["Top skill", "Count", "Relative"],
        tablefmt="github",
    ))
    print()
    print(tabulate(
        list(location_distribution(scored).items()),
        headers=["Location", "Count"],
        tablefmt="github",
    ))


def run_export(args: argparse.Namespace) -> None:
    from .insights import export_candidate_data, write_export
    from .models import FilterSpec
    from .ranker import rank_candidates

    candidates = load_dataset(Path(args.data), use_cache=not args.no_cache)
    result = rank_candidates(
        candidates,
        filters=FilterSpec(job_requirement=args.requirement),
        page_size=max(len(candidates), 1),
    )
    write_export(export_candidate_data(result.candidates), Path(args.out))


# ---------- CLI ----------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Candidate scoring and skill normalization"
    )
    subparsers = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--data",
        required=True,
        help="Path to JSON file mapping candidate id to record",
    )
    common.add_argument(
        "--no-cache",
        action="store_true",
        help="Do not read or write the local candidate cache",
    )
    common.add_argument(
        "--requirement",
        default=DEFAULT_JOB_REQUIREMENT,
        help="Free-text job requirement to score against",
    )
    common.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Skill similarity threshold for grouping (default 0.8)",
    )

    # ---- rank ----
    rank_parser = subparsers.add_parser(
        "rank", parents=[common], help="Rank candidates for a job requirement"
    )
    rank_parser.add_argument("--search", default="", help="Free-text search")
    rank_parser.add_argument("--skill", action="append", default=[], help="Normalized skill filter (repeatable)")
    rank_parser.add_argument("--experience", action="append", default=[], help="Experience level filter (repeatable)")
    rank_parser.add_argument("--location", action="append", default=[], help="Location filter (repeatable)")
    rank_parser.add_argument("--status", action="append", default=[], help="Employment status filter (repeatable)")
    rank_parser.add_argument(
        "--sort",
        choices=["name", "score", "distance", "experience"],
        default="score",
    )
    rank_parser.add_argument("--direction", choices=["asc", "desc"], default="desc")
    rank_parser.add_argument(
        "--near",
        type=float,
        nargs=2,
        metavar=("LAT", "LNG"),
        help="Reference point for distance sorting",
    )
    rank_parser.add_argument("--page", type=int, default=1)
    rank_parser.add_argument(
        "--page-size",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help=f"Candidates per page (default {DEFAULT_PAGE_SIZE})",
    )

    # ---- skills ----
    subparsers.add_parser(
        "skills", parents=[common], help="Show normalized skill groups"
    )

    # ---- insights ----
    subparsers.add_parser(
        "insights", parents=[common], help="Show aggregate candidate statistics"
    )

    # ---- export ----
    export_parser = subparsers.add_parser(
        "export", parents=[common], help="Export scored candidates as JSON"
    )
    export_parser.add_argument("--out", required=True, help="Output JSON path")

    return parser


def main() -> None:
    setup_logging()

    parser = build_parser()
    args = parser.parse_args()

    commands = {
        "rank": run_rank,
        "skills": run_skills,
        "insights": run_insights,
        "export": run_export,
    }

    try:
        if args.command is None:
            parser.print_help()
        else:
            commands[args.command](args)
    except Exception as exc:
        logging.error("Command failed", exc_info=exc)


if __name__ == "__main__":
    main()
