from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from votoclaro.config.loader import ConfigLoader
from votoclaro.core.aggregation import Stats
from votoclaro.core.bootstrap import build_context
from votoclaro.core.errors import ElectionError, NotFoundError
from votoclaro.core.models import Candidate, Station
from votoclaro.core.repository import ElectionRepository
from votoclaro.core.tally_check import check_tally
from votoclaro.logging_setup import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="votoclaro", description="Ballot station tally keeper")
    parser.add_argument("--config", help="Path to votoclaro.yaml (defaults apply when omitted)")
    commands = parser.add_subparsers(dest="command", required=True)

    candidate = commands.add_parser("candidate", help="Manage candidates")
    candidate_cmds = candidate.add_subparsers(dest="action", required=True)
    add = candidate_cmds.add_parser("add")
    add.add_argument("name")
    add.add_argument("--party", default="")
    edit = candidate_cmds.add_parser("edit")
    edit.add_argument("ref", help="Candidate id or name")
    edit.add_argument("name")
    edit.add_argument("--party", default="")
    delete = candidate_cmds.add_parser("delete")
    delete.add_argument("ref", help="Candidate id or name")
    listing = candidate_cmds.add_parser("list")
    listing.add_argument("--json", action="store_true")

    station = commands.add_parser("station", help="Manage ballot stations")
    station_cmds = station.add_subparsers(dest="action", required=True)
    add = station_cmds.add_parser("add")
    add.add_argument("name")
    add.add_argument("--location", default="")
    add.add_argument("--eligible", default="0", help="Registered voters")
    edit = station_cmds.add_parser("edit")
    edit.add_argument("ref", help="Station id or name")
    edit.add_argument("name")
    edit.add_argument("--location", default="")
    edit.add_argument("--eligible", default="0")
    delete = station_cmds.add_parser("delete")
    delete.add_argument("ref", help="Station id or name")
    listing = station_cmds.add_parser("list")
    listing.add_argument("--json", action="store_true")

    result = commands.add_parser("result", help="Record station results")
    result_cmds = result.add_subparsers(dest="action", required=True)
    record = result_cmds.add_parser("set")
    record.add_argument("station", help="Station id or name")
    record.add_argument(
        "--vote",
        action="append",
        default=[],
        metavar="CANDIDATE=COUNT",
        help="Votes for one candidate (id or name); repeatable",
    )
    record.add_argument("--blank", default="0")
    record.add_argument("--null", default="0")
    clear = result_cmds.add_parser("clear")
    clear.add_argument("station", help="Station id or name")
    show = result_cmds.add_parser("show")
    show.add_argument("station", help="Station id or name")

    stats = commands.add_parser("stats", help="Show aggregated statistics")
    stats.add_argument("--json", action="store_true", help="Output result as JSON")

    reset = commands.add_parser("reset", help="Delete all stored data")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")
    return parser


def _find(items: Sequence[Candidate] | Sequence[Station], ref: str, kind: str) -> Candidate | Station:
    for item in items:
        if item.id == ref:
            return item
    key = ref.strip().casefold()
    for item in items:
        if item.name.casefold() == key:
            return item
    raise NotFoundError(kind, ref)


def _print_json(payload: object) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _format_stats(stats: Stats) -> str:
    lines = [
        f"Stations processed: {stats.stations_processed} (pending: {stats.stations_pending})",
        f"Valid votes: {stats.total_valid}",
        f"Blank: {stats.total_blank}  Null: {stats.total_null}  Cast: {stats.total_cast}",
        f"Eligible: {stats.total_eligible_sum}  Participation: {stats.participation_pct:.1f}%",
        "",
    ]
    for position, entry in enumerate(stats.ranking, start=1):
        lines.append(
            f"{position:>3}. {entry.name:<30} {entry.votes:>8}  {stats.share_of_valid(entry):6.2f}%"
        )
    return "\n".join(lines)


def _run_candidate(repository: ElectionRepository, args: argparse.Namespace) -> int:
    if args.action == "add":
        candidate = repository.add_candidate(args.name, args.party)
        print(candidate.id)
    elif args.action == "edit":
        target = _find(repository.get_candidates(), args.ref, "candidate")
        repository.edit_candidate(target.id, args.name, args.party)
    elif args.action == "delete":
        target = _find(repository.get_candidates(), args.ref, "candidate")
        repository.delete_candidate(target.id)
    elif args.json:
        _print_json([c.model_dump() for c in repository.get_candidates()])
    else:
        for c in repository.get_candidates():
            print(f"{c.id}  {c.name}  {c.party}".rstrip())
    return 0


def _run_station(repository: ElectionRepository, args: argparse.Namespace) -> int:
    if args.action == "add":
        station = repository.add_station(args.name, args.location, args.eligible)
        print(station.id)
    elif args.action == "edit":
        target = _find(repository.get_stations(), args.ref, "station")
        repository.edit_station(target.id, args.name, args.location, args.eligible)
    elif args.action == "delete":
        target = _find(repository.get_stations(), args.ref, "station")
        repository.delete_station(target.id)
    elif args.json:
        _print_json([s.model_dump(by_alias=True) for s in repository.get_stations()])
    else:
        for s in repository.get_stations():
            status = "pending" if repository.get_station_result(s.id) is None else "done"
            print(f"{s.id}  {s.name}  {s.location}  eligible={s.total_eligible}  {status}")
    return 0


def _run_result(repository: ElectionRepository, args: argparse.Namespace) -> int:
    station = _find(repository.get_stations(), args.station, "station")

    if args.action == "clear":
        repository.clear_station_result(station.id)
        return 0

    if args.action == "show":
        result = repository.get_station_result(station.id)
        if result is None:
            print(f"No result recorded for '{station.name}'")
            return 0
        names = {c.id: c.name for c in repository.get_candidates()}
        for candidate_id, count in result.votes.items():
            print(f"{names.get(candidate_id, candidate_id)}: {count}")
        print(f"Blank: {result.blank}\nNull: {result.null}\nTotal: {result.total}")
        return 0

    raw_votes: dict[str, str] = {}
    for item in args.vote:
        ref, separator, count = item.partition("=")
        if not separator:
            print(f"error: expected CANDIDATE=COUNT, got {item!r}", file=sys.stderr)
            return 2
        candidate = _find(repository.get_candidates(), ref, "candidate")
        raw_votes[candidate.id] = count

    report = check_tally(station, repository.get_candidates(), raw_votes, args.blank, args.null)
    for error in report.errors:
        print(f"error: {error}", file=sys.stderr)
    if not report.ok:
        return 2
    for warning in report.warnings:
        print(f"warning: {warning}", file=sys.stderr)

    repository.save_station_result(station.id, report.votes, blank=report.blank, null=report.null)
    print(f"Saved {report.total} ballots for '{station.name}'")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = ConfigLoader.load_or_default(args.config)
    setup_logging(config.logging.level)
    repository = build_context(config).repository

    try:
        if args.command == "candidate":
            return _run_candidate(repository, args)
        if args.command == "station":
            return _run_station(repository, args)
        if args.command == "result":
            return _run_result(repository, args)
        if args.command == "stats":
            stats = repository.get_stats()
            if args.json:
                _print_json(stats.as_dict())
            else:
                print(_format_stats(stats))
            return 0
        if not args.yes:
            print("Refusing to reset without --yes", file=sys.stderr)
            return 2
        repository.reset()
        return 0
    except ElectionError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
