#!/usr/bin/env python3
"""
CLI entry point for meetpoint.

Defines the following commands:
  meetpoint recommend FILE [--mode MODE] [--preset NAME] [--travel-mode MODE | --json]
  meetpoint compare FILE [--preset NAME]
  meetpoint eta LAT1 LNG1 LAT2 LNG2 [--mode MODE]
  meetpoint serve [--host HOST] [--port 8000] [--preset NAME]
  meetpoint version
"""

import sys
from argparse import ArgumentParser, Namespace
from importlib.metadata import PackageNotFoundError, version as _get_version

import uvicorn
from rich.console import Console
from rich.table import Table

from meetpoint.utils.log import get_logger, set_level
from meetpoint.server import create_app
from meetpoint.parsers.participants import ParticipantFileError, load_participants
from meetpoint.analysis.config import PRESETS, SolverConfig
from meetpoint.analysis.eta import TravelMode, estimate_eta_minutes, format_eta
from meetpoint.analysis.recommender import Recommender
from meetpoint.analysis.types import DEFAULT_MODE, GeoPoint, Participant, Recommendation, RecommendationMode
from meetpoint.utils.validate import RecommendationOut

logger = get_logger(__name__)
console = Console()


def _recommendation_table(
    title: str,
    rec: Recommendation,
    participants: list[Participant],
    travel_mode: TravelMode | None = None,
) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Participant")
    table.add_column("Weight", justify="right")
    table.add_column("Distance (km)", justify="right")
    if travel_mode is not None:
        table.add_column(f"ETA ({travel_mode.value})", justify="right")

    for i, (item, p) in enumerate(zip(rec.per_person, participants), start=1):
        row = [str(i), item.label, f"{p.weight:g}", f"{item.distance_km:.2f}"]
        if travel_mode is not None:
            row.append(format_eta(estimate_eta_minutes(rec.center, p.location, travel_mode)))
        table.add_row(*row)
    return table


def recommend(
    file: str,
    mode: str,
    preset: str,
    travel_mode: str | None,
    as_json: bool,
) -> None:
    """
    Recommend a meeting point for the participants in a file.

    Parameters
    ----------
    file
        Path to a .json or .csv participant file.
    mode
        Recommendation mode (mean, median, minimax).
    preset
        Solver configuration preset name.
    travel_mode
        Optional travel mode used to add per-participant ETAs.
    as_json
        Print the recommendation as JSON instead of a table.
    """
    logger.info("Recommend: file=%s, mode=%s, preset=%s", file, mode, preset)
    participants = load_participants(file)
    rec = Recommender(SolverConfig.from_name(preset)).run(participants, mode)
    if rec is None:
        logger.warning("No participants in %s", file)
        if as_json:
            print("null")
        return

    if as_json:
        print(RecommendationOut.from_recommendation(rec).model_dump_json(indent=2))
        return

    tm = TravelMode(travel_mode) if travel_mode else None
    console.print(_recommendation_table(
        f"Meeting point ({RecommendationMode.parse(mode).value})", rec, participants, tm,
    ))
    console.print(f"Center: {rec.center.latitude}, {rec.center.longitude}")
    console.print(
        f"Total {rec.total_distance_km:.2f} km, "
        f"min {rec.min_distance_km:.2f} km, max {rec.max_distance_km:.2f} km"
    )


def compare(file: str, preset: str) -> None:
    """
    Show the center and summary statistics of every mode side by side.

    Parameters
    ----------
    file
        Path to a .json or .csv participant file.
    preset
        Solver configuration preset name.
    """
    logger.info("Compare: file=%s, preset=%s", file, preset)
    participants = load_participants(file)
    recommender = Recommender(SolverConfig.from_name(preset))

    table = Table(title="Modes compared")
    for col in ("Mode", "Latitude", "Longitude", "Total (km)", "Min (km)", "Max (km)"):
        table.add_column(col, justify="left" if col == "Mode" else "right")
    for mode in RecommendationMode:
        rec = recommender.run(participants, mode)
        if rec is None:
            logger.warning("No participants in %s", file)
            return
        table.add_row(
            mode.value,
            f"{rec.center.latitude:.6f}",
            f"{rec.center.longitude:.6f}",
            f"{rec.total_distance_km:.2f}",
            f"{rec.min_distance_km:.2f}",
            f"{rec.max_distance_km:.2f}",
        )
    console.print(table)


def eta(lat1: float, lng1: float, lat2: float, lng2: float, mode: str) -> None:
    """
    Print a straight-line ETA between two coordinates.
    """
    minutes = estimate_eta_minutes(GeoPoint(lat1, lng1), GeoPoint(lat2, lng2), mode)
    console.print(format_eta(minutes))


def serve(host: str, port: int, preset: str) -> None:
    """
    Spin up FastAPI+Uvicorn to serve the recommendation API.

    Parameters
    ----------
    host
        Interface to bind.
    port
        Port on which to serve HTTP.
    preset
        Solver configuration preset name.
    """
    logger.info("Serve: host=%s, port=%d, preset=%s", host, port, preset)
    app = create_app(SolverConfig.from_name(preset))
    uvicorn.run(app, host=host, port=port)


def version() -> None:
    """
    Print the installed meetpoint package version.
    """
    try:
        ver = _get_version("meetpoint")
    except PackageNotFoundError:
        ver = "unknown"
    console.print(f"meetpoint version {ver}")


def parse_args(argv: list[str] | None = None) -> Namespace:
    """
    Parse command-line arguments and return the populated namespace.
    """
    parser = ArgumentParser(prog="meetpoint")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    mode_names = [m.value for m in RecommendationMode]
    travel_names = [m.value for m in TravelMode]

    # meetpoint recommend
    p = subparsers.add_parser("recommend", help="Recommend a meeting point.")
    p.add_argument("file", type=str, help="Participant file (.json or .csv).")
    p.add_argument(
        "--mode", type=str, default=DEFAULT_MODE.value,
        help=f"Recommendation mode ({', '.join(mode_names)}); unknown values use median.",
    )
    p.add_argument("--preset", choices=PRESETS, default="default", help="Solver preset.")
    # ETAs only exist in the table view
    out = p.add_mutually_exclusive_group()
    out.add_argument(
        "--travel-mode", choices=travel_names, help="Add per-participant ETAs for this mode."
    )
    out.add_argument("--json", dest="as_json", action="store_true", help="Print JSON.")

    # meetpoint compare
    p = subparsers.add_parser("compare", help="Compare all recommendation modes.")
    p.add_argument("file", type=str, help="Participant file (.json or .csv).")
    p.add_argument("--preset", choices=PRESETS, default="default", help="Solver preset.")

    # meetpoint eta
    p = subparsers.add_parser("eta", help="Estimate travel time between two points.")
    for name in ("lat1", "lng1", "lat2", "lng2"):
        p.add_argument(name, type=float)
    p.add_argument("--mode", choices=travel_names, default=TravelMode.WALK.value)

    # meetpoint serve
    p = subparsers.add_parser("serve", help="Serve via FastAPI + Uvicorn.")
    p.add_argument("--host", type=str, default="127.0.0.1", help="Interface to bind.")
    p.add_argument(
        "--port", type=int, default=8000, help="Port number to serve on."
    )
    p.add_argument("--preset", choices=PRESETS, default="default", help="Solver preset.")

    # meetpoint version
    subparsers.add_parser("version", help="Show meetpoint version and exit.")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """
    Entry point: dispatch to the selected subcommand.
    """
    args = parse_args(argv)
    if args.verbose:
        set_level("DEBUG")
    try:
        match args.command:
            case "recommend":
                recommend(args.file, args.mode, args.preset, args.travel_mode, args.as_json)
            case "compare":
                compare(args.file, args.preset)
            case "eta":
                eta(args.lat1, args.lng1, args.lat2, args.lng2, args.mode)
            case "serve":
                serve(args.host, args.port, args.preset)
            case "version":
                version()
            case _:
                sys.exit(1)
    except (ParticipantFileError, FileNotFoundError) as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
