"""Main CLI interface for the football power rankings engine."""

import argparse
import json
import sys

from .config import configure_logging
from .data.loader import DataLoader
from .pipeline.weekly import WeeklyPipeline
from .rankings.power import calculate_power_rankings, rankings_to_frame


def _load_snapshot(path: str):
    print(f"Loading season snapshot from {path}...")
    try:
        return DataLoader.load_snapshot_from_json(path)
    except (OSError, TypeError, ValueError) as e:
        print(f"Error loading data: {e}")
        return None


def rank_teams(args):
    """Calculate and save power rankings."""
    snapshot = _load_snapshot(args.input)
    if snapshot is None:
        return 1

    rankings = calculate_power_rankings(snapshot.teams)
    print(f"Ranked {len(rankings)} teams")
    print(rankings_to_frame(rankings)[["rank", "team_id", "power_score"]].head(args.top).to_string(index=False))

    with open(args.output, "w") as f:
        json.dump([r.to_dict() for r in rankings], f, indent=2)
    print(f"✓ Rankings saved to {args.output}")
    return 0


def predict_week(args):
    """Generate predictions and the Game of the Week for the scheduled games."""
    snapshot = _load_snapshot(args.input)
    if snapshot is None:
        return 1

    report = WeeklyPipeline().run_snapshot(snapshot, select_gotw=not args.no_gotw)

    print(f"Predicted {len(report.predictions)} of {len(snapshot.schedule)} games")
    for prediction in report.predictions:
        print(
            f"   - Game {prediction.game.schedule_id}: {prediction.predicted_winner} over "
            f"{prediction.predicted_loser} {prediction.predicted_winner_score}-{prediction.predicted_loser_score} "
            f"({prediction.confidence}%)"
        )
    if report.skipped_games:
        print(f"Skipped games: {', '.join(str(g) for g in report.skipped_games)}")
    if report.game_of_the_week:
        gotw = report.game_of_the_week
        print(f"Game of the Week: {gotw.game.schedule_id} (score {gotw.gotw_score:.1f})")

    DataLoader.save_report_to_json(report.to_dict(), args.output)
    print(f"✓ Report saved to {args.output}")
    return 0


def create_sample(args):
    """Create sample data file."""
    print(f"Creating sample data at {args.output}...")
    DataLoader.create_sample_data(args.output)
    print("✓ Sample data created!")
    print(f"\nYou can now run predictions with:")
    print(f"  python -m src.main predict --input {args.output} --output weekly_report.json")
    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Football league power rankings, game predictions and Game of the Week"
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    rank_parser = subparsers.add_parser("rank", help="Calculate power rankings")
    rank_parser.add_argument("--input", "-i", required=True, help="Season snapshot JSON file")
    rank_parser.add_argument(
        "--output", "-o",
        default="power_rankings.json",
        help="Output JSON file for rankings (default: power_rankings.json)"
    )
    rank_parser.add_argument("--top", type=int, default=10, help="Number of teams to print (default: 10)")

    predict_parser = subparsers.add_parser("predict", help="Predict scheduled games and pick the Game of the Week")
    predict_parser.add_argument("--input", "-i", required=True, help="Season snapshot JSON file")
    predict_parser.add_argument(
        "--output", "-o",
        default="weekly_report.json",
        help="Output JSON file for the weekly report (default: weekly_report.json)"
    )
    predict_parser.add_argument("--no-gotw", action="store_true", help="Skip Game of the Week selection")

    sample_parser = subparsers.add_parser("sample", help="Create sample season data")
    sample_parser.add_argument(
        "--output", "-o",
        default="sample_season.json",
        help="Output file for sample data (default: sample_season.json)"
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "rank":
        return rank_teams(args)
    elif args.command == "predict":
        return predict_week(args)
    elif args.command == "sample":
        return create_sample(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
