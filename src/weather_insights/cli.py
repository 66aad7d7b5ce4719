# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
cli.py — Command-line interface for weather-insights.

We use argparse (stdlib) rather than click because:
- No extra dependency to install
- Sufficient for a handful of subcommands
- Easier for beginners to read and understand

Commands:
  weather-insights report        — fetch a forecast and print every insight
  weather-insights events        — 7-day event table (optionally with AI commentary)
  weather-insights classify      — colour/severity band for one reading
  weather-insights acknowledge   — silence the alert for the current conditions
"""

import argparse
import functools
from pathlib import Path

from weather_insights.ai import generate_synoptic_analysis, generate_text
from weather_insights.alerts import (
    AlertAcknowledgments,
    JsonFileStore,
    acknowledge_current_alert,
    should_show_alert,
)
from weather_insights.analysis import hourly_condition_summary
from weather_insights.chart import render_events_table, render_hourly_table, render_insights_report
from weather_insights.config import DEFAULT_CONFIG_PATH, load_config
from weather_insights.events import detect_weather_events, generate_event_based_forecast, generate_event_summary
from weather_insights.geocode import LocationNotFoundError, geocode
from weather_insights.insights import compute_insights
from weather_insights.severity import LADDERS, classify, get_severity_icon
from weather_insights.weather import fetch_snapshot


def _resolve_location(args, config: dict) -> tuple[float, float, str]:
    """Coordinates and display name from --location, else from the config file."""
    if args.location:
        try:
            loc = geocode(args.location)
        except LocationNotFoundError as e:
            print(f"[error] {e}")
            raise SystemExit(1)
        return loc["latitude"], loc["longitude"], loc["name"]
    location = config["location"]
    return location["latitude"], location["longitude"], location["name"]


def _fetch(args, config: dict, days: int):
    latitude, longitude, display_name = _resolve_location(args, config)
    log_path = Path(config["log"]["path"])
    print(f"Fetching {days}-day forecast for {display_name}...")
    try:
        snapshot = fetch_snapshot(latitude, longitude, forecast_days=days, log_path=log_path)
    except RuntimeError as e:
        print(str(e))
        raise SystemExit(1)
    return snapshot, display_name


def _generator(config: dict):
    """generate_text bound to the configured service URL and log file."""
    return functools.partial(
        generate_text,
        url=config["ai"]["url"],
        log_path=Path(config["log"]["path"]),
    )


def _acks(config: dict) -> AlertAcknowledgments:
    log_path = Path(config["log"]["path"])
    store = JsonFileStore(Path(config["alerts"]["store_path"]), log_path=log_path)
    return AlertAcknowledgments(store, log_path=log_path)


def cmd_report(args) -> None:
    """Fetch a forecast and print the hourly table plus every calculator's output."""
    config = load_config(args.config)
    days = args.days or config["forecast"]["days"]
    snapshot, display_name = _fetch(args, config, days)

    if snapshot.hourly is not None:
        print()
        print(render_hourly_table(hourly_condition_summary(snapshot.hourly), display_name))

    results = compute_insights(snapshot)
    print()
    print(render_insights_report(results, display_name))

    alert = results["alert"].value
    if alert["type"] != "general":
        print()
        if should_show_alert(_acks(config), display_name, snapshot):
            print(f"{get_severity_icon(alert['severity'])} ALERT: {alert['type']} "
                  f"(run 'weather-insights acknowledge' to silence)")
        else:
            print(f"✅ Alert {alert['type']} already acknowledged.")

    if args.ai or config["ai"]["enabled"]:
        analysis = generate_synoptic_analysis(
            snapshot,
            generate=_generator(config),
            max_length=config["ai"]["max_length"],
        )
        print()
        print(f"🤖 {analysis or 'AI analysis temporarily unavailable'}")


def cmd_events(args) -> None:
    """Print the 7-day event table, with AI commentary when requested."""
    config = load_config(args.config)
    snapshot, display_name = _fetch(args, config, 7)

    if args.ai or config["ai"]["enabled"]:
        forecast = generate_event_based_forecast(
            snapshot,
            display_name,
            generate=_generator(config),
            max_length=config["ai"]["max_length"],
            log_path=Path(config["log"]["path"]),
        )
        print()
        print(render_events_table(forecast["events"], forecast["summary"]))
        print()
        print(f"🤖 {forecast['ai_analysis']}")
        return

    events = detect_weather_events(snapshot)
    print()
    print(render_events_table(events, generate_event_summary(events)))


def cmd_classify(args) -> None:
    """Print the colour/label/severity band for a single reading."""
    band = classify(args.metric, args.value)
    print(f"{get_severity_icon(band['severity'])} {args.metric} {args.value:g}: "
          f"{band['label']} ({band['severity']}, {band['color']})")


def cmd_acknowledge(args) -> None:
    """Acknowledge the alert for the current conditions so report stops showing it."""
    config = load_config(args.config)
    snapshot, display_name = _fetch(args, config, 1)
    alert_id = acknowledge_current_alert(_acks(config), display_name, snapshot)
    print(f"✅ Acknowledged {alert_id}")


def _add_location(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--location",
        metavar="PLACE",
        default=None,
        help='Look up coordinates by place name, e.g. "Tokyo" or "London, UK"',
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather-insights",
        description="Derived weather insights from Open-Meteo forecasts",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to the TOML config file. Default: ./config.toml",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    p_report = subparsers.add_parser("report", help="Fetch a forecast and print all insights")
    _add_location(p_report)
    p_report.add_argument(
        "--days",
        metavar="N",
        type=int,
        choices=range(1, 17),
        default=None,
        help="Forecast days to fetch (1-16). Default: [forecast].days from config.",
    )
    p_report.add_argument("--ai", action="store_true", help="Add AI synoptic commentary")

    p_events = subparsers.add_parser("events", help="Show weather events for the next 7 days")
    _add_location(p_events)
    p_events.add_argument("--ai", action="store_true", help="Add AI commentary on the events")

    p_classify = subparsers.add_parser("classify", help="Classify a single reading")
    p_classify.add_argument("metric", choices=sorted(LADDERS))
    p_classify.add_argument("value", type=float)

    p_ack = subparsers.add_parser("acknowledge", help="Acknowledge the current alert")
    _add_location(p_ack)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    commands = {
        "report": cmd_report,
        "events": cmd_events,
        "classify": cmd_classify,
        "acknowledge": cmd_acknowledge,
    }
    try:
        commands[args.command](args)
    except (FileNotFoundError, ValueError) as e:
        print(f"[error] {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
