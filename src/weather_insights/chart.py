# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
chart.py — ASCII charts and tables for the insight records.

Uses only the Python standard library (os).
All rendering functions return strings ready to print.
"""

import os

from weather_insights.conditions import get_weather_description
from weather_insights.insights import CalculatorResult
from weather_insights.severity import get_severity_icon

FALLBACK_TERMINAL_WIDTH: int = 80
BAR_LABEL_RESERVE: int = 30  # characters reserved for label + value outside the bar


def _terminal_bar_width() -> int:
    try:
        terminal_width = os.get_terminal_size().columns
    except OSError:
        terminal_width = FALLBACK_TERMINAL_WIDTH
    return max(10, terminal_width - BAR_LABEL_RESERVE)


def _bar(value: float, max_value: float, bar_width: int) -> str:
    """Render a single filled/empty bar scaled to bar_width.

    Args:
        value: The data value to represent.
        max_value: The maximum value (maps to full bar width).
        bar_width: Total character width of the bar.

    Returns:
        String of '█' and '░' characters of length bar_width.
    """
    if max_value == 0:
        filled = 0
    else:
        filled = round((value / max_value) * bar_width)
    filled = max(0, min(filled, bar_width))
    return "█" * filled + "░" * (bar_width - filled)


def render_bar_chart(
    labels: list[str],
    values: list[float],
    title: str,
    unit: str = "",
    bar_width: int | None = None,
    max_value: float | None = None,
) -> str:
    """Render a labelled horizontal bar chart.

    Args:
        labels: List of row label strings.
        values: List of numeric values corresponding to each label.
        title: Chart title printed above the bars.
        unit: Optional unit suffix appended to each value (e.g. '°C', ' mm').
        bar_width: Width of the bar in characters. Auto-detected from terminal if None.
        max_value: Value that fills the whole bar. Defaults to the largest value.

    Returns:
        Multi-line string containing the chart.
    """
    if bar_width is None:
        bar_width = _terminal_bar_width()

    if max_value is None:
        max_value = max(values) if values else 1
    if max_value == 0:
        max_value = 1  # avoid division by zero

    label_w = max(len(lbl) for lbl in labels) if labels else 3
    lines = [title]
    for label, value in zip(labels, values):
        bar = _bar(value, max_value, bar_width)
        val_str = f"{value:.0f}{unit}"
        lines.append(f"  {label:<{label_w}} │{bar}│ {val_str:>6}")

    return "\n".join(lines)


def render_comfort_chart(comfort: dict, hours: int = 12, bar_width: int | None = None) -> str:
    """Bar chart of hourly comfort scores (0-100) plus the best windows."""
    hourly = comfort.get("hourly_comfort", [])[:hours]
    if not hourly:
        return f"Comfort: {comfort.get('current_comfort', 50)}/100 (no hourly data)"

    chart = render_bar_chart(
        [h["time"] for h in hourly],
        [h["score"] for h in hourly],
        f"Comfort index (now {comfort['current_comfort']}/100)",
        bar_width=bar_width,
        max_value=100,
    )
    windows = comfort.get("optimal_windows", [])
    if windows:
        chart += "\n\nBest windows:"
        for w in windows:
            chart += (
                f"\n  {w['start']}-{w['end']}  {w['duration']}h  "
                f"score {w['score']}  {w['activity']}"
            )
    return chart


def render_hourly_table(rows: list[dict], location_line: str) -> str:
    """Render analysis.hourly_condition_summary() rows as a fixed-width table."""
    header_label = f"📍 {location_line} — next {len(rows)} hours"
    sep = "─" * 72

    headers = ["Time   ", " Temp°C", " Feels°C", " Rain%", " Wind km/h", " Cloud%", " Sky"]
    lines = [header_label, sep, "  ".join(headers), sep]

    for r in rows:
        lines.append("  ".join([
            f"{r['time']:<7}",
            f"{r['temperature']:>6.1f}°",
            f"{r['feels_like']:>7.1f}°",
            f"{r['precip']:>5.0f}%",
            f"{r['wind']:>10.0f}",
            f"{r['cloud']:>6.0f}%",
            f" {get_weather_description(r['weather_code'])}",
        ]))

    lines.append(sep)
    return "\n".join(lines)


def render_events_table(events: list[dict], summary: str) -> str:
    """Render detected events, most probable first, under their summary line."""
    lines = [f"📅 {summary}"]
    if not events:
        return lines[0]

    sep = "─" * 72
    lines += [sep, f"{'Day':<10}  {'Event':<13}  {'Prob':>4}  {'Severity':<8}  Details", sep]
    for e in events:
        lines.append(
            f"{e['day']:<10}  {e['type']:<13}  {e['probability']:>3.0f}%  "
            f"{e['severity']:<8}  {e['description']}"
        )
    lines.append(sep)
    return "\n".join(lines)


def _section(title: str, body: list[str]) -> str:
    return "\n".join([title, *[f"  {line}" for line in body]])


def render_insights_report(results: dict[str, CalculatorResult], location_line: str) -> str:
    """Render every calculator result as one text report.

    A calculator that failed shows its error instead of its section body.
    """
    sections = [f"📍 {location_line} — weather insights"]

    for name, result in results.items():
        if not result.ok:
            sections.append(f"❌ {name}: {result.error}")

    def value(name: str):
        result = results.get(name)
        return result.value if result is not None and result.ok else None

    alert = value("alert")
    if alert is not None:
        sections.append(
            f"{get_severity_icon(alert['severity'])} Alert: {alert['type']} ({alert['severity']})"
        )

    comfort = value("comfort")
    if comfort is not None:
        sections.append(render_comfort_chart(comfort))

    trends = value("trends")
    if trends is not None and (trends["insights"] or trends["trends"]):
        body = [f"{i['icon']} {i['title']}: {i['description']}" for i in trends["insights"]]
        body += [f"{t['name']}: {t['description']} ({t['strength']})" for t in trends["trends"]]
        sections.append(_section("Trends", body))

    patterns = value("patterns")
    if patterns is not None and patterns["patterns"]:
        body = [
            f"{p['icon']} {p['title']} ({p['confidence']}%): {p['description']}"
            for p in patterns["patterns"]
        ]
        sections.append(_section("Patterns", body))

    impacts = value("impacts")
    if impacts is not None and impacts["impacts"]:
        body = []
        for i in impacts["impacts"]:
            body.append(f"{i['icon']} [{i['category']}] {i['title']} ({i['severity']}): {i['description']}")
            body += [f"   - {r}" for r in i["recommendations"]]
        sections.append(_section("Impacts", body))

    events = value("events")
    if events is not None:
        sections.append(render_events_table(events["events"], events["summary"]))

    changes = value("rapid_changes")
    if changes:
        body = [f"+{c['hour']}h {c['description']} ({c['severity']})" for c in changes]
        sections.append(_section("Rapid changes", body))

    clothing = value("clothing")
    if clothing:
        sections.append(_section("What to wear", [f"{c['icon']} {c['item']}: {c['reason']}" for c in clothing]))

    dynamic = value("dynamic")
    if dynamic:
        sections.append(_section("Insights", [f"[{d['priority']}] {d['message']}" for d in dynamic]))

    return "\n\n".join(sections)
