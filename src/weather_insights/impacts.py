# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
impacts.py — Weather impacts on transportation, health, outdoor plans and energy.

The rules live in RULE_TABLE as plain data. Each category holds a list of
rule groups; a group is an ordered list of tiers and emits the first tier
whose condition holds, so one group yields at most one impact.

Conditions, descriptions and recommendations all read from one metrics dict
built by collect_metrics(). A metric is None when the series behind it is
missing, and any rule listing that metric in `requires` is skipped.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from weather_insights.series import mean, safe_max, safe_min
from weather_insights.snapshot import WeatherSnapshot


@dataclass(frozen=True)
class ImpactRule:
    """One tier of an impact rule group."""

    title: str
    when: Callable[[dict], bool]
    severity: Union[str, Callable[[dict], str]]
    icon: str
    description: str
    recommendations: tuple[str, ...]
    timeframe: str
    probability: Union[int, str]  # literal value or a metrics key
    requires: tuple[str, ...] = ()

    def applies(self, metrics: dict) -> bool:
        if any(metrics.get(name) is None for name in self.requires):
            return False
        return self.when(metrics)

    def build(self, category: str, metrics: dict) -> dict:
        severity = self.severity(metrics) if callable(self.severity) else self.severity
        probability = (
            metrics[self.probability] if isinstance(self.probability, str) else self.probability
        )
        return {
            "category":        category,
            "severity":        severity,
            "icon":            self.icon,
            "title":           self.title,
            "description":     self.description.format(**metrics),
            "recommendations": [r.format(**metrics) for r in self.recommendations],
            "timeframe":       self.timeframe,
            "probability":     probability,
        }


def collect_metrics(snapshot: WeatherSnapshot) -> dict:
    """Aggregate the 1-3 day windows every impact rule reads from."""
    daily = snapshot.daily
    hourly = snapshot.hourly

    def total(series: tuple) -> float | None:
        return sum(series) if series else None

    def average(series: tuple) -> float | None:
        return mean(series) if series else None

    precip_prob = hourly.precipitation_probability[:24] if hourly is not None else ()
    gusts = hourly.wind_gusts[:24] if hourly is not None else ()

    max_temp_3d = safe_max(daily.temperature_max[:3])
    min_temp_3d = safe_min(daily.temperature_min[:3])

    return {
        "precip_sum_48h":      total(daily.precipitation_sum[:2]),
        "max_precip_prob_24h": safe_max(precip_prob, default=0.0),
        "max_gust_24h":        safe_max(gusts),
        "max_wind_48h":        safe_max(daily.wind_speed_max[:2]),
        "min_temp_48h":        safe_min(daily.temperature_min[:2]),
        "avg_high_48h":        average(daily.temperature_max[:2]),
        "max_uv_3d":           safe_max(daily.uv_index_max[:3]),
        "max_temp_3d":         max_temp_3d,
        "min_temp_3d":         min_temp_3d,
        "avg_humidity_3d":     average(daily.humidity_max[:3]),
        "cooling_demand":      min(50, (max_temp_3d - 25) * 5) if max_temp_3d is not None else None,
        "heating_demand":      min(50, (10 - min_temp_3d) * 5) if min_temp_3d is not None else None,
    }


# ─────────────────────────────────────────────────────────────
# Rule tables
# ─────────────────────────────────────────────────────────────

TRANSPORTATION_RULES: list[list[ImpactRule]] = [
    [
        ImpactRule(
            title="Traffic Delays Expected",
            requires=("precip_sum_48h",),
            when=lambda m: m["precip_sum_48h"] > 10 or m["max_precip_prob_24h"] > 70,
            severity=lambda m: "high" if m["precip_sum_48h"] > 20 else "medium",
            icon="🚗",
            description=(
                "Heavy precipitation forecast ({precip_sum_48h:.1f}mm) will likely cause traffic "
                "congestion and reduced visibility. Allow extra travel time."
            ),
            recommendations=(
                "Allow 20-30% extra travel time",
                "Use headlights and reduce speed",
                "Check traffic conditions before departure",
                "Consider public transportation",
            ),
            timeframe="Next 24-48 hours",
            probability="max_precip_prob_24h",
        ),
    ],
    [
        ImpactRule(
            title="High Winds Affecting Travel",
            requires=("max_gust_24h",),
            when=lambda m: m["max_gust_24h"] > 60,
            severity="high",
            icon="💨",
            description=(
                "Wind gusts up to {max_gust_24h:.0f} km/h expected. High-profile vehicles at "
                "risk. Possible flight delays and bridge closures."
            ),
            recommendations=(
                "Avoid driving high-profile vehicles",
                "Check flight status before heading to airport",
                "Secure cargo and roof racks",
                "Be cautious on bridges and open roads",
            ),
            timeframe="Next 24 hours",
            probability=85,
        ),
        ImpactRule(
            title="Moderate Wind Impact on Travel",
            requires=("max_wind_48h",),
            when=lambda m: m["max_wind_48h"] > 40,
            severity="medium",
            icon="💨",
            description=(
                "Strong winds ({max_wind_48h:.0f} km/h) may affect driving conditions, "
                "especially for high-sided vehicles."
            ),
            recommendations=(
                "Drive cautiously, especially on exposed routes",
                "Maintain firm grip on steering wheel",
                "Watch for debris on roads",
            ),
            timeframe="Next 24-48 hours",
            probability=75,
        ),
    ],
    [
        ImpactRule(
            title="Ice Hazard on Roads",
            requires=("min_temp_48h",),
            when=lambda m: m["min_temp_48h"] <= 0,
            severity="high",
            icon="❄️",
            description=(
                "Temperatures dropping to {min_temp_48h:.1f}°C. Ice formation likely on roads, "
                "bridges, and walkways."
            ),
            recommendations=(
                "Drive slowly and increase following distance",
                "Avoid sudden braking or acceleration",
                "Watch for black ice on bridges",
                "Keep emergency kit in vehicle",
            ),
            timeframe="Overnight and early morning",
            probability=90,
        ),
    ],
]

HEALTH_RULES: list[list[ImpactRule]] = [
    [
        ImpactRule(
            title="Extreme UV Radiation Risk",
            requires=("max_uv_3d",),
            when=lambda m: m["max_uv_3d"] >= 8,
            severity="high",
            icon="☀️",
            description=(
                "UV index reaching {max_uv_3d:.1f} (Extreme). Unprotected skin can burn in less "
                "than 15 minutes."
            ),
            recommendations=(
                "Apply SPF 30+ sunscreen every 2 hours",
                "Wear protective clothing and wide-brimmed hat",
                "Seek shade between 10 AM and 4 PM",
                "Wear UV-blocking sunglasses",
            ),
            timeframe="Next 3 days",
            probability=95,
        ),
        ImpactRule(
            title="High UV Exposure",
            requires=("max_uv_3d",),
            when=lambda m: m["max_uv_3d"] >= 6,
            severity="medium",
            icon="☀️",
            description=(
                "UV index {max_uv_3d:.1f} (High). Sun protection recommended for outdoor "
                "activities."
            ),
            recommendations=(
                "Use SPF 30+ sunscreen",
                "Wear hat and sunglasses",
                "Limit midday sun exposure",
            ),
            timeframe="Next 3 days",
            probability=85,
        ),
    ],
    [
        ImpactRule(
            title="Heat Stress Warning",
            requires=("max_temp_3d",),
            when=lambda m: m["max_temp_3d"] >= 35,
            severity="high",
            icon="🌡",
            description=(
                "Extreme heat ({max_temp_3d:.1f}°C) poses serious health risks. Heat exhaustion "
                "and heat stroke possible."
            ),
            recommendations=(
                "Stay hydrated - drink water regularly",
                "Avoid strenuous outdoor activities",
                "Stay in air-conditioned spaces",
                "Check on elderly and vulnerable persons",
                "Never leave children or pets in vehicles",
            ),
            timeframe="Next 3 days",
            probability=90,
        ),
        ImpactRule(
            title="Heat Advisory",
            requires=("max_temp_3d",),
            when=lambda m: m["max_temp_3d"] >= 30,
            severity="medium",
            icon="🌡",
            description=(
                "High temperatures ({max_temp_3d:.1f}°C) may cause discomfort and mild "
                "heat-related illness."
            ),
            recommendations=(
                "Drink plenty of water",
                "Take breaks in shade or air conditioning",
                "Avoid peak heat hours (12 PM - 4 PM)",
            ),
            timeframe="Next 3 days",
            probability=80,
        ),
    ],
    [
        ImpactRule(
            title="Severe Cold Warning",
            requires=("min_temp_3d",),
            when=lambda m: m["min_temp_3d"] <= -5,
            severity="high",
            icon="❄️",
            description=(
                "Extreme cold ({min_temp_3d:.1f}°C) poses risk of frostbite and hypothermia."
            ),
            recommendations=(
                "Dress in multiple layers",
                "Cover all exposed skin",
                "Limit time outdoors",
                "Watch for signs of frostbite (numbness, white skin)",
            ),
            timeframe="Next 3 days",
            probability=90,
        ),
    ],
    [
        ImpactRule(
            title="High Humidity Health Impact",
            requires=("avg_humidity_3d",),
            when=lambda m: m["avg_humidity_3d"] > 85,
            severity="medium",
            icon="💧",
            description=(
                "Very high humidity ({avg_humidity_3d:.0f}%) may trigger respiratory issues and "
                "increase heat stress."
            ),
            recommendations=(
                "Stay in air-conditioned spaces if possible",
                "Use dehumidifiers indoors",
                "Asthma sufferers should have medication ready",
                "Avoid strenuous outdoor activities",
            ),
            timeframe="Next 3 days",
            probability=75,
        ),
    ],
]

OUTDOOR_RULES: list[list[ImpactRule]] = [
    [
        ImpactRule(
            title="Excellent Outdoor Conditions",
            requires=("precip_sum_48h", "max_wind_48h", "avg_high_48h"),
            when=lambda m: (
                m["precip_sum_48h"] < 2
                and m["max_wind_48h"] < 20
                and 15 <= m["avg_high_48h"] <= 25
            ),
            severity="low",
            icon="😊",
            description=(
                "Perfect weather for outdoor activities, events, and recreation. Make the most "
                "of these ideal conditions!"
            ),
            recommendations=(
                "Great time for outdoor sports and exercise",
                "Ideal for picnics and outdoor dining",
                "Perfect for photography and sightseeing",
                "Excellent for gardening and yard work",
            ),
            timeframe="Next 48 hours",
            probability=95,
        ),
        ImpactRule(
            title="Outdoor Activities Severely Impacted",
            requires=("precip_sum_48h",),
            when=lambda m: m["precip_sum_48h"] > 15,
            severity="high",
            icon="🌧",
            description=(
                "Heavy precipitation ({precip_sum_48h:.1f}mm) will significantly affect outdoor "
                "plans. Consider indoor alternatives."
            ),
            recommendations=(
                "Postpone outdoor events if possible",
                "Have backup indoor plans ready",
                "Waterproof gear essential if going out",
                "Watch for flooding in low-lying areas",
            ),
            timeframe="Next 48 hours",
            probability=85,
        ),
        ImpactRule(
            title="Outdoor Activities Affected",
            requires=("precip_sum_48h",),
            when=lambda m: m["precip_sum_48h"] > 5,
            severity="medium",
            icon="🌦",
            description=(
                "Moderate precipitation ({precip_sum_48h:.1f}mm) expected. Outdoor activities "
                "possible with proper preparation."
            ),
            recommendations=(
                "Bring waterproof clothing",
                "Have contingency plans",
                "Check weather updates regularly",
            ),
            timeframe="Next 48 hours",
            probability=70,
        ),
    ],
    [
        ImpactRule(
            title="Wind Impact on Outdoor Sports",
            requires=("max_wind_48h",),
            when=lambda m: m["max_wind_48h"] > 30,
            severity="medium",
            icon="💨",
            description=(
                "Strong winds ({max_wind_48h:.0f} km/h) will affect ball sports, cycling, and "
                "water activities."
            ),
            recommendations=(
                "Avoid water sports and sailing",
                "Cycling will be challenging",
                "Ball sports (golf, tennis) affected",
                "Consider indoor alternatives",
            ),
            timeframe="Next 48 hours",
            probability=80,
        ),
    ],
]

ENERGY_RULES: list[list[ImpactRule]] = [
    [
        ImpactRule(
            title="High Cooling Energy Demand",
            requires=("max_temp_3d",),
            when=lambda m: m["max_temp_3d"] >= 30,
            severity=lambda m: "high" if m["max_temp_3d"] >= 35 else "medium",
            icon="⚡",
            description=(
                "Hot weather ({max_temp_3d:.1f}°C) will significantly increase air conditioning "
                "usage and electricity costs."
            ),
            recommendations=(
                "Expect ~{cooling_demand:.0f}% increase in cooling costs",
                "Use programmable thermostat efficiently",
                "Close blinds during peak sun hours",
                "Run major appliances during off-peak hours",
                "Consider pre-cooling home before peak rates",
            ),
            timeframe="Next 3 days",
            probability=85,
        ),
    ],
    [
        ImpactRule(
            title="High Heating Energy Demand",
            requires=("min_temp_3d",),
            when=lambda m: m["min_temp_3d"] <= 5,
            severity=lambda m: "high" if m["min_temp_3d"] <= 0 else "medium",
            icon="🔥",
            description=(
                "Cold weather ({min_temp_3d:.1f}°C) will increase heating costs significantly."
            ),
            recommendations=(
                "Expect ~{heating_demand:.0f}% increase in heating costs",
                "Seal windows and doors to prevent drafts",
                "Use programmable thermostat to reduce nighttime heating",
                "Dress warmly indoors to lower thermostat setting",
                "Check heating system efficiency",
            ),
            timeframe="Next 3 days",
            probability=85,
        ),
    ],
]

# Category order is the order impacts are reported in
RULE_TABLE: dict[str, list[list[ImpactRule]]] = {
    "transportation": TRANSPORTATION_RULES,
    "health":         HEALTH_RULES,
    "outdoor":        OUTDOOR_RULES,
    "energy":         ENERGY_RULES,
}


def evaluate_category(category: str, metrics: dict) -> list[dict]:
    """Apply one category's rule groups; each group contributes at most one impact."""
    impacts = []
    for group in RULE_TABLE[category]:
        for rule in group:
            if rule.applies(metrics):
                impacts.append(rule.build(category, metrics))
                break
    return impacts


def forecast_weather_impacts(snapshot: WeatherSnapshot | None) -> dict:
    """Categorical impact records for the next one to three days.

    Returns dict with key impacts (list of dicts with category, severity,
    icon, title, description, recommendations, timeframe, probability).
    Empty when the daily group is missing.
    """
    if snapshot is None or snapshot.daily is None:
        return {"impacts": []}

    metrics = collect_metrics(snapshot)
    impacts: list[dict] = []
    for category in RULE_TABLE:
        impacts.extend(evaluate_category(category, metrics))
    return {"impacts": impacts}
