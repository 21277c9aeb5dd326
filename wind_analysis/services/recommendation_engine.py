"""Rule-based advisories derived from wind statistics."""
from typing import List, Mapping, Sequence

from attrs import define

from wind_analysis.models.event import RegionStats
from wind_analysis.models.recommendation import Recommendation, Severity
from wind_analysis.models.statistics import GustAnalysis, HeightComparison, SeriesSummary


@define(frozen=True)
class LocationRuleConfig:
    """Cut-offs for single-location advisories."""

    strong_percentage: float = 20.0
    extreme_percentage: float = 5.0
    max_speed: float = 100.0  # km/h
    strong_gust_percentage: float = 15.0
    height_ratio: float = 1.5
    low_avg_speed: float = 20.0  # km/h


@define(frozen=True)
class EventRuleConfig:
    """Cut-offs for multi-site event advisories."""

    affected_percentage: float = 50.0
    max_speed: float = 100.0  # km/h
    region_avg_speed: float = 80.0  # km/h
    top_sites: int = 3


class RecommendationEngine:
    """Evaluates independent advisory rules in a fixed order."""

    def __init__(
        self,
        location_rules: LocationRuleConfig = None,
        event_rules: EventRuleConfig = None,
    ):
        self.location_rules = location_rules or LocationRuleConfig()
        self.event_rules = event_rules or EventRuleConfig()

    def for_location(
        self,
        summary: SeriesSummary,
        gusts: GustAnalysis,
        heights: HeightComparison,
    ) -> List[Recommendation]:
        """Advisories for one location's statistics."""
        rules = self.location_rules
        recommendations = []

        if summary.strong_percentage > rules.strong_percentage:
            recommendations.append(Recommendation(
                severity=Severity.WARNING,
                message="High frequency of strong winds detected. "
                        "Consider wind farm shutdown protocols.",
                metrics={"percentage": summary.strong_percentage},
            ))

        if summary.extreme_percentage > rules.extreme_percentage:
            recommendations.append(Recommendation(
                severity=Severity.DANGER,
                message="Significant extreme wind events detected. Review safety protocols.",
                metrics={"percentage": summary.extreme_percentage},
            ))

        if summary.max_speed > rules.max_speed:
            recommendations.append(Recommendation(
                severity=Severity.DANGER,
                message="Extreme wind speeds recorded. "
                        "Immediate safety protocols recommended.",
                metrics={"max_speed": summary.max_speed},
            ))

        if gusts.strong_gust_percentage > rules.strong_gust_percentage:
            recommendations.append(Recommendation(
                severity=Severity.WARNING,
                message="Frequent strong wind gusts detected. Monitor turbine stress levels.",
                metrics={"percentage": gusts.strong_gust_percentage},
            ))

        if heights.speed_ratio > rules.height_ratio:
            recommendations.append(Recommendation(
                severity=Severity.INFO,
                message="Significant wind speed increase with height. "
                        "Consider taller turbines for better efficiency.",
                metrics={"ratio": round(heights.speed_ratio, 2)},
            ))

        if summary.avg_speed < rules.low_avg_speed:
            recommendations.append(Recommendation(
                severity=Severity.INFO,
                message="Low average wind speeds. May impact energy production efficiency.",
                metrics={"avg_speed": summary.avg_speed},
            ))

        return recommendations

    def for_event(
        self,
        percentage_affected: float,
        max_speed: float,
        max_speed_site: str,
        regional_stats: Mapping[str, RegionStats],
        ranked_site_names: Sequence[str],
    ) -> List[Recommendation]:
        """
        Advisories for a multi-site analysis.

        Args:
            percentage_affected: Share of analysed sites with strong winds
            max_speed: Highest speed observed at any site
            max_speed_site: Site where ``max_speed`` was observed
            regional_stats: Per-region statistics
            ranked_site_names: Site names, highest max speed first
        """
        rules = self.event_rules
        recommendations = []

        if percentage_affected > rules.affected_percentage:
            recommendations.append(Recommendation(
                severity=Severity.WARNING,
                message=f"High-impact wind event: {percentage_affected:.1f}% "
                        "of wind farms affected by strong winds.",
                impact="Grid-wide",
                metrics={"percentage": percentage_affected},
            ))

        if max_speed > rules.max_speed:
            recommendations.append(Recommendation(
                severity=Severity.DANGER,
                message=f"Extreme wind speeds recorded at {max_speed_site} "
                        f"({max_speed:.1f} km/h). Immediate safety protocols recommended.",
                impact="Safety",
                metrics={"max_speed": max_speed},
            ))

        for region, stats in regional_stats.items():
            if stats.avg_speed > rules.region_avg_speed:
                recommendations.append(Recommendation(
                    severity=Severity.WARNING,
                    message=f"High wind speeds in {region} region "
                            f"(avg: {stats.avg_speed:.1f} km/h). "
                            "Monitor regional grid stability.",
                    impact="Regional",
                    metrics={"avg_speed": stats.avg_speed},
                ))

        top = list(ranked_site_names[:rules.top_sites])
        if top:
            recommendations.append(Recommendation(
                severity=Severity.INFO,
                message=f"Top wind farm performers: {', '.join(top)}. "
                        "Consider grid prioritization.",
                impact="Operational",
            ))

        return recommendations
