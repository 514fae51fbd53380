"""
Outcome interpretation — what a finished projection says about the future self.

Translates a SimulationResult into answers a user can act on:
  "What does my life look like at the end?" → scene (degen / peace / balanced / struggling)
  "How am I doing on each dial?"            → wellbeing bands and scenario message
  "What should worry me?"                   → flags (stress, burnout years, goal, health)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from core.schema import SimulationInput, SimulationResult
from core.utils import safe_div

from .metrics import FreedomMetrics, GoalProgress, freedom_metrics, goal_progress


@dataclass(frozen=True)
class Scene:
    scene_type: str
    mood: str
    setting: str
    tagline: str


SCENES: Dict[str, Scene] = {
    "degen": Scene(
        scene_type="degen",
        mood="burned_out",
        setting="cluttered_trading_desk",
        tagline="Always online. Always chasing.",
    ),
    "peace": Scene(
        scene_type="peace",
        mood="calm_confidence",
        setting="luxury_villa_no_screens",
        tagline="You don't chase signals anymore. You are the signal.",
    ),
    "balanced": Scene(
        scene_type="balanced",
        mood="controlled_success",
        setting="modern_office_organized",
        tagline="Discipline is the final luxury.",
    ),
    "struggling": Scene(
        scene_type="struggling",
        mood="anxious_uncertain",
        setting="cramped_apartment",
        tagline="Real alpha sleeps eight hours.",
    ),
}


def classify_scene(result: SimulationResult, inp: SimulationInput) -> Scene:
    """
    Pick the end-of-life scene. Checked in order, first match wins:
      degen       avg stress >= 70, or (multi-year runs) high-stress years >= 30% of the span
      peace       goal met, avg health >= 80, avg stress <= 40
      balanced    >= 70% of goal, avg health >= 60
      struggling  otherwise
    """
    span = inp.age_end - inp.age_start
    goal = inp.goal_amount

    if result.avg_stress >= 70 or (span > 0 and result.high_stress_years >= span * 0.3):
        return SCENES["degen"]
    if result.final_wealth >= goal and result.avg_health >= 80 and result.avg_stress <= 40:
        return SCENES["peace"]
    if result.final_wealth >= goal * 0.7 and result.avg_health >= 60:
        return SCENES["balanced"]
    return SCENES["struggling"]


def visual_cues(
    avg_stress: float,
    avg_health: float,
    final_wealth: float,
    goal_amount: float,
) -> Dict[str, object]:
    return {
        "stress_level": avg_stress,
        "health_level": avg_health,
        "wealth_ratio": safe_div(final_wealth, goal_amount),
        "eye_brightness": max(20.0, 100.0 - avg_stress),
        "skin_glow": avg_health,
        "posture": "upright_confident" if avg_stress < 50 else "slouched_tired",
        "environment": "luxurious_organized" if final_wealth >= goal_amount else "modest_cluttered",
    }


def wellbeing_band(score: float) -> str:
    if score >= 80:
        return "good"
    if score >= 60:
        return "fair"
    if score >= 40:
        return "poor"
    return "critical"


def scenario_message(wealth: float, freedom_score: float) -> Dict[str, str]:
    if wealth >= 500_000 and freedom_score >= 80:
        return {
            "title": "Living the Dream",
            "message": "Your future self can rest easy with financial security and peace of mind.",
        }
    if wealth >= 100_000 and freedom_score >= 50:
        return {
            "title": "Comfortable & Secure",
            "message": "You've built solid wealth with manageable stress levels.",
        }
    if wealth >= 50_000:
        return {
            "title": "Getting By",
            "message": "Some security achieved, but retirement may be challenging.",
        }
    return {
        "title": "Struggling",
        "message": "Limited financial security with high stress and uncertainty.",
    }


@dataclass
class OutcomeReport:
    """Structured end-of-run interpretation."""
    scene: Scene
    cues: Dict[str, object]
    progress: GoalProgress
    freedom: FreedomMetrics
    health_band: str
    happiness_band: str
    message: Dict[str, str]

    goal_achieved_age: Optional[int]
    final_wealth: int

    flags: List[str] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        years = self.freedom.years_of_expenses
        rows = [
            {"Metric": "Scene", "Value": self.scene.scene_type},
            {"Metric": "Tagline", "Value": self.scene.tagline},
            {"Metric": "Final Wealth", "Value": f"{self.final_wealth:,.0f}"},
            {"Metric": "Goal Progress", "Value": f"{self.progress.percentage:.0f}%"},
            {"Metric": "Goal Reached At",
             "Value": str(self.goal_achieved_age) if self.goal_achieved_age is not None else "N/A"},
            {"Metric": "Monthly Passive Income", "Value": f"{self.freedom.monthly_passive_income:,.0f}"},
            {"Metric": "Freedom Score", "Value": f"{self.freedom.freedom_score:.0f}"},
            {"Metric": "Years of Expenses", "Value": f"{years:.1f}" if years is not None else "N/A"},
            {"Metric": "Health", "Value": self.health_band},
            {"Metric": "Happiness", "Value": self.happiness_band},
            {"Metric": "Outlook", "Value": self.message["title"]},
        ]
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def generate_outcome_report(
    result: SimulationResult,
    inp: SimulationInput,
    *,
    annual_expenses: Optional[float] = None,
) -> OutcomeReport:
    """
    Interpret one finished projection.

    Parameters
    ----------
    result : SimulationResult
        Output of engine.simulate()
    inp : SimulationInput
        The input that produced result
    annual_expenses : float, optional
        Yearly spending to test retirement against. Defaults to the starting income.
    """
    expenses = inp.annual_income if annual_expenses is None else annual_expenses
    freedom = freedom_metrics(result.final_wealth, expenses)
    span = inp.age_end - inp.age_start

    flags = []
    if result.avg_stress >= 70:
        flags.append(f"HIGH_STRESS: average stress {result.avg_stress:.0f}")
    if span > 0 and result.high_stress_years >= span * 0.3:
        flags.append(f"BURNOUT_YEARS: {result.high_stress_years} of {span} years above stress 70")
    if result.goal_achieved_age is None:
        flags.append("GOAL_MISSED: wealth never reached the goal")
    if result.avg_health < 60:
        flags.append(f"LOW_HEALTH: average health {result.avg_health:.0f}")

    return OutcomeReport(
        scene=classify_scene(result, inp),
        cues=visual_cues(result.avg_stress, result.avg_health, result.final_wealth, inp.goal_amount),
        progress=goal_progress(result.final_wealth, inp.goal_amount),
        freedom=freedom,
        health_band=wellbeing_band(result.avg_health),
        happiness_band=wellbeing_band(result.avg_happiness),
        message=scenario_message(result.final_wealth, freedom.freedom_score),
        goal_achieved_age=result.goal_achieved_age,
        final_wealth=result.final_wealth,
        flags=flags,
    )
