"""Static goal catalog — configuration only, no persistence.

The catalog is handed to the board explicitly; DEFAULT_CATALOG is just
the stock set of goals and category colours.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from goalstack.deck.models import DeadlineKind, Goal

DEFAULT_COLOR = "#AAAAAA"


@dataclass(frozen=True, slots=True)
class GoalCatalog:
    goals: tuple[Goal, ...]
    categories: tuple[str, ...]
    colors: dict[str, str] = field(default_factory=dict)

    def goals_for(self, category: str) -> list[Goal]:
        return [g for g in self.goals if g.category == category]

    def color_for(self, category: str) -> str:
        return self.colors.get(category, self.colors.get("default", DEFAULT_COLOR))

    def get_goal(self, goal_id: str) -> Goal | None:
        return next((g for g in self.goals if g.id == goal_id), None)


def _goal(goal_id: str, title: str, category: str, kind: DeadlineKind, at: str | None = None) -> Goal:
    return Goal(id=goal_id, title=title, category=category, deadline_kind=kind.value, deadline_time=at)


CAREER = "Career & Skills"
HOBBIES = "Hobbies"
FITNESS = "Health & Fitness"
SOCIAL = "Relationships & Social"

DEFAULT_CATALOG = GoalCatalog(
    goals=(
        _goal("career-1", "Interview prep for one hour", CAREER, DeadlineKind.DAILY_EOD),
        _goal("career-2", "Earn Trailhead badge", CAREER, DeadlineKind.WEEKLY_EOW),
        _goal("career-3", "Follow the 7 habits to impact", CAREER, DeadlineKind.DAILY_EOD),
        _goal("hobby-1", "Practice drums", HOBBIES, DeadlineKind.DAILY_EOD),
        _goal("hobby-2", "Edit photo", HOBBIES, DeadlineKind.MONTHLY_EOM),
        _goal("hobby-3", "Read", HOBBIES, DeadlineKind.DAILY_EOD),
        _goal("fit-1", "Positive training load", FITNESS, DeadlineKind.WEEKLY_EOW),
        _goal("fit-2", "Eat healthy", FITNESS, DeadlineKind.DAILY_EOD),
        _goal("fit-3", "Abstain", FITNESS, DeadlineKind.DAILY_EOD),
        _goal("fit-4", "Take medicines", FITNESS, DeadlineKind.AT_TIME, "21:30"),
        _goal("rel-1", "Find out something new about someone", SOCIAL, DeadlineKind.DAILY_EOD),
    ),
    categories=(CAREER, HOBBIES, FITNESS, SOCIAL),
    colors={
        CAREER: "#4DA3FF",
        HOBBIES: "#B57BFF",
        FITNESS: "#6BFF6B",
        SOCIAL: "#FF7BAA",
        "default": DEFAULT_COLOR,
    },
)
