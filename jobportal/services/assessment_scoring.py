"""
Assessment Scoring Engine

PURPOSE:
Turn one completed student assessment into four skill-category scores
(technical, communication, problem solving, teamwork). These scores are
stored on the student profile and read by the fitment engine when ranking
jobs.

HOW IT WORKS:
Every category starts at BASE_SCORE, then four additive passes run:
1. Education bonus (technical gets the full bonus, problem solving 80% of it)
2. Core-value deltas (one small table per recognized value)
3. Slider thresholds (five work-style sliders, inclusive thresholds)
4. Bubble answers (Likert 1-5, positions q1..q10, an answer >= 3 counts)
Finally each category is clamped to [MIN_SCORE, MAX_SCORE].

The engine is a pure function: no I/O, no state, never raises for bad
content. Unknown education or core values degrade to defaults, and slider or
bubble values that are missing, non-numeric or out of range simply fail
their checks.
"""

from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional


BASE_SCORE = 40
MIN_SCORE = 20
MAX_SCORE = 100

CATEGORIES = ("technical", "communication", "problem_solving", "teamwork")


# ============================================================
# LOOKUP TABLES
# ============================================================

EDUCATION_BONUS = MappingProxyType({
    "High School": 5,
    "BTech": 15,
    "Bachelor": 15,
    "Master": 18,
    "PhD": 20,
})
DEFAULT_EDUCATION_BONUS = 10
PROBLEM_SOLVING_EDUCATION_FACTOR = 0.8

# Full vocabulary shown to students; only some values carry deltas
CORE_VALUES = (
    "Leadership", "Collaboration", "Innovation", "Integrity", "Data-Driven",
    "Customer Focus", "Communication", "Creativity", "Adaptability", "Excellence",
    "Teamwork", "Accountability", "Continuous Learning", "Problem Solving", "Diversity",
    "Sustainability", "Work-Life Balance", "Empathy", "Ambition", "Transparency",
)
REQUIRED_CORE_VALUES = 5

CORE_VALUE_DELTAS = MappingProxyType({
    "Leadership": MappingProxyType({"communication": 8, "teamwork": 6}),
    "Collaboration": MappingProxyType({"teamwork": 10, "communication": 5}),
    "Innovation": MappingProxyType({"problem_solving": 8, "technical": 5}),
    "Data-Driven": MappingProxyType({"technical": 10, "problem_solving": 6}),
    "Customer Focus": MappingProxyType({"communication": 8, "teamwork": 4}),
    "Communication": MappingProxyType({"communication": 10, "teamwork": 4}),
    "Creativity": MappingProxyType({"problem_solving": 8, "communication": 3}),
    "Adaptability": MappingProxyType({"problem_solving": 5, "teamwork": 5}),
    "Continuous Learning": MappingProxyType({"technical": 8, "problem_solving": 4}),
    "Teamwork": MappingProxyType({"teamwork": 10, "communication": 4}),
})

SLIDER_NAMES = ("independence", "routine", "pace", "focus", "approach")
SLIDER_MIN = 0
SLIDER_MAX = 100
SLIDER_DEFAULT = 50


@dataclass(frozen=True)
class SliderRule:
    slider: str
    threshold: int
    at_least: bool  # True: value >= threshold, False: value <= threshold
    bonuses: Mapping[str, int]

    def fires(self, value: Any) -> bool:
        if not _in_range(value, SLIDER_MIN, SLIDER_MAX):
            return False
        if self.at_least:
            return value >= self.threshold
        return value <= self.threshold


SLIDER_RULES = (
    SliderRule("independence", 70, True, MappingProxyType({"technical": 10, "problem_solving": 8})),
    SliderRule("routine", 30, False, MappingProxyType({"problem_solving": 12, "technical": 8})),
    SliderRule("pace", 60, True, MappingProxyType({"technical": 8, "problem_solving": 10})),
    SliderRule("focus", 60, True, MappingProxyType({"technical": 12, "problem_solving": 8})),
    SliderRule("approach", 60, True, MappingProxyType({"communication": 10, "teamwork": 12})),
)

# Explicit order; never rely on dict iteration order of the incoming answers
BUBBLE_KEYS = ("q1", "q2", "q3", "q4", "q5", "q6", "q7", "q8", "q9", "q10")
BUBBLE_MIN = 1
BUBBLE_MAX = 5
BUBBLE_PASS = 3

BUBBLE_POSITION_BONUSES = (
    MappingProxyType({"problem_solving": 8, "technical": 5}),   # q1
    MappingProxyType({"teamwork": 8, "communication": 5}),      # q2
    MappingProxyType({"communication": 8, "teamwork": 4}),      # q3
    MappingProxyType({"technical": 8, "problem_solving": 4}),   # q4
)
BUBBLE_GENERAL_BONUS = 2


# ============================================================
# RESULT
# ============================================================

@dataclass(frozen=True)
class ScoreResult:
    technical: int
    communication: int
    problem_solving: int
    teamwork: int

    def to_dict(self) -> Dict[str, int]:
        """The four-field record stored on student profiles."""
        return {
            "technical": self.technical,
            "communication": self.communication,
            "problemSolving": self.problem_solving,
            "teamwork": self.teamwork,
        }

    @property
    def average(self) -> float:
        return (self.technical + self.communication + self.problem_solving + self.teamwork) / 4


# ============================================================
# SCORING
# ============================================================

def _in_range(value: Any, low: int, high: int) -> bool:
    # bool is an int subclass; a checkbox value is not a slider position
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return low <= value <= high


def _add(totals: Dict[str, float], bonuses: Mapping[str, float]) -> None:
    for category, points in bonuses.items():
        totals[category] += points


def clamp_score(value: float) -> int:
    """Clamp a running total into [MIN_SCORE, MAX_SCORE] and round to an int."""
    clamped = max(MIN_SCORE, min(MAX_SCORE, value))
    # Half-up, so 54.5 never silently becomes 54
    return int(clamped + 0.5)


def education_bonus(education: Optional[str]) -> int:
    if not isinstance(education, str):
        return DEFAULT_EDUCATION_BONUS
    return EDUCATION_BONUS.get(education.strip(), DEFAULT_EDUCATION_BONUS)


def _distinct(values: Optional[Iterable[Any]]) -> list:
    if values is None or isinstance(values, (str, bytes)):
        return []
    seen = []
    for value in values:
        if not isinstance(value, str):
            continue
        value = value.strip()
        if value and value not in seen:
            seen.append(value)
    return seen


def compute_scores(
    education: Optional[str],
    core_values: Optional[Iterable[str]],
    sliders: Optional[Mapping[str, Any]],
    bubbles: Optional[Mapping[str, Any]],
) -> ScoreResult:
    """
    Compute the four category scores for one assessment submission.

    Args:
        education: Degree label, e.g. "Bachelor". Unknown labels get the default bonus.
        core_values: Selected core values (normally exactly 5). Duplicates count once.
        sliders: independence/routine/pace/focus/approach, each 0-100.
        bubbles: q1..q10, each 1-5 or None.

    Returns:
        ScoreResult with every field in [MIN_SCORE, MAX_SCORE]
    """
    totals: Dict[str, float] = {category: BASE_SCORE for category in CATEGORIES}
    if not isinstance(sliders, Mapping):
        sliders = {}
    if not isinstance(bubbles, Mapping):
        bubbles = {}

    # 1. Education
    bonus = education_bonus(education)
    _add(totals, {
        "technical": bonus,
        "problem_solving": bonus * PROBLEM_SOLVING_EDUCATION_FACTOR,
    })

    # 2. Core values
    for value in _distinct(core_values):
        _add(totals, CORE_VALUE_DELTAS.get(value, {}))

    # 3. Sliders
    for rule in SLIDER_RULES:
        if rule.fires(sliders.get(rule.slider)):
            _add(totals, rule.bonuses)

    # 4. Bubbles
    for position, key in enumerate(BUBBLE_KEYS):
        answer = bubbles.get(key)
        if not _in_range(answer, BUBBLE_MIN, BUBBLE_MAX) or answer < BUBBLE_PASS:
            continue
        if position < len(BUBBLE_POSITION_BONUSES):
            _add(totals, BUBBLE_POSITION_BONUSES[position])
        else:
            _add(totals, {category: BUBBLE_GENERAL_BONUS for category in CATEGORIES})

    # 5. Clamp
    return ScoreResult(**{category: clamp_score(totals[category]) for category in CATEGORIES})


def compute_scores_dict(
    education: Optional[str],
    core_values: Optional[Iterable[str]],
    sliders: Optional[Mapping[str, Any]],
    bubbles: Optional[Mapping[str, Any]],
) -> Dict[str, int]:
    """Same as compute_scores(), returned as the camelCase record."""
    return compute_scores(education, core_values, sliders, bubbles).to_dict()


def get_assessment_options() -> dict:
    """Vocabulary and input ranges the assessment form is built from."""
    return {
        "education_levels": list(EDUCATION_BONUS.keys()),
        "core_values": list(CORE_VALUES),
        "required_core_values": REQUIRED_CORE_VALUES,
        "sliders": [
            {"name": name, "min": SLIDER_MIN, "max": SLIDER_MAX, "default": SLIDER_DEFAULT}
            for name in SLIDER_NAMES
        ],
        "bubbles": {"keys": list(BUBBLE_KEYS), "min": BUBBLE_MIN, "max": BUBBLE_MAX},
    }
