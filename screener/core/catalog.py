"""
Question Catalog
----------------
Static, ordered definition of the screening questions. Each question owns:
  - the step id persisted in Session.step
  - the answer key recorded in Session.answers
  - a short trigger prefix ("q2") used in callback_data
  - button rows mapping opaque codes ("ft") to canonical values ("full_time"),
    or no buttons at all for free-text questions

Everything here is built once at import time and never mutated, so handlers
can share it across threads without locking.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from screener.core import steps

TRIGGER_SEPARATOR = ":"

# Approximate weekly hours behind each availability answer
HOURS_MAP: Dict[str, int] = {
    "full_time": 30,
    "part_time": 20,
    "low": 0,
}


@dataclass(frozen=True)
class Button:
    label: str
    code: str
    value: str


@dataclass(frozen=True)
class Question:
    step: str
    prefix: str
    key: str
    icon: str
    text: str
    buttons: Tuple[Tuple[Button, ...], ...] = ()
    # Declared range for free-text numeric questions
    min_value: Optional[int] = None
    max_value: Optional[int] = None

    @property
    def free_text(self) -> bool:
        return not self.buttons

    @property
    def values(self) -> Tuple[str, ...]:
        return tuple(b.value for row in self.buttons for b in row)

    def value_for(self, code: str) -> Optional[str]:
        for row in self.buttons:
            for b in row:
                if b.code == code:
                    return b.value
        return None

    def trigger(self, button: Button) -> str:
        return f"{self.prefix}{TRIGGER_SEPARATOR}{button.code}"

    def accepts(self, value: Union[str, int]) -> bool:
        """Type/range check used when a value is recorded into Session.answers."""
        if self.free_text:
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            if self.min_value is not None and value < self.min_value:
                return False
            if self.max_value is not None and value > self.max_value:
                return False
            return True
        return isinstance(value, str) and value in self.values


@dataclass(frozen=True)
class Selection:
    """A well-formed trigger code: step prefix + opaque answer code."""
    prefix: str
    code: str


@dataclass(frozen=True)
class InvalidTrigger:
    raw: str
    reason: str


@dataclass(frozen=True)
class RenderedQuestion:
    text: str
    keyboard: Optional[List[List[Dict[str, str]]]] = None


def decode_trigger(raw: Optional[str]) -> Union[Selection, InvalidTrigger]:
    """
    Split callback_data "q1:y" into Selection(prefix="q1", code="y").
    Anything without exactly one non-empty prefix and code is InvalidTrigger.
    """
    data = (raw or "").strip()
    if TRIGGER_SEPARATOR not in data:
        return InvalidTrigger(raw=data, reason="missing_separator")
    prefix, _, code = data.partition(TRIGGER_SEPARATOR)
    if not prefix or not code or TRIGGER_SEPARATOR in code:
        return InvalidTrigger(raw=data, reason="malformed")
    return Selection(prefix=prefix, code=code)


class Catalog:
    def __init__(self, name: str, questions: Tuple[Question, ...]):
        self.name = name
        self.questions = tuple(questions)
        self._by_step = {q.step: i for i, q in enumerate(self.questions)}
        self._by_prefix = {q.prefix: q for q in self.questions}
        self._by_key = {q.key: q for q in self.questions}

    @property
    def step_count(self) -> int:
        return len(self.questions)

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(q.key for q in self.questions)

    def step_for(self, index: int) -> str:
        return self.questions[index].step

    def index_of(self, step: str) -> Optional[int]:
        return self._by_step.get(step)

    def key_for(self, index: int) -> str:
        return self.questions[index].key

    def question_for_step(self, step: str) -> Optional[Question]:
        idx = self.index_of(step)
        return None if idx is None else self.questions[idx]

    def question_for_prefix(self, prefix: str) -> Optional[Question]:
        return self._by_prefix.get(prefix)

    def question_for_key(self, key: str) -> Optional[Question]:
        return self._by_key.get(key)

    def has_step(self, step: str) -> bool:
        return step == steps.COMPLETED or step in self._by_step

    def render(self, index: int) -> RenderedQuestion:
        q = self.questions[index]
        text = f"{q.icon} *Question {index + 1} of {self.step_count}*\n\n{q.text}"
        if q.free_text:
            return RenderedQuestion(text=text)
        keyboard = [
            [{"text": b.label, "callback_data": q.trigger(b)} for b in row]
            for row in q.buttons
        ]
        return RenderedQuestion(text=text, keyboard=keyboard)


def _row(label: str, code: str, value: str) -> Tuple[Button, ...]:
    return (Button(label=label, code=code, value=value),)


TEAM_ROLE = Question(
    step=steps.Q1_TEAM_ROLE,
    prefix="q1",
    key="team_role",
    icon="👋",
    text=(
        "Are you applying as a *SpanishVIP team member*?\n\n"
        "_Note: This is an internal team position — not a marketplace or freelance "
        "platform like italki or Preply._"
    ),
    buttons=(
        _row("✅ Yes, I'm applying as a team member", "y", "yes"),
        _row("❌ No, I prefer marketplace platforms", "n", "no"),
    ),
)

WEEKLY_AVAILABILITY = Question(
    step=steps.Q2_WEEKLY_HOURS,
    prefix="q2",
    key="weekly_availability",
    icon="📅",
    text=(
        "How many hours per week are you available to teach?\n\n"
        "_Choose the option that best reflects your current availability._"
    ),
    buttons=(
        _row("⏰ Full-time — 30+ hours/week", "ft", "full_time"),
        _row("🕐 Part-time — 15–29 hours/week", "pt", "part_time"),
        _row("🔸 Less than 15 hours/week", "lo", "low"),
    ),
)

START_DATE = Question(
    step=steps.Q3_START_DATE,
    prefix="q3",
    key="start_date",
    icon="🚀",
    text="When would you be ready to start teaching with SpanishVIP?",
    buttons=(
        _row("🟢 Immediately", "now", "now"),
        _row("📆 In 1–2 weeks", "soon", "soon"),
        _row("🗓 In 1 month or more", "later", "later"),
    ),
)

SETUP = Question(
    step=steps.Q4_SETUP,
    prefix="q4",
    key="setup",
    icon="💻",
    text=(
        "Do you have *both* of the following?\n\n"
        "• A stable internet connection\n"
        "• A quiet, professional teaching space"
    ),
    buttons=(
        _row("✅ Yes, I have both", "y", "yes"),
        _row("❌ No / Not yet", "n", "no"),
    ),
)

SOP = Question(
    step=steps.Q5_SOP,
    prefix="q5",
    key="sop",
    icon="📋",
    text=(
        "SpanishVIP uses a structured curriculum and standard operating procedures (SOPs). "
        "Are you willing to follow them consistently?"
    ),
    buttons=(
        _row("✅ Yes, absolutely", "y", "yes"),
        _row("❌ No, I prefer my own approach", "n", "no"),
    ),
)

ENGLISH_LEVEL = Question(
    step=steps.Q6_ENGLISH_LEVEL,
    prefix="q6",
    key="english_level",
    icon="🗣",
    text="How would you rate your *English* for explaining grammar to beginners?",
    buttons=(
        _row("🟢 Good — I can teach fully in English", "g", "good"),
        _row("🟡 OK — I can manage simple explanations", "ok", "ok"),
        _row("🔴 Low — I rarely speak English", "lo", "low"),
    ),
)

AGE = Question(
    step=steps.Q7_AGE,
    prefix="q7",
    key="age",
    icon="🎂",
    text="How old are you? _Please reply with a number._",
    min_value=10,
    max_value=80,
)

STUDENT_TYPES = Question(
    step=steps.Q8_STUDENT_TYPES,
    prefix="q8",
    key="student_types",
    icon="🎓",
    text="Which students have you taught the most?",
    buttons=(
        (Button("🧒 Kids", "k", "kids"), Button("🧑 Teens", "t", "teens")),
        (Button("👩‍💼 Adults", "a", "adults"), Button("🌍 All ages", "all", "all")),
    ),
)

STANDARD = Catalog("standard", (TEAM_ROLE, WEEKLY_AVAILABILITY, START_DATE, SETUP, SOP))
EXTENDED = Catalog(
    "extended",
    (TEAM_ROLE, WEEKLY_AVAILABILITY, START_DATE, SETUP, SOP, ENGLISH_LEVEL, AGE, STUDENT_TYPES),
)

CATALOGS: Dict[str, Catalog] = {c.name: c for c in (STANDARD, EXTENDED)}


def get_catalog(variant: Optional[str]) -> Catalog:
    return CATALOGS.get((variant or "").strip().lower(), STANDARD)
