from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from screener.core import steps
from screener.core.catalog import Catalog, get_catalog

AnswerValue = Union[str, int]


@dataclass
class Session:
    # Conversation identity (Telegram chat id)
    chatId: int = 0
    # Correlates to the applicant record downstream; set once by start_session
    applicantToken: str = ""

    step: str = steps.Q1_TEAM_ROLE
    answers: Dict[str, AnswerValue] = field(default_factory=dict)

    startedAt: str = ""
    displayName: Optional[str] = None

    # Catalog captured at creation so config changes never reshape a live screening
    variant: str = "standard"

    @property
    def catalog(self) -> Catalog:
        return get_catalog(self.variant)

    @property
    def completed(self) -> bool:
        return self.step == steps.COMPLETED

    def record_answer(self, key: str, value: AnswerValue) -> None:
        """
        Validated insertion into answers:
        - key must belong to this session's catalog
        - a key is written once (prior steps are never overwritten)
        - value must be a canonical value of that question (or an in-range int)
        """
        question = self.catalog.question_for_key(key)
        if question is None:
            raise ValueError(f"unknown answer key: {key}")
        if key in self.answers:
            raise ValueError(f"answer already recorded for {key}")
        if not question.accepts(value):
            raise ValueError(f"invalid value for {key}: {value!r}")
        self.answers[key] = value
