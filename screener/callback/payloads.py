from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from screener.store.models import Session
from screener.utils.time import utc_now_iso


@dataclass(frozen=True)
class ResultRecord:
    applicant_token: str
    telegram_chat_id: int
    telegram_username: Optional[str]
    result: str  # "pass" | "fail"
    reason: str
    answers: Mapping[str, Union[str, int]]
    started_at: str
    completed_at: str
    screening_variant: str

    def as_payload(self) -> Dict[str, Any]:
        """JSON-serializable body POSTed to the result webhook."""
        payload: Dict[str, Any] = {
            "applicant_token": self.applicant_token,
            "telegram_chat_id": self.telegram_chat_id,
            "result": self.result,
            "reason": self.reason,
            "answers": dict(self.answers),
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "screening_variant": self.screening_variant,
        }
        if self.telegram_username:
            payload["telegram_username"] = self.telegram_username
        return payload


def build_result_record(session: Session, verdict: str, reason: str = "") -> ResultRecord:
    # Copy answers so later mutation of the session cannot leak into the record
    return ResultRecord(
        applicant_token=session.applicantToken,
        telegram_chat_id=session.chatId,
        telegram_username=session.displayName,
        result=verdict,
        reason=reason or "",
        answers=MappingProxyType(dict(session.answers)),
        started_at=session.startedAt,
        completed_at=utc_now_iso(),
        screening_variant=session.variant,
    )
