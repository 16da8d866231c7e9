"""
Result Reporter
---------------
Terminal transition of a screening run.

The verdict is claimed once per run (done:<chat_id>, SET NX) before anything
is sent, so concurrent handlers racing to the last step dispatch at most one
result. The record is handed off detached; the applicant is told the outcome;
the session is persisted as completed and then deleted.
"""
from screener.settings import settings
from screener.core import messages, steps
from screener.callback.payloads import build_result_record
from screener.callback.dispatcher import dispatch_result
from screener.observability.logging import log
import screener.observability.metrics as metrics
import screener.store.session_repo as session_repo
from screener.store.models import Session


def finish(session: Session, verdict: str, reason: str, presenter) -> bool:
    """
    Terminal transition: dispatch the result record (detached), tell the
    applicant, then mark completed, persist, and delete.

    Returns False when this run's verdict was already claimed. Nothing is sent
    then, but the session is still closed: a claim whose handler died before
    persisting `completed` would otherwise leave a live step that can never
    finish.
    """
    if not session_repo.claim_completion(session):
        log(event="verdict_duplicate", chatId=session.chatId, result=verdict)
        _close(session)
        return False

    record = build_result_record(session, verdict, reason)
    dispatch_result(record.as_payload())
    metrics.increment_verdict(verdict)
    log(
        event="screening_finished",
        chatId=session.chatId,
        result=verdict,
        reason=reason,
        answeredSteps=len(session.answers),
    )

    if verdict == steps.PASS:
        presenter.send_message(session.chatId, messages.passed(settings.COORDINATOR_LINK))
    else:
        presenter.send_message(session.chatId, messages.failed(reason))

    _close(session)
    return True


def _close(session: Session) -> None:
    # Completed is persisted before deletion so a crash in between leaves a
    # terminal record, never a resumable one.
    session.step = steps.COMPLETED
    try:
        session_repo.save_session(session)
    except Exception as e:
        log(event="session_save_failed", chatId=session.chatId, step=session.step, error=str(e)[:200])
    session_repo.delete_session(session.chatId)
