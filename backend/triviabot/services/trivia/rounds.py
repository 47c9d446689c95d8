import random
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from flask import current_app
from sqlalchemy import select, update
from sqlalchemy.orm import aliased

from triviabot import db
from triviabot.errors import NoQuestionAvailable, NotFound, StorageError
from triviabot.models import Answer, Question
from .questions import get_answers_for_question
from .scoring import score_round
from .transaction import unit_of_work

# Minimum gap between two activations so the newest one always sorts last
ACTIVATION_STEP_SEC = 0.001

# Any question that has been activated and not yet closed
open_round = aliased(Question)


@dataclass
class RotationResult:
    closed: Optional[Question]
    activated: Question
    awarded: int

    def to_dict(self):
        return {
            'closed_question_id': self.closed.id if self.closed else None,
            'activated_question_id': self.activated.id,
            'awarded': self.awarded,
        }


def _current_question_query(session):
    return (
        session.query(Question)
        .filter(Question.activated_at.isnot(None))
        .order_by(Question.activated_at.desc())
    )


def get_current_question() -> Question:
    """Return the question with the latest activation time."""
    question = _current_question_query(db.session).first()
    if question is None:
        raise NotFound('Current question not found')
    return question


def get_current_round() -> Tuple[Question, List[Answer]]:
    question = get_current_question()
    return question, get_answers_for_question(question.id)


def _close_round(session, closing: Question) -> int:
    """Mark the current round closed, then score it.

    The closed_at stamp is conditional, so when two rotations read the same
    current question only the first one to write may close and score it.
    """
    result = session.execute(
        update(Question)
        .where(Question.id == closing.id, Question.closed_at.is_(None))
        .values(closed_at=time.time())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise StorageError(f'Question {closing.id} was closed by a concurrent rotation')
    return score_round(session, closing)


def rotate(rng: Optional[random.Random] = None) -> RotationResult:
    """Close the current round, score it, and activate a random dormant question.

    Everything happens in one transaction: if no dormant question is left, or
    the activation loses a race with another rotator, scoring is rolled back
    together with the rest and the previous question stays current.
    """
    rng = rng or random
    with unit_of_work() as session:
        closing = _current_question_query(session).with_for_update().first()
        awarded = _close_round(session, closing) if closing is not None else 0

        dormant = (
            session.query(Question)
            .filter(Question.activated_at.is_(None))
            .order_by(Question.id)
            .all()
        )
        if not dormant:
            raise NoQuestionAvailable()
        chosen = dormant[rng.randrange(len(dormant))]

        activated_at = time.time()
        if closing is not None and activated_at <= closing.activated_at:
            activated_at = closing.activated_at + ACTIVATION_STEP_SEC
        result = session.execute(
            update(Question)
            .where(
                Question.id == chosen.id,
                Question.activated_at.is_(None),
                ~select(open_round.id)
                .where(open_round.activated_at.isnot(None), open_round.closed_at.is_(None))
                .exists(),
            )
            .values(activated_at=activated_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise StorageError(f'Question {chosen.id} was activated by a concurrent rotation')

    rotation = RotationResult(closed=closing, activated=chosen, awarded=awarded)
    current_app.logger.info(
        f"[rotate] closed={closing.id if closing else None} activated={chosen.id} awarded={awarded}"
    )
    return rotation
