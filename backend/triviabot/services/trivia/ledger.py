from typing import Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from triviabot import db
from triviabot.errors import InvalidAnswerIndex, NoActiveRound, NotFound, StorageError
from triviabot.models import Answer, AnswerEntry, User
from .questions import get_answers_for_question
from .rounds import get_current_question


def _upsert_entry(user_id: int, question_id: int, answer_id: int) -> AnswerEntry:
    entry = AnswerEntry.query.filter_by(user_id=user_id, question_id=question_id).first()
    if entry is None:
        entry = AnswerEntry(user_id=user_id, question_id=question_id, answer_id=answer_id)
        db.session.add(entry)
    else:
        entry.answer_id = answer_id
    db.session.commit()
    return entry


def record_answer(user_id: int, question_id: int, answer_index: int) -> Tuple[AnswerEntry, Answer]:
    """Record (or change) a user's choice for the current question.

    ``answer_index`` is 1-based. Points are only awarded when the round
    closes, so re-answering simply overwrites the previous choice.
    """
    try:
        current = get_current_question()
    except NotFound:
        raise NoActiveRound('No question is currently running') from None
    if current.id != question_id:
        raise NoActiveRound(f'Question {question_id} is not the current question')

    answers = get_answers_for_question(current.id)
    if isinstance(answer_index, bool) or not isinstance(answer_index, int) \
            or not 1 <= answer_index <= len(answers):
        raise InvalidAnswerIndex(len(answers))
    answer = answers[answer_index - 1]

    if db.session.get(User, user_id) is None:
        raise NotFound('User not found')

    try:
        try:
            entry = _upsert_entry(user_id, question_id, answer.id)
        except IntegrityError:
            # Lost the insert race for this (user, question); the row exists now
            db.session.rollback()
            entry = _upsert_entry(user_id, question_id, answer.id)
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StorageError(f"Can't record answer: {exc}") from exc

    current_app.logger.info(
        f"[answer] user={user_id} question={question_id} answer={answer.id} index={answer_index}"
    )
    return entry, answer
