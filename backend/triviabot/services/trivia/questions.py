from typing import List, Sequence

from flask import current_app

from triviabot import db
from triviabot.errors import NotFound, ValidationError
from triviabot.models import Answer, Question, User
from .transaction import unit_of_work

MAX_QUESTION_LENGTH = 128
MAX_ANSWER_LENGTH = 32
MIN_ANSWERS = 2
MAX_ANSWERS = 4


def validate_question(text: str, answer_texts: Sequence[str], correct_index: int) -> None:
    """Reject a submission whose shape cannot become a question.

    ``correct_index`` is 1-based, matching how players number answers.
    """
    if not text or not text.strip():
        raise ValidationError('Question text is required')
    if len(text) > MAX_QUESTION_LENGTH:
        raise ValidationError(f'Question is too long: maximum {MAX_QUESTION_LENGTH} characters')
    if not MIN_ANSWERS <= len(answer_texts) <= MAX_ANSWERS:
        raise ValidationError(
            f"Can't set {len(answer_texts)} answers: minimum {MIN_ANSWERS} answers and maximum {MAX_ANSWERS} answers"
        )
    for i, answer_text in enumerate(answer_texts, start=1):
        if not answer_text or not answer_text.strip():
            raise ValidationError(f'Answer {i} is empty')
        if len(answer_text) > MAX_ANSWER_LENGTH:
            raise ValidationError(f'Answer {i} is too long: maximum {MAX_ANSWER_LENGTH} characters')
    if isinstance(correct_index, bool) or not isinstance(correct_index, int):
        raise ValidationError('Invalid right answer index')
    if not 1 <= correct_index <= len(answer_texts):
        raise ValidationError('Invalid right answer index')


def create_question(author_id: int, text: str, answer_texts: Sequence[str], correct_index: int) -> Question:
    """Create a dormant question and its answers in one transaction."""
    validate_question(text, answer_texts, correct_index)
    with unit_of_work() as session:
        if session.get(User, author_id) is None:
            raise NotFound('User not found')
        question = Question(author_id=author_id, text=text)
        session.add(question)
        session.flush()
        answers = []
        for answer_text in answer_texts:
            answer = Answer(question_id=question.id, text=answer_text)
            session.add(answer)
            answers.append(answer)
        session.flush()
        question.correct_answer_id = answers[correct_index - 1].id
    current_app.logger.info(
        f"[question-created] question={question.id} author={author_id} answers={len(answer_texts)}"
    )
    return question


def get_answers_for_question(question_id: int) -> List[Answer]:
    return Answer.query.filter_by(question_id=question_id).order_by(Answer.id).all()


def get_question(question_id: int) -> Question:
    question = db.session.get(Question, question_id)
    if question is None:
        raise NotFound('Question not found')
    return question
