from sqlalchemy import select, update

from triviabot.models import AnswerEntry, Question, User


def score_round(session, question: Question) -> int:
    """Apply scoring for a round that is being closed.

    +1 to every user whose recorded answer is the question's correct answer.
    Runs inside the caller's transaction and returns the number of users
    credited. Entries are read once, at closing time.
    """
    if question.correct_answer_id is None:
        return 0
    winners = select(AnswerEntry.user_id).where(
        AnswerEntry.question_id == question.id,
        AnswerEntry.answer_id == question.correct_answer_id,
    )
    result = session.execute(
        update(User)
        .where(User.id.in_(winners))
        .values(points=User.points + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0
