from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from triviabot import db
from triviabot.errors import StorageError


@contextmanager
def unit_of_work():
    """Run a block as one transaction on the scoped session.

    Commits when the block exits cleanly. Any exception rolls the whole
    block back; database errors are re-raised as ``StorageError``.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageError(f'Transaction failed: {exc}') from exc
    except BaseException:
        session.rollback()
        raise
