from typing import Optional

from triviabot import socketio
from triviabot.errors import TriviaError
from .rounds import RotationResult, rotate

_rotator_started = False


def run_rotation_tick(app, rng=None) -> Optional[RotationResult]:
    """Run one rotation for the scheduler.

    Failures are logged and swallowed: the transaction has already rolled
    back and the next tick simply tries again.
    """
    with app.app_context():
        try:
            result = rotate(rng=rng)
        except TriviaError as exc:
            app.logger.warning(f"[rotate-failed] kind={exc.kind} err={exc.message}")
            return None
        except Exception as exc:
            app.logger.exception(f"[rotate-crashed] err={exc}")
            return None

        payload = result.to_dict()
        payload['question'] = result.activated.to_dict()
        socketio.emit('question_rotated', payload, namespace='/ws')
        return result


def start_question_rotator(app) -> bool:
    """Start the background rotation loop.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Starts at most one loop per process
    - Sleeps QUESTION_REFRESH_RATE seconds before every rotation
    """
    global _rotator_started
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return False
    if _rotator_started:
        app.logger.info("[rotator-skip] already running")
        return False

    try:
        interval = int(app.config.get('QUESTION_REFRESH_RATE', 300))
    except (TypeError, ValueError):
        raise ValueError("Can't convert question refresh rate")
    if interval <= 0:
        raise ValueError('QUESTION_REFRESH_RATE must be positive')

    def _worker(delay: int):
        while True:
            socketio.sleep(delay)
            run_rotation_tick(app)

    _rotator_started = True
    app.logger.info(f"[rotator-start] interval={interval}s")
    socketio.start_background_task(_worker, interval)
    return True
