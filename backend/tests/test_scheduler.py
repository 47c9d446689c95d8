from triviabot.services.trivia import scheduler
from triviabot.services.trivia.rounds import get_current_question
from triviabot.services.trivia.scheduler import run_rotation_tick, start_question_rotator


def test_tick_rotates_and_notifies_displays(flask_app, sio_client, make_question, rng):
    question = make_question(text='Broadcast me?')
    sio_client.get_received('/ws')  # flush connect

    result = run_rotation_tick(flask_app, rng=rng)
    assert result is not None
    assert get_current_question().id == question.id

    events = sio_client.get_received('/ws')
    rotated = [e for e in events if e['name'] == 'question_rotated']
    assert rotated
    payload = rotated[0]['args'][0]
    assert payload['activated_question_id'] == question.id
    assert payload['closed_question_id'] is None
    assert payload['question']['text'] == 'Broadcast me?'


def test_tick_survives_empty_pool(flask_app, make_question, rng, caplog):
    first = make_question()
    assert run_rotation_tick(flask_app, rng=rng) is not None
    assert run_rotation_tick(flask_app, rng=rng) is None
    assert get_current_question().id == first.id
    assert 'rotate-failed' in caplog.text


def test_rotator_is_disabled_in_tests(flask_app, monkeypatch):
    started = []
    monkeypatch.setattr(scheduler.socketio, 'start_background_task', lambda *a, **kw: started.append(a))
    assert start_question_rotator(flask_app) is False
    assert started == []


def test_rotator_starts_once_when_enabled(flask_app, monkeypatch):
    started = []
    monkeypatch.setattr(scheduler.socketio, 'start_background_task', lambda *a, **kw: started.append(a))
    monkeypatch.setattr(scheduler, '_rotator_started', False)
    flask_app.config['ENABLE_SCHEDULER_IN_TESTS'] = True
    assert start_question_rotator(flask_app) is True
    assert start_question_rotator(flask_app) is False
    assert len(started) == 1
    assert started[0][1] == 60
