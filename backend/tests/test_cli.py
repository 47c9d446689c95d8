from triviabot.models import Question, User


def test_rotate_command_reports_empty_pool(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['rotate'])
    assert result.exit_code != 0
    assert 'No question available' in result.output


def test_rotate_command_activates(flask_app, make_question):
    question = make_question()
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['rotate'])
    assert result.exit_code == 0
    assert f'Activated question {question.id}' in result.output


def test_db_reset_seeds_dormant_questions(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['db-reset'])
    assert result.exit_code == 0
    assert 'seeded' in result.output
    assert User.query.count() == 1
    assert Question.query.count() == 3
    assert Question.query.filter(Question.activated_at.isnot(None)).count() == 0
