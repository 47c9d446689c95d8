from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from triviabot.api.trivia import trivia
    flask_app.register_blueprint(trivia, url_prefix='/api')

    # Push channel used by the TV display to learn about question rotations
    try:
        from triviabot.socketio_events import register_socketio_handlers
        register_socketio_handlers(testing=flask_app.config.get('TESTING', False))
    except Exception as exc:
        flask_app.logger.warning(f"SocketIO events not loaded: {exc}")

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from triviabot.models import User
        from triviabot.services.trivia.questions import create_question
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            host = User(external_id='UQUIZHOST', display_name='Quiz Host')
            db.session.add(host)
            db.session.commit()

            seeds = [
                ('Is Python named after Monty Python?', ['Yes', 'No'], 1),
                ('Which planet is the largest?', ['Mars', 'Jupiter', 'Venus'], 2),
                ('How many bits in a byte?', ['4', '8', '16', '32'], 2),
            ]
            for text, answers, correct in seeds:
                create_question(host.id, text, answers, correct)

            print('Database has been reset and seeded!')

    @click.command('rotate')
    def rotate_command():
        """Closes the current round and activates the next question."""
        from triviabot.errors import TriviaError
        from triviabot.services.trivia.rounds import rotate
        with flask_app.app_context():
            try:
                result = rotate()
            except TriviaError as exc:
                raise click.ClickException(exc.message)
            print(f"Activated question {result.activated.id}; {result.awarded} user(s) awarded.")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(rotate_command)

    return flask_app
