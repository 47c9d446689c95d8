from triviabot import create_app, socketio
from triviabot.services.trivia.scheduler import start_question_rotator

app = create_app()

if __name__ == '__main__':
    # Rotation runs as a Socket.IO background task next to the web server
    start_question_rotator(app)
    socketio.run(app, debug=True, use_reloader=False)
