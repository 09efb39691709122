from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import logging
from config import Config

socketio = SocketIO(async_mode=None)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(config_class=Config, questions=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    setup_logging(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config['CORS_ORIGINS']
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from mathemix.services.games.coordinator import RoomCoordinator
    from mathemix.services.games.questions import QuestionBank
    from mathemix.services.games.store import RoomStore

    if questions is None:
        questions = QuestionBank.from_file(flask_app.config['QUESTIONS_PATH'])
    flask_app.extensions['mathemix'] = RoomCoordinator(
        RoomStore(),
        questions,
        default_category=flask_app.config['DEFAULT_CATEGORY'],
        room_code_length=flask_app.config['ROOM_CODE_LENGTH'],
    )

    from mathemix.main import main
    flask_app.register_blueprint(main)

    # Importing here ensures the handlers bind to the initialized socketio instance
    from mathemix.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    flask_app.logger.info(f"[app-ready] categories={len(questions.categories())} origins={allowed_origins}")
    return flask_app
