import os

_BACKEND_ROOT = os.path.dirname(os.path.abspath(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '4000'))
    # Comma separated list of origins allowed to open a socket
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get('CORS_ORIGINS', 'https://mathemix-9c8ba.web.app').split(',') if o.strip()
    ]
    # Category a room plays until the host picks one
    DEFAULT_CATEGORY = os.environ.get('DEFAULT_CATEGORY', 'Number & Algebra')
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '5'))
    MAX_NICKNAME_LENGTH = int(os.environ.get('MAX_NICKNAME_LENGTH', '20'))
    QUESTIONS_PATH = os.environ.get('QUESTIONS_PATH') or os.path.join(
        _BACKEND_ROOT, 'mathemix', 'data', 'questions.json'
    )
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
