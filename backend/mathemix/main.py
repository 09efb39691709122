from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Mathemix game server!'})


@main.route('/health')
def health():
    coordinator = current_app.extensions['mathemix']
    return jsonify({'status': 'healthy', 'rooms': len(coordinator.store)})


@main.route('/categories')
def categories():
    """Categories a host may pass to startGame."""
    coordinator = current_app.extensions['mathemix']
    return jsonify({'categories': coordinator.questions.categories()})
