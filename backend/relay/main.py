from datetime import datetime, timezone

from flask import Blueprint, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the xo relay server!'})

@main.route('/ping')
def ping():
    return jsonify({'success': True}), 200

@main.route('/status')
def status():
    return jsonify({'time': datetime.now(timezone.utc).isoformat(), 'status': 'running'})

@main.app_errorhandler(404)
def not_found(error):
    return jsonify({'success': False, 'message': 'route not found'}), 404

@main.app_errorhandler(405)
def method_not_allowed(error):
    return jsonify({'success': False, 'message': 'method not allowed'}), 405
