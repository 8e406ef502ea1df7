from flask import Blueprint, current_app, jsonify


rooms = Blueprint('rooms', __name__)


def app_response(data=None, message=None, status_code=200):
    """Standard success envelope shared by the HTTP endpoints."""
    return jsonify({
        'success': True,
        'data': data,
        'message': message or 'Success',
    }), status_code


@rooms.route('', methods=['GET'])
def list_rooms():
    lifecycle = current_app.extensions['room_lifecycle']
    return app_response(lifecycle.rooms_snapshot(), 'Data retrieved successfully')


@rooms.route('/<string:name>', methods=['GET'])
def get_room(name):
    summary = current_app.extensions['room_lifecycle'].room_summary(name)
    if summary is None:
        return jsonify({'success': False, 'message': 'game does not exist'}), 404
    return app_response(summary, 'Data retrieved successfully')
