from flask import current_app, request, session
from flask_jwt_extended import decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_socketio import ConnectionRefusedError, emit, join_room, leave_room
from jwt.exceptions import PyJWTError
from skillswap import socketio


def user_room(user_id):
    return f"user:{user_id}"


def notify_user(user_id, event, payload):
    """Push an event to every socket the user has joined with."""
    socketio.emit(event, payload, to=user_room(user_id))
    print(f"[DEBUG] Sent '{event}' to room {user_room(user_id)}")


def notify_agreement(agreement, event, actor_id):
    """Tell the other party of ``agreement`` about a change ``actor_id`` made."""
    other = agreement.seeker_id if actor_id == agreement.provider_id else agreement.provider_id
    notify_user(other, event, agreement.to_dict())


def get_user_id_from_token(token):
    decoded_token = decode_token(token)
    return str(decoded_token[current_app.config['JWT_IDENTITY_CLAIM']])


# WebSocket events for agreement notifications
@socketio.on('connect')
def handle_connect(auth=None):
    """Sockets authenticate with the same bearer token as the HTTP API."""
    token = (auth or {}).get('token') or request.args.get('token')
    if not token:
        raise ConnectionRefusedError('Token is missing!')

    try:
        user_id = get_user_id_from_token(token)
    except (JWTExtendedException, PyJWTError) as e:
        print(f"[ERROR] Socket connection refused: {e}")
        raise ConnectionRefusedError('Invalid or expired token!')

    session['user_id'] = user_id
    join_room(user_room(user_id))
    print(f"[DEBUG] User {user_id} connected, joined room {user_room(user_id)}")


# Sockets only ever subscribe to their own user's room
@socketio.on('join')
def handle_join(data=None):
    room = user_room(session['user_id'])
    join_room(room)
    emit('status', {'message': f"Subscribed to {room}"}, to=request.sid)


@socketio.on('leave')
def handle_leave(data=None):
    room = user_room(session['user_id'])
    leave_room(room)
    print(f"[DEBUG] Left room: {room}")
