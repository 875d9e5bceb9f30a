# utils/auth.py
import jwt
from functools import wraps
from flask import current_app, request, jsonify
import logging

logger = logging.getLogger(__name__)

def _unauthorized():
    return jsonify({'error': 'Unauthorized'}), 401

def get_bearer_token():
    """Return the token from an 'Authorization: Bearer <token>' header, or None"""
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != 'bearer' or not parts[1]:
        return None
    return parts[1]

def decode_token(token):
    """Decode a JWT signed with the configured secret and return its subject"""
    data = jwt.decode(
        token,
        current_app.config['JWT_SECRET'],
        algorithms=["HS256"],
        audience=current_app.config['JWT_AUDIENCE']
    )
    return data['sub']

def token_required(f):
    """Decorator to protect routes with JWT"""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            logger.warning(f"Missing or malformed Authorization header for: {request.path}")
            return _unauthorized()

        if not current_app.config.get('JWT_SECRET'):
            logger.error("JWT_SECRET is not configured; rejecting request.")
            return _unauthorized()

        try:
            current_user_id = decode_token(token)
        except jwt.ExpiredSignatureError:
            logger.warning("Token has expired.")
            return _unauthorized()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            return _unauthorized()
        except KeyError:
            logger.warning("Token has no 'sub' claim.")
            return _unauthorized()

        return f(current_user_id, *args, **kwargs)

    return decorated
