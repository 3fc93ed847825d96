from flask import jsonify


class SkillSwapError(Exception):
    """Base class for errors reported back to the caller."""

    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_response(self):
        return jsonify({'error': self.message}), self.status_code


class ValidationError(SkillSwapError):
    status_code = 400


class NotFoundError(SkillSwapError):
    status_code = 404


class TransitionError(SkillSwapError):
    """An agreement status change that the lifecycle does not allow."""

    STATUS_CODES = {
        'unknown_action': 400,
        'not_a_party': 403,
        'forbidden_actor': 403,
        'terminal_state': 409,
        'illegal_transition': 409,
        'stale_status': 409,
    }

    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind
        self.status_code = self.STATUS_CODES.get(kind, 400)

    def to_response(self):
        return jsonify({'error': self.message, 'kind': self.kind}), self.status_code
