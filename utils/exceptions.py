"""
Error taxonomy for the Academic Metrics Engine
"""

class MetricsError(Exception):
    """Base class for errors surfaced to API callers"""
    status_code = 400

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {'success': False, 'message': self.message}
        if self.details:
            body['details'] = self.details
        return body

class ValidationError(MetricsError):
    """Missing or malformed ids, dates, statuses or marks"""
    status_code = 400

class AuthorizationError(MetricsError):
    """Caller lacks the section/subject assignment or permission flag"""
    status_code = 403

class NotFoundError(MetricsError):
    """Referenced section, subject, exam, result, grade or student is absent"""
    status_code = 404

class ConflictError(MetricsError):
    """A write collided with an existing row"""
    status_code = 409

class ComputationSkipped(Exception):
    """A derived summary was computed but not persisted; logged, never fatal"""

    def __init__(self, message, result=None):
        super().__init__(message)
        self.message = message
        self.result = result

class AuthenticationError(MetricsError):
    """No caller identity was supplied by the gateway"""
    status_code = 401
