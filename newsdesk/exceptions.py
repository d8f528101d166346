class NewsdeskException(Exception):
    """Base exception for the newsroom app; rendered as JSON by the API error handler"""
    def __init__(self, message, code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['code'] = self.code
        rv['success'] = False
        return rv


class ValidationError(NewsdeskException):
    """Rejected query or form input; `errors` maps each offending parameter to its problem"""
    def __init__(self, errors, message="Invalid request parameters"):
        super().__init__(message, code=400, payload={'errors': dict(errors)})


class NotFound(NewsdeskException):
    """No visible row of `resource` matches `key` (drafts count as missing)"""
    def __init__(self, resource, key):
        super().__init__(f"No published {resource} matches '{key}'", code=404,
                         payload={'resource': resource, 'key': key})


class MaintenanceMode(NewsdeskException):
    def __init__(self):
        super().__init__("The site is down for maintenance", code=503,
                         payload={'retry': True})
