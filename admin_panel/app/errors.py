"""
Application Error Taxonomy

Typed errors carried inside Results. The API layer maps them to
redirects, client errors or server errors.
"""

from admin_panel.libs.result import Error


class NotFoundError(Error):
    """Token or user lookup miss"""

    code = "NOT_FOUND"


class InvalidOrExpiredError(Error):
    """Token exists but is used or expired"""

    code = "INVALID_OR_EXPIRED"


class ValidationError(Error):
    """Submitted data failed a check (password mismatch, policy, form fields)"""

    code = "VALIDATION_ERROR"

    def __init__(self, code=None, message: str = "", fields=None):
        super().__init__(code, message)
        self.fields = fields or {}


class ConfigurationError(Error):
    """Deployment misconfiguration such as a missing SSO provider"""

    code = "CONFIGURATION_ERROR"


class ForbiddenError(Error):
    """Authenticated user lacks the role for the action"""

    code = "FORBIDDEN"


class SessionExpiredError(Error):
    """No authenticated backend user could be resolved from the session"""

    code = "SESSION_EXPIRED"


class GuardRedirect(Error):
    """Guard outcome that short-circuits the request with a redirect"""

    code = "REDIRECT"

    def __init__(self, location: str, message: str, kind: str = "error"):
        super().__init__(None, message)
        self.location = location
        self.kind = kind
