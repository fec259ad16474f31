from fastapi import status

from admin_panel.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


class RedirectError(Exception):
    """Short-circuits a request with a redirect and a flash message"""

    def __init__(self, location: str, message: str, kind: str = "error"):
        self.location = location
        self.message = message
        self.kind = kind
        super().__init__(message)
