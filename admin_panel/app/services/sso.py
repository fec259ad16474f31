from abc import ABC, abstractmethod

from starlette.requests import Request
from starlette.responses import Response


class SSOProvider(ABC):
    """Single sign-on integration supplied by the host application"""

    @abstractmethod
    async def auth(self, request: Request) -> Response:
        """Start the SSO handshake, usually a redirect to the identity provider"""
        pass

    @abstractmethod
    async def callback(self, request: Request) -> Response:
        """Finish the handshake and log the backend user in"""
        pass
