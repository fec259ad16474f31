from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.responses import Response

from admin_panel.api.flash import get_session
from admin_panel.app.services.session import pop_fieldset, pop_flashes


class ViewRenderer(ABC):
    """Turns a view name and a data bag into a response body"""

    @abstractmethod
    def render(
        self,
        request: Request,
        view: str,
        data: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_200_OK,
    ) -> Response:
        pass


class JSONViewRenderer(ViewRenderer):
    """
    Renders views as JSON documents.

    Host applications that serve HTML supply their own ViewRenderer.
    Pending flash messages and fieldset errors are consumed here, the
    same way a template would consume them.
    """

    def render(
        self,
        request: Request,
        view: str,
        data: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_200_OK,
    ) -> Response:
        session = get_session(request)
        backend_user = getattr(request.state, "backend_user", None)
        content = {
            "view": view,
            "data": data or {},
            "flash": pop_flashes(session),
            "fieldset": pop_fieldset(session),
            "backend_user": backend_user.model_dump() if backend_user else None,
        }
        return JSONResponse(status_code=status_code, content=jsonable_encoder(content))
