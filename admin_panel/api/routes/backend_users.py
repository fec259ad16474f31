from typing import Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Form, Request, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from admin_panel.api.error import ClientError, ServerError
from admin_panel.api.flash import ERROR, SUCCESS, get_session, redirect_with_flash
from admin_panel.api.views import ViewRenderer
from admin_panel.app.errors import ForbiddenError, NotFoundError, ValidationError
from admin_panel.app.services.gate import Gate
from admin_panel.app.services.mailer import IMailer
from admin_panel.app.services.session import SessionAuthenticator
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.app.use_cases.backend_users import (
    BackendUserForm,
    BackendUserFormOptions,
    CreateBackendUserUseCase,
    DeleteBackendUserUseCase,
    GetBackendUserUseCase,
    ListBackendUsersUseCase,
    UpdateBackendUserUseCase,
)
from admin_panel.app.use_cases.backend_users.permissions import ADMIN_ROLE, require_admin
from admin_panel.config import AdminPanelConfig
from admin_panel.depends import (
    get_authenticator,
    get_config,
    get_gate,
    get_background_mailer,
    get_renderer,
    get_unit_of_work,
    require_backend_user,
)
from admin_panel.domain.entities import BackendUserView
from admin_panel.libs.result import Error

# Every route below passes the authentication guard first
router = APIRouter(dependencies=[Depends(require_backend_user)])


def _raise_for(error: Error):
    if isinstance(error, ForbiddenError):
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    if isinstance(error, NotFoundError):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


def _parse_form(**values) -> Tuple[Optional[BackendUserForm], Dict[str, List[str]]]:
    try:
        return BackendUserForm(**values), {}
    except PydanticValidationError as e:
        errors: Dict[str, List[str]] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "form"
            errors.setdefault(field, []).append(err["msg"])
        return None, errors


def _fieldset(name: str, email: str, role: Optional[str], errors: Dict[str, List[str]]):
    """Submitted values (never passwords) and errors for one form re-render"""
    return {"values": {"name": name, "email": email, "role": role}, "errors": errors}


def _email_taken(request: Request, url: str, name: str, email: str, role: Optional[str]):
    """A concurrent write claimed the email between the uniqueness check and the commit"""
    return redirect_with_flash(
        request,
        url,
        "Validation error",
        ERROR,
        _fieldset(name, email, role, {"email": ["E-mail is already in use"]}),
    )


def _form_options(gate: Gate, actor: BackendUserView, config: AdminPanelConfig) -> dict:
    return BackendUserFormOptions(
        roles=gate.role_options(actor.role), default_role=config.DEFAULT_ROLE
    ).model_dump()


@router.get("/dashboard")
async def dashboard(request: Request, renderer: ViewRenderer = Depends(get_renderer)):
    return renderer.render(request, "Dashboard/index")


@router.get("/logout")
async def logout(
    request: Request,
    authenticator: SessionAuthenticator = Depends(get_authenticator),
    config: AdminPanelConfig = Depends(get_config),
):
    authenticator.unauthenticate(get_session(request))
    return redirect_with_flash(request, config.url(""), "User is logged out", ERROR)


@router.get("/backend_users")
async def index(
    request: Request,
    search: Optional[str] = None,
    actor: BackendUserView = Depends(require_backend_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gate: Gate = Depends(get_gate),
    renderer: ViewRenderer = Depends(get_renderer),
):
    """
    List backend users (admin only)

    Raises:
        - 403 Forbidden: Acting user is not an admin
    """
    result = await ListBackendUsersUseCase(uow, gate).execute(actor, search)
    if result.is_err():
        _raise_for(result.error)

    return renderer.render(request, "BackendUsers/index", result.value.model_dump())


@router.get("/backend_users/create")
async def create(
    request: Request,
    actor: BackendUserView = Depends(require_backend_user),
    gate: Gate = Depends(get_gate),
    config: AdminPanelConfig = Depends(get_config),
    renderer: ViewRenderer = Depends(get_renderer),
):
    allowed = require_admin(gate, actor)
    if allowed.is_err():
        _raise_for(allowed.error)

    return renderer.render(request, "BackendUsers/edit", _form_options(gate, actor, config))


@router.post("/backend_users/store")
async def store(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    role: Optional[str] = Form(None),
    password: str = Form(""),
    password_repeat: str = Form(""),
    random_password: bool = Form(False),
    should_reset_password: bool = Form(False),
    send_mail: bool = Form(False),
    actor: BackendUserView = Depends(require_backend_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: IMailer = Depends(get_background_mailer),
    gate: Gate = Depends(get_gate),
    config: AdminPanelConfig = Depends(get_config),
):
    """
    Create a backend user (admin only)

    Validation failures redirect back to the create form with the fieldset.
    """
    create_url = config.url("/backend_users/create")

    form, errors = _parse_form(
        name=name,
        email=email,
        role=role,
        password=password,
        password_repeat=password_repeat,
        random_password=random_password,
        should_reset_password=should_reset_password,
        send_mail=send_mail,
    )
    if form is None:
        return redirect_with_flash(
            request, create_url, "Validation error", ERROR, _fieldset(name, email, role, errors)
        )

    use_case = CreateBackendUserUseCase(uow, mailer, gate, config)
    try:
        result = await use_case.execute(actor, form)
    except IntegrityError:
        return _email_taken(request, create_url, name, email, role)

    if result.is_err():
        error = result.error
        if isinstance(error, ValidationError):
            return redirect_with_flash(
                request,
                create_url,
                error.message,
                ERROR,
                _fieldset(name, email, role, error.fields),
            )
        if isinstance(error, ForbiddenError):
            _raise_for(error)
        return redirect_with_flash(request, create_url, "Failed to create user", ERROR)

    return redirect_with_flash(request, config.url("/backend_users"), "User created", SUCCESS)


@router.get("/backend_users/edit/{user_id}")
async def edit(
    request: Request,
    user_id: int,
    actor: BackendUserView = Depends(require_backend_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gate: Gate = Depends(get_gate),
    config: AdminPanelConfig = Depends(get_config),
    renderer: ViewRenderer = Depends(get_renderer),
):
    """
    Edit form for a backend user. Own profile is always reachable.

    Raises:
        - 403 Forbidden: Editing someone else without the required roles
        - 404 Not Found: No such user
    """
    result = await GetBackendUserUseCase(uow, gate).execute(actor, user_id)
    if result.is_err():
        _raise_for(result.error)

    data = _form_options(gate, actor, config)
    data["backend_user"] = result.value.model_dump()
    return renderer.render(request, "BackendUsers/edit", data)


@router.post("/backend_users/update")
async def update(
    request: Request,
    user_id: int = Form(..., alias="id"),
    name: str = Form(""),
    email: str = Form(""),
    role: Optional[str] = Form(None),
    password: str = Form(""),
    password_repeat: str = Form(""),
    should_reset_password: bool = Form(False),
    actor: BackendUserView = Depends(require_backend_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gate: Gate = Depends(get_gate),
    config: AdminPanelConfig = Depends(get_config),
):
    """
    Update a backend user.

    Admins land on the user list afterwards, everyone else back on
    their own edit form.
    """
    edit_url = config.url(f"/backend_users/edit/{user_id}")

    form, errors = _parse_form(
        name=name,
        email=email,
        role=role,
        password=password,
        password_repeat=password_repeat,
        should_reset_password=should_reset_password,
    )
    if form is None:
        return redirect_with_flash(
            request, edit_url, "Validation error", ERROR, _fieldset(name, email, role, errors)
        )

    try:
        result = await UpdateBackendUserUseCase(uow, gate, config).execute(actor, user_id, form)
    except IntegrityError:
        return _email_taken(request, edit_url, name, email, role)

    if result.is_err():
        error = result.error
        if isinstance(error, ValidationError):
            return redirect_with_flash(
                request, edit_url, error.message, ERROR, _fieldset(name, email, role, error.fields)
            )
        if isinstance(error, (ForbiddenError, NotFoundError)):
            _raise_for(error)
        return redirect_with_flash(request, edit_url, "Failed to update user", ERROR)

    if gate.allow(actor.role, ADMIN_ROLE):
        return redirect_with_flash(request, config.url("/backend_users"), "User updated")
    return redirect_with_flash(request, edit_url, "User updated")


@router.post("/backend_users/delete/{user_id}")
async def destroy(
    request: Request,
    user_id: int,
    actor: BackendUserView = Depends(require_backend_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    gate: Gate = Depends(get_gate),
    config: AdminPanelConfig = Depends(get_config),
):
    index_url = config.url("/backend_users")

    result = await DeleteBackendUserUseCase(uow, gate).execute(actor, user_id)
    if result.is_err():
        error = result.error
        if isinstance(error, ForbiddenError):
            _raise_for(error)
        return redirect_with_flash(request, index_url, "Failed to delete user", ERROR)

    return redirect_with_flash(request, index_url, "Deleted user", SUCCESS)
