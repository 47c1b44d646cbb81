"""Team member API endpoints."""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from teamaccess.api.datatables import DataTablesParams, datatables_response
from teamaccess.auth.middleware import require_ajax, require_auth
from teamaccess.auth.models import User, UserAccount
from teamaccess.billing.plans import plan_limit_service
from teamaccess.groups.service import facebook_group_service
from teamaccess.logging_config import get_logger
from teamaccess.teams.schemas import (
    CheckEmailRequest,
    DestroyTeamMemberRequest,
    EmailSuggestionRequest,
    StoreTeamMemberRequest,
    UpdateTeamMemberRequest,
)
from teamaccess.teams.service import TeamMemberError, team_member_service

router = APIRouter(prefix="/team-members", tags=["team-members"])
logger = get_logger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

CAPACITY_MESSAGE = "You have reached the limit of the adding new team members"
INVALID_GROUPS_MESSAGE = "The selected facebook groups are invalid."
TOKEN_STORAGE_KEY = "teamaccess_token"


def _hide_create_button(owner: UserAccount) -> bool:
    return not plan_limit_service.can_add_team_members(owner)


def _ensure_groups_belong_to_owner(owner: UserAccount, group_ids: list[int] | None) -> None:
    """Reject group ids the owner does not own."""
    foreign = facebook_group_service.foreign_group_ids(owner.id, group_ids or [])
    if foreign:
        logger.warning("foreign_groups_rejected", owner_id=owner.id, group_ids=foreign)
        raise HTTPException(status_code=422, detail=INVALID_GROUPS_MESSAGE)


# ─── Pages ───────────────────────────────────────────────────────────────────

@router.get("", response_class=HTMLResponse)
async def team_members_page(
    request: Request,
    current_user: UserAccount = Depends(require_auth),
):
    """Show the team members page with the owner's Facebook groups."""
    groups = facebook_group_service.get_owner_groups(current_user.id)

    return templates.TemplateResponse(
        request,
        "teammembers.html",
        {
            "group": groups,
            "user": User.model_validate(current_user),
            "api_base": request.url.path.rstrip("/"),
            "token_storage_key": TOKEN_STORAGE_KEY,
            "hide_create_button": _hide_create_button(current_user),
        },
    )


@router.get("/data")
async def get_data(
    name: str | None = None,
    email: str | None = None,
    params: DataTablesParams = Depends(DataTablesParams.as_query),
    current_user: UserAccount = Depends(require_auth),
):
    """Team members of the current owner in DataTables format.

    Optional ``name`` and ``email`` query parameters filter by substring.
    The DataTables global search and column ordering are honored too.
    """
    total, filtered, rows = team_member_service.list_team_members(
        owner_id=current_user.id,
        name=name,
        email=email,
        start=params.start,
        length=params.length,
        search=params.search,
        order=params.order,
    )

    return datatables_response(params, total, filtered, rows)


# ─── Ajax endpoints ──────────────────────────────────────────────────────────

@router.post("/check-email", dependencies=[Depends(require_ajax)])
async def check_team_members_email(
    request: CheckEmailRequest,
    current_user: UserAccount = Depends(require_auth),
):
    """Check whether the email belongs to a member of the owner's team."""
    count, user = team_member_service.check_email(current_user.id, request.email)

    return {
        "count": count,
        "data": user,
        "message": "successfully",
    }


@router.post("/email-suggestions", dependencies=[Depends(require_ajax)])
async def get_email_suggestions(
    request: EmailSuggestionRequest,
    current_user: UserAccount = Depends(require_auth),
):
    """Email autosuggestions for the add member form."""
    return team_member_service.suggest_emails(request.search)


@router.post("/destroy", dependencies=[Depends(require_ajax)])
async def destroy_team_member(
    request: DestroyTeamMemberRequest,
    current_user: UserAccount = Depends(require_auth),
):
    """Remove a team member from the owner's team."""
    try:
        team_member_service.remove_team_member(current_user.id, request.id)
    except Exception as e:
        logger.warning(
            "team_member_remove_failed",
            owner_id=current_user.id,
            team_member_id=request.id,
            error=str(e),
        )
        return {
            "code": 400,
            "message": str(e),
            "data": "",
        }

    return {
        "code": 200,
        "message": "Team Members Deleted Successfully.",
        "data": {"hide_create_button": _hide_create_button(current_user)},
    }


@router.get("/{member_id}", dependencies=[Depends(require_ajax)])
async def get_team_member(
    member_id: int,
    current_user: UserAccount = Depends(require_auth),
):
    """Get a team member and the ids of the groups they can access."""
    member = team_member_service.get_team_member(current_user.id, member_id)

    if member is None:
        return {
            "code": 401,
            "message": "Unauthorized",
            "data": "",
        }

    return {
        "code": 200,
        "message": "Successfully.",
        "user": member["user"],
        "fb_id": member["fb_id"],
    }


@router.post("", dependencies=[Depends(require_ajax)])
async def store_team_member(
    request: StoreTeamMemberRequest,
    current_user: UserAccount = Depends(require_auth),
):
    """Add a team member if the owner's plan has capacity left."""
    _ensure_groups_belong_to_owner(current_user, request.facebook_groups_id)

    if not plan_limit_service.can_add_team_members(current_user):
        logger.info("team_member_limit_reached", owner_id=current_user.id)
        return JSONResponse(
            status_code=500,
            content={
                "message": CAPACITY_MESSAGE,
                "data": {"hide_create_button": True},
            },
        )

    result = team_member_service.add_team_member(
        current_user.id,
        request.model_dump(include={"email", "name", "facebook_groups_id"}),
    )

    return JSONResponse(
        status_code=200 if result["success"] else 400,
        content={
            "message": result["message"],
            "data": {"hide_create_button": _hide_create_button(current_user)},
        },
    )


@router.put("/{member_id}", dependencies=[Depends(require_ajax)])
async def update_team_member(
    member_id: int,
    request: UpdateTeamMemberRequest,
    current_user: UserAccount = Depends(require_auth),
):
    """Replace the groups a team member can access.

    Every existing assignment is overwritten by the submitted list.
    """
    _ensure_groups_belong_to_owner(current_user, request.facebook_groups_id)

    try:
        team_member_service.sync_group_access(current_user.id, member_id, request.facebook_groups_id)
    except TeamMemberError as e:
        return JSONResponse(
            status_code=401,
            content={
                "status": "error",
                "message": str(e),
                "data": [],
            },
        )

    return {
        "status": "success",
        "message": "Team Member Details Updated Successfully.",
        "data": {"hide_create_button": _hide_create_button(current_user)},
    }
