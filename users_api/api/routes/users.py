"""Users Routes: HTTP binding of the six profile operations plus the full listing.

Invariants:
    - Every user in a response carries self/users/update/replace/delete links
    - POST and PUT answer 201 with Location = self link; PATCH answers 200 with Location
    - DELETE answers 204 with no body
    - /by-birthdate-range is registered before /{email} so it is never read as an email
    - Domain errors propagate to the global handlers (api/error_handlers.py)

Design Decisions:
    - Sync handlers: UserService is in-memory and lock-based, FastAPI runs it in its threadpool
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import PastDate

from users_api.api.dependencies import get_user_service
from users_api.core.user import User
from users_api.schemas.user import (
    Link, UserCollectionResponse, UserCreate, UserList, UserPatch, UserResponse,
)
from users_api.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def _links_for(request: Request, user: User) -> dict[str, str]:
    one = str(request.url_for("get_user", email=user.email))
    return {
        "self": one,
        "users": str(request.url_for("list_users")),
        "update": str(request.url_for("update_user", email=user.email)),
        "replace": str(request.url_for("replace_user", email=user.email)),
        "delete": str(request.url_for("delete_user", email=user.email)),
    }


def _to_model(request: Request, user: User) -> UserResponse:
    return UserResponse.from_user(user, _links_for(request, user))


def _to_collection(
    request: Request, users: list[User], self_href: str,
) -> UserCollectionResponse:
    return UserCollectionResponse(
        embedded=UserList(user_list=[_to_model(request, u) for u in users]),
        links={"self": Link(href=self_href)},
    )


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    body: UserCreate,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """Create a new user (minimum age enforced)."""
    model = _to_model(request, service.add_user(body.to_user()))
    response.headers["Location"] = model.links["self"].href
    return model


@router.get("", response_model=UserCollectionResponse)
def list_users(
    request: Request, service: UserService = Depends(get_user_service),
):
    """All users, insertion order."""
    return _to_collection(
        request, service.find_all_users(), str(request.url_for("list_users")),
    )


@router.get("/by-birthdate-range", response_model=UserCollectionResponse)
def users_by_birth_date_range(
    request: Request,
    date_from: PastDate = Query(alias="from"),
    date_to: PastDate = Query(alias="to"),
    service: UserService = Depends(get_user_service),
):
    """Users born strictly between `from` and `to`."""
    users = service.find_users_by_birth_date_range(date_from, date_to)
    return _to_collection(request, users, str(request.url))


@router.get("/{email}", response_model=UserResponse)
def get_user(
    email: str, request: Request,
    service: UserService = Depends(get_user_service),
):
    return _to_model(request, service.find_user_by_email(email))


@router.patch("/{email}", response_model=UserResponse)
def update_user(
    email: str,
    body: UserPatch,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """Apply the sent fields to an existing user."""
    model = _to_model(request, service.update_user(email, body.to_update()))
    response.headers["Location"] = model.links["self"].href
    return model


@router.put(
    "/{email}", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
def replace_user(
    email: str,
    body: UserCreate,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """Replace the user under `email`, creating it when absent."""
    model = _to_model(request, service.replace_user(email, body.to_user()))
    response.headers["Location"] = model.links["self"].href
    return model


@router.delete("/{email}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    email: str, service: UserService = Depends(get_user_service),
):
    service.delete_user(email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
