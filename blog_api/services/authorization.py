"""
Authorization decisions for mutations

is_authorized is the single place access rules live. There is no admin
bypass; roles would be added here.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from blog_api.core.exceptions import AuthorizationError


class Action(str, Enum):
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    DELETE_USER = "delete_user"


DENIAL_MESSAGES = {
    Action.UPDATE_POST: "You can only update your own posts",
    Action.DELETE_POST: "You can only delete your own posts",
    Action.DELETE_USER: "You cannot delete your own account",
}


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(allowed=True)


def is_authorized(requester_id: Optional[int], resource_owner_id: int, action: Action) -> Decision:
    """
    Post mutations: allowed only for the post's author.
    User deletion: resource_owner_id is the target id; denied when it is the requester.
    """
    if requester_id is None:
        return Decision(allowed=False, reason=DENIAL_MESSAGES[action])

    if action in (Action.UPDATE_POST, Action.DELETE_POST):
        if requester_id == resource_owner_id:
            return ALLOW
        return Decision(allowed=False, reason=DENIAL_MESSAGES[action])

    if action is Action.DELETE_USER:
        if requester_id == resource_owner_id:
            return Decision(allowed=False, reason=DENIAL_MESSAGES[action])
        return ALLOW

    raise ValueError(f"Unknown action: {action}")


def ensure_authorized(requester_id: Optional[int], resource_owner_id: int, action: Action) -> None:
    decision = is_authorized(requester_id, resource_owner_id, action)
    if not decision:
        raise AuthorizationError(decision.reason)
