"""
Domain outcomes returned by the friendship and assistance services.

Outcomes are normal return values describing which branch of the business
logic fired; they are never raised.
"""
from enum import Enum
from typing import Union


class FriendRequestOutcome(str, Enum):
    """Result of a friend request operation"""

    SENT = "sent"
    ALREADY_SENT = "already_sent"
    ACCEPTED = "accepted"
    ALREADY_FRIENDS = "already_friends"
    CANNOT_SELF_REQUEST = "cannot_self_request"
    CANNOT_SELF_ACCEPT = "cannot_self_accept"
    DELETED = "deleted"
    NOT_FOUND = "not_found"

    @property
    def message(self) -> str:
        return _FRIEND_REQUEST_MESSAGES[self][0]

    @property
    def status(self) -> str:
        """State of the relationship after the operation"""
        return _FRIEND_REQUEST_MESSAGES[self][1]


_FRIEND_REQUEST_MESSAGES = {
    FriendRequestOutcome.SENT: (
        "Friend request sent successfully to external user", "pending"),
    FriendRequestOutcome.ALREADY_SENT: (
        "Friend request was already sent to external user", "pending"),
    FriendRequestOutcome.ACCEPTED: (
        "Friend request received from external user has been accepted", "accepted"),
    FriendRequestOutcome.ALREADY_FRIENDS: (
        "External user is already your friend", "accepted"),
    FriendRequestOutcome.CANNOT_SELF_REQUEST: (
        "You cannot request to be your own friend", "cannot_self_request"),
    FriendRequestOutcome.CANNOT_SELF_ACCEPT: (
        "You cannot accept your own friend request", "cannot_self_accept"),
    FriendRequestOutcome.DELETED: (
        "Friend request received from external user has been rejected "
        "or mutual friendship has been deleted", "deleted"),
    FriendRequestOutcome.NOT_FOUND: (
        "Friend request or friendship not found", "not_found"),
}


class AssistanceOutcome(str, Enum):
    """Result of an assistance operation"""

    JOINED = "joined"
    ALREADY_JOINED = "already_joined"
    RATED = "rated"
    LEFT = "left"

    @property
    def message(self) -> str:
        return _ASSISTANCE_MESSAGES[self]

    @property
    def status(self) -> str:
        return self.value


_ASSISTANCE_MESSAGES = {
    AssistanceOutcome.JOINED: "Assistance created",
    AssistanceOutcome.ALREADY_JOINED: "Assistance already exists",
    AssistanceOutcome.RATED: "Assistance rated",
    AssistanceOutcome.LEFT: "Assistance deleted",
}


Outcome = Union[FriendRequestOutcome, AssistanceOutcome]
