"""
Friendship service - friend requests and friendships between users
"""
from typing import List, Optional
import logging

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import storage_errors
from app.core.outcomes import FriendRequestOutcome
from app.models.social import Friendship, FriendshipStatus, Message
from app.models.user import User
from app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


class FriendshipService:
    """
    Service for friend request / friendship operations.

    A pair of users shares at most one friends row. The row keeps the original
    requester in user_id even after it is accepted, since both acceptance and
    "already sent" detection depend on who asked first.
    """

    def __init__(self, db: Session, cascade_delete_messages: Optional[bool] = None):
        self.db = db
        if cascade_delete_messages is None:
            cascade_delete_messages = settings.FRIENDSHIP_DELETE_CASCADES_MESSAGES
        self.cascade_delete_messages = cascade_delete_messages

    def find_pair_row(self, user_id: int, other_user_id: int) -> Optional[Friendship]:
        """Get the friends row between two users, whichever of them sent the request"""
        with storage_errors(self.db, "fetching a friend request"):
            return self.db.query(Friendship).filter(
                or_(
                    and_(Friendship.user_id == user_id, Friendship.user_id_friend == other_user_id),
                    and_(Friendship.user_id == other_user_id, Friendship.user_id_friend == user_id)
                )
            ).first()

    def create_friend_request(self, requester_id: int, target_id: int) -> FriendRequestOutcome:
        """
        Send a friend request from requester_id to target_id.

        If target_id had already sent a request to requester_id, the existing
        request is accepted instead of creating a second row.
        """
        if requester_id == target_id:
            return FriendRequestOutcome.CANNOT_SELF_REQUEST

        with storage_errors(self.db, "creating a friend request"):
            try:
                return self._request(requester_id, target_id)
            except IntegrityError:
                # The other user inserted a row for this pair concurrently
                self.db.rollback()
                logger.info(
                    f"Friend request {requester_id} -> {target_id} raced with an insert, retrying"
                )
                return self._request(requester_id, target_id)

    def _request(self, requester_id: int, target_id: int) -> FriendRequestOutcome:
        existing = self.find_pair_row(requester_id, target_id)

        if existing is None:
            self.db.add(Friendship(
                user_id=requester_id,
                user_id_friend=target_id,
                status=FriendshipStatus.PENDING
            ))
            self.db.commit()
            logger.info(f"Friend request sent: {requester_id} -> {target_id}")
            return FriendRequestOutcome.SENT

        if not existing.is_pending:
            return FriendRequestOutcome.ALREADY_FRIENDS

        if existing.user_id == requester_id:
            return FriendRequestOutcome.ALREADY_SENT

        # They already sent us a request - accept it
        self._accept(existing)
        return FriendRequestOutcome.ACCEPTED

    def accept_friend_request(self, user_id: int, external_user_id: int) -> FriendRequestOutcome:
        """Accept the request external_user_id sent to user_id"""
        with storage_errors(self.db, "accepting a friend request"):
            existing = self.find_pair_row(user_id, external_user_id)

            if existing is None:
                return FriendRequestOutcome.NOT_FOUND

            if not existing.is_pending:
                return FriendRequestOutcome.ALREADY_FRIENDS

            if existing.user_id == user_id:
                return FriendRequestOutcome.CANNOT_SELF_ACCEPT

            self._accept(existing)
            return FriendRequestOutcome.ACCEPTED

    def _accept(self, friendship: Friendship) -> None:
        # Updated in place, so the stored (requester, recipient) order is kept
        friendship.status = FriendshipStatus.ACCEPTED
        friendship.updated_at = utc_now()
        pair = (friendship.user_id, friendship.user_id_friend)
        self.db.commit()
        logger.info(f"Friendship accepted: {pair[0]} <-> {pair[1]}")

    def delete_friend_request_or_friendship(
        self,
        user_id: int,
        external_user_id: int
    ) -> FriendRequestOutcome:
        """Reject/cancel a pending request or end an accepted friendship"""
        with storage_errors(self.db, "deleting a friend request or friendship"):
            existing = self.find_pair_row(user_id, external_user_id)

            if existing is None:
                return FriendRequestOutcome.NOT_FOUND

            self.db.delete(existing)

            if self.cascade_delete_messages:
                deleted_messages = self.db.query(Message).filter(
                    or_(
                        and_(Message.user_id_send == user_id,
                             Message.user_id_received == external_user_id),
                        and_(Message.user_id_send == external_user_id,
                             Message.user_id_received == user_id)
                    )
                ).delete(synchronize_session=False)
                logger.info(
                    f"Deleted {deleted_messages} messages between {user_id} and {external_user_id}"
                )

            self.db.commit()
            logger.info(f"Friend request or friendship deleted: {user_id} <-> {external_user_id}")
            return FriendRequestOutcome.DELETED

    def get_potential_friends(self, user_id: int) -> List[User]:
        """Get users that have a pending friend request sent to user_id"""
        with storage_errors(self.db, "fetching friend requests"):
            requesters = select(Friendship.user_id).where(
                Friendship.user_id_friend == user_id,
                Friendship.status == FriendshipStatus.PENDING
            )
            return self.db.query(User).filter(User.id.in_(requesters)).order_by(User.id).all()

    def get_friends(self, user_id: int) -> List[User]:
        """Get users with an accepted friendship with user_id, in either direction"""
        with storage_errors(self.db, "fetching friends"):
            requested_by_us = select(Friendship.user_id_friend).where(
                Friendship.user_id == user_id,
                Friendship.status == FriendshipStatus.ACCEPTED
            )
            requested_by_them = select(Friendship.user_id).where(
                Friendship.user_id_friend == user_id,
                Friendship.status == FriendshipStatus.ACCEPTED
            )
            return self.db.query(User).filter(
                or_(User.id.in_(requested_by_us), User.id.in_(requested_by_them))
            ).order_by(User.id).all()

    def are_friends(self, user_id: int, other_user_id: int) -> bool:
        """Check if two users are friends"""
        friendship = self.find_pair_row(user_id, other_user_id)
        return friendship is not None and not friendship.is_pending
