"""
Assistance service for event attendance, ratings and attendance statistics
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import storage_errors
from app.core.outcomes import AssistanceOutcome
from app.models.assistance import Assistance
from app.models.event import Event
from app.models.user import User
from app.schemas.assistance import AssistanceUpdate
from app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

FUTURE = "future"
FINISHED = "finished"


def _round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero"""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class AssistanceService:
    """Service for assistance operations"""

    def __init__(self, db: Session):
        self.db = db

    def create_assistance(self, user_id: int, event_id: int) -> AssistanceOutcome:
        """Join an event. Joining twice is a no-op."""
        with storage_errors(self.db, "creating an assistance"):
            if self.get_assistance_of_user_for_event(user_id, event_id) is not None:
                return AssistanceOutcome.ALREADY_JOINED

            self.db.add(Assistance(user_id=user_id, event_id=event_id))
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                if self.get_assistance_of_user_for_event(user_id, event_id) is None:
                    raise
                return AssistanceOutcome.ALREADY_JOINED

            logger.info(f"User {user_id} joined event {event_id}")
            return AssistanceOutcome.JOINED

    def get_assistance_of_user_for_event(
        self,
        user_id: int,
        event_id: int
    ) -> Optional[Assistance]:
        """Get assistance of a user for an event"""
        with storage_errors(self.db, "fetching an assistance"):
            return self.db.query(Assistance).filter(
                Assistance.user_id == user_id,
                Assistance.event_id == event_id
            ).first()

    def edit_assistance(
        self,
        assistance: Assistance,
        changes: AssistanceUpdate
    ) -> AssistanceOutcome:
        """
        Rate and/or comment an assistance.

        Only the fields set on `changes` are written; a null leaves the stored
        value unchanged. Callers must check that the event has finished and
        that the assistance belongs to the authenticated user.
        """
        with storage_errors(self.db, "editing an assistance"):
            for field, value in changes.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(assistance, field, value)
            self.db.commit()

        logger.info(f"User {assistance.user_id} rated event {assistance.event_id}")
        return AssistanceOutcome.RATED

    def delete_assistance(self, assistance: Assistance) -> AssistanceOutcome:
        """Remove an assistance (user leaves, or the event owner removes them)"""
        user_id, event_id = assistance.user_id, assistance.event_id

        with storage_errors(self.db, "deleting an assistance"):
            self.db.delete(assistance)
            self.db.commit()

        logger.info(f"User {user_id} left event {event_id}")
        return AssistanceOutcome.LEFT

    def get_event_assistances(self, event_id: int) -> List[Tuple[User, Assistance]]:
        """Get all users assisting to an event with their assistance"""
        with storage_errors(self.db, "fetching event assistances"):
            return self.db.query(User, Assistance).join(
                Assistance, Assistance.user_id == User.id
            ).filter(
                Assistance.event_id == event_id
            ).order_by(User.id).all()

    def get_user_event_assistance(self, event_id: int, user_id: int) -> Optional[Assistance]:
        """Get the assistance of an existing user for an event"""
        with storage_errors(self.db, "fetching event assistance of user"):
            return self.db.query(Assistance).join(
                User, User.id == Assistance.user_id
            ).filter(
                Assistance.event_id == event_id,
                Assistance.user_id == user_id
            ).first()

    def get_user_assistances(
        self,
        user_id: int,
        when: Optional[str] = None
    ) -> List[Tuple[Event, Assistance]]:
        """
        Get events a user is assisting to, with the user's rating.

        Args:
            user_id: Assisting user
            when: None for all events, "future" for events not started yet,
                "finished" for events already over
        """
        with storage_errors(self.db, "fetching assistances of user"):
            query = self.db.query(Event, Assistance).join(
                Assistance, Assistance.event_id == Event.id
            ).filter(Assistance.user_id == user_id)

            now = utc_now()
            if when == FUTURE:
                query = query.filter(Event.event_start_date > now)
            elif when == FINISHED:
                query = query.filter(Event.event_end_date < now)
            elif when is not None:
                raise ValueError(f"Unknown assistance filter: {when}")

            return query.order_by(Event.event_start_date).all()

    def get_user_average_score(self, user_id: int) -> Optional[float]:
        """Average punctuation given to the finished events owned by a user"""
        with storage_errors(self.db, "computing user average score"):
            finished_events = select(Event.id).where(
                Event.owner_id == user_id,
                Event.event_end_date < utc_now()
            )
            average = self.db.query(func.avg(Assistance.punctuation)).filter(
                Assistance.event_id.in_(finished_events),
                Assistance.punctuation.isnot(None)
            ).scalar()

        if average is None:
            return None
        return _round2(float(average))

    def get_user_number_of_comments(self, user_id: int) -> int:
        """Number of comments written by a user"""
        with storage_errors(self.db, "counting user comments"):
            return self.db.query(func.count()).select_from(Assistance).filter(
                Assistance.user_id == user_id,
                Assistance.comment.isnot(None)
            ).scalar() or 0

    def get_user_percentage_commenters_below(self, user_id: int) -> float:
        """
        Percentage of all users who wrote fewer comments than this user.

        Comment counts for every user come from one grouped query; the
        comparison against each other user is done in Python.
        """
        with storage_errors(self.db, "computing commenters below"):
            rows = self.db.query(
                User.id, func.count(Assistance.comment)
            ).outerjoin(
                Assistance, Assistance.user_id == User.id
            ).group_by(User.id).all()

        if not rows:
            return 0.0

        counts = dict(rows)
        user_comments = counts.get(user_id, 0)
        below = sum(
            1 for other_id, comments in counts.items()
            if other_id != user_id and comments < user_comments
        )

        return _round2(below * 100 / len(counts))
