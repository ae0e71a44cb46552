"""
Response for domain outcomes of friend and assistance actions
"""
from pydantic import BaseModel

from app.core.outcomes import Outcome


class OutcomeResponse(BaseModel):
    """Which branch of a friend/assistance action was taken"""
    outcome: str
    status: str
    message: str

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "OutcomeResponse":
        return cls(outcome=outcome.value, status=outcome.status, message=outcome.message)
