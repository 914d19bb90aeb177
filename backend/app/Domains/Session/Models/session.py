from typing import Literal, Optional

from pydantic import BaseModel

# Actor recorded for changes the engine makes on its own, such as the archival sweep.
SYSTEM_ACTOR = "system"


class SessionContext(BaseModel):
    """The staff member acting on the current request."""

    user_id: str
    name: Optional[str] = None
    role: Literal["admin", "staff"] = "staff"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def display_name(self) -> str:
        return self.name or self.user_id


def actor_label(actor: Optional[SessionContext]) -> str:
    return actor.display_name if actor else SYSTEM_ACTOR
