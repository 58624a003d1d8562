"""Entity snapshots as returned by ``GET /users`` and ``GET /transactions``."""

from pydantic import BaseModel, ConfigDict, Field


class Person(BaseModel):
    id: int
    name: str = ""
    email: str = ""
    phone: str = ""
    # Ignore fields the backend adds later
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Event(BaseModel):
    id: int
    from_user_id: int | None = Field(None, alias="fromUserId")
    to_user_id: int | None = Field(None, alias="toUserId")
    amount: float = 0.0
    currency: str = ""
    timestamp: str | None = None
    description: str = ""
    device_id: str | None = Field(None, alias="deviceId")
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


Entity = Person | Event
