"""Room schema definitions."""

from pydantic import BaseModel, Field


class CreateRoomRequest(BaseModel):
    title: str = Field(min_length=1)
    teacher: str = Field(min_length=1)
    description: str = Field(min_length=1)


class CreateRoomResponse(BaseModel):
    code: str = Field(description="The generated room code.")


class RoomMetadata(BaseModel):
    """Public metadata of a single room."""

    title: str
    description: str
    teacher: str


class RoomInfo(BaseModel):
    """A joined room, as listed for a user."""

    id: str = Field(description="The room code.")
    title: str
    teacher: str
    description: str
