"""User schema definitions.

Request bodies for the user and membership endpoints.
"""

from pydantic import BaseModel, Field


class AddUserRequest(BaseModel):
    uname: str = Field(min_length=1, description="The username (principal) to register.")


class JoinRoomRequest(BaseModel):
    uname: str = Field(
        min_length=1,
        description="The username joining the room. Must match the caller's principal.",
    )
    code: str = Field(min_length=1, description="The code of the room to join.")
