"""Content ledger schema definitions.

Posts and announcements are returned newest first; each entry carries its own
identifier and the server-assigned timestamp in ISO format.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RoomCodeRequest(BaseModel):
    code: str = Field(min_length=1, description="The room code.")


class AnnounceRequest(BaseModel):
    code: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)


class PostInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    file_url: Optional[str] = Field(default=None, alias="fileUrl")
    author: str
    timestamp: str


class AnnouncementInfo(BaseModel):
    id: str
    title: str
    description: str
    author: str
    timestamp: str
