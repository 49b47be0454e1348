from sqlalchemy import Column, String, Text

from .base import Base


class RoomModel(Base):
    __tablename__ = "rooms"

    code = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    teacher = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(String, nullable=False)
