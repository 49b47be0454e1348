from sqlalchemy import Column, DateTime, Integer, String, Text

from .base import Base


class AnnouncementModel(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)
    room_code = Column(String, index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    author = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), index=True, nullable=False)
