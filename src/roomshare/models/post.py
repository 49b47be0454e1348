from sqlalchemy import Column, DateTime, Integer, String, Text

from .base import Base


class PostModel(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    room_code = Column(String, index=True, nullable=False)
    content = Column(Text, nullable=False)
    file_url = Column(String, nullable=True)  # set only when an attachment was bound
    author = Column(String, nullable=False)
    timestamp = Column(DateTime(timezone=True), index=True, nullable=False)
