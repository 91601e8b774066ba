from sqlalchemy import Column, Integer, Text, TIMESTAMP
from .db import Base

class Channel(Base):
    __tablename__ = "channels"
    id = Column(Integer, primary_key=True)
    key = Column(Text, unique=True, nullable=False)
    title = Column(Text, nullable=False, default="")

class Item(Base):
    __tablename__ = "items"
    id = Column(Integer, primary_key=True)
    key = Column(Text, unique=True, nullable=False)
    title = Column(Text, nullable=False, default="")
    # Not a foreign key: items may outlive or predate their channel row
    channel_key = Column(Text, index=True)
    date = Column(TIMESTAMP, index=True)
    content = Column(Text, default="")
