from sqlalchemy import Column, Integer
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class BaseModel:
    """Shared primary key column for the externally owned tables"""
    id = Column(Integer, primary_key=True)
