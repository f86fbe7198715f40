# blockledger/models/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Table names are declared explicitly on each model.
     """
