from sqlalchemy import Column, String
from .base import BaseModel

class User(BaseModel):
    __tablename__ = "users"

    username = Column(String(20), nullable=False)
    email = Column(String(50), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
