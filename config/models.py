"""
SQLAlchemy ORM Models
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship, declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

HABIT_NAME_MAX_LENGTH = 50
USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255


class User(Base):
    __tablename__ = 'users'

    user_id = Column(Integer, primary_key=True)
    username = Column(String(USERNAME_MAX_LENGTH), unique=True, nullable=False)
    email = Column(String(EMAIL_MAX_LENGTH), unique=True, nullable=False)  # Stored lower-cased
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    habits = relationship("Habit", back_populates="user", cascade="all, delete-orphan")


class Habit(Base):
    __tablename__ = 'habits'
    __table_args__ = (
        CheckConstraint('streak >= 0', name='ck_habits_streak_non_negative'),
    )

    habit_id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False, index=True)
    name = Column(String(HABIT_NAME_MAX_LENGTH), nullable=False)
    streak = Column(Integer, nullable=False, default=0)
    last_checked = Column(DateTime, nullable=True)  # Naive UTC
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="habits")
