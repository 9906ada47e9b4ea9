"""
Database Configuration and Management (SQLAlchemy)

Handles database setup, sessions, and the user and habit stores.
"""

import logging
from pathlib import Path
from sqlalchemy import create_engine, select, delete, and_, or_, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.models import Base, User, Habit
from config.settings import settings

logger = logging.getLogger(__name__)

# SQLAlchemy Engine and Session (bound by configure_database)
engine = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


class DuplicateUserError(Exception):
    """Raised when a username or email is already registered."""


def configure_database(database_url=None):
    """
    Create the engine for the given URL and bind the session factory to it.

    Args:
        database_url (str, optional): SQLAlchemy URL, defaults to DATABASE_URL from settings

    Returns:
        sqlalchemy.engine.Engine: The new engine
    """
    global engine

    database_url = database_url or settings.database_url
    engine_kwargs = {}

    if database_url.startswith('sqlite'):
        engine_kwargs['connect_args'] = {'check_same_thread': False}
        if database_url in ('sqlite://', 'sqlite:///:memory:'):
            # One shared connection, otherwise every session sees an empty database
            engine_kwargs['poolclass'] = StaticPool
        else:
            Path(database_url.replace('sqlite:///', '', 1)).parent.mkdir(parents=True, exist_ok=True)

    if engine is not None:
        engine.dispose()

    engine = create_engine(database_url, echo=False, **engine_kwargs)
    SessionLocal.configure(bind=engine)
    return engine


def get_db_session():
    """
    Get a new database session.

    Returns:
        sqlalchemy.orm.Session: Database session
    """
    if engine is None:
        configure_database()
    return SessionLocal()


def init_database():
    """
    Initialize the database with all required tables.
    """
    if engine is None:
        configure_database()

    logger.info("Initializing database...")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized successfully!")
    except SQLAlchemyError as e:
        logger.error(f"Error initializing database: {e}")
        raise


def _user_to_dict(user, include_hash=False):
    data = {
        'user_id': user.user_id,
        'username': user.username,
        'email': user.email,
        'created_at': user.created_at
    }
    if include_hash:
        data['password_hash'] = user.password_hash
    return data


def _habit_to_dict(habit):
    return {
        'habit_id': habit.habit_id,
        'user_id': habit.user_id,
        'name': habit.name,
        'streak': habit.streak,
        'last_checked': habit.last_checked,
        'created_at': habit.created_at,
        'updated_at': habit.updated_at
    }


def normalize_email(email):
    return email.strip().lower()


def create_user(username, email, password_hash):
    """
    Create a new user.

    Raises:
        DuplicateUserError: If the username or email is taken
    """
    email = normalize_email(email)
    session = get_db_session()
    try:
        existing = session.execute(
            select(User).where(or_(User.email == email, User.username == username))
        ).scalars().first()
        if existing:
            logger.warning(f"User with email {email} or username {username} already exists")
            raise DuplicateUserError(f"User {username} <{email}> already exists")

        user = User(username=username, email=email, password_hash=password_hash)
        session.add(user)
        session.commit()
        logger.info(f"Created user: {username} (ID: {user.user_id})")
        return _user_to_dict(user)
    except IntegrityError as e:
        # Lost a race with a concurrent registration
        session.rollback()
        raise DuplicateUserError(f"User {username} <{email}> already exists") from e
    except SQLAlchemyError as e:
        logger.error(f"Error creating user: {e}")
        session.rollback()
        raise
    finally:
        session.close()


def get_user_by_email(email):
    """
    Get user by email, including the stored password hash.
    """
    session = get_db_session()
    try:
        user = session.execute(
            select(User).where(User.email == normalize_email(email))
        ).scalar_one_or_none()
        return _user_to_dict(user, include_hash=True) if user else None
    except SQLAlchemyError as e:
        logger.error(f"Error fetching user: {e}")
        raise
    finally:
        session.close()


def count_users():
    session = get_db_session()
    try:
        return session.execute(select(func.count(User.user_id))).scalar_one()
    finally:
        session.close()


def list_user_habits(user_id):
    """
    Get all habits for a user, newest first.
    """
    session = get_db_session()
    try:
        stmt = (
            select(Habit)
            .where(Habit.user_id == user_id)
            .order_by(Habit.created_at.desc(), Habit.habit_id.desc())
        )
        return [_habit_to_dict(habit) for habit in session.execute(stmt).scalars()]
    except SQLAlchemyError as e:
        logger.error(f"Error fetching habits for user {user_id}: {e}")
        raise
    finally:
        session.close()


def create_habit(user_id, name):
    """
    Create a new habit with an empty streak.
    """
    session = get_db_session()
    try:
        habit = Habit(user_id=user_id, name=name, streak=0, last_checked=None)
        session.add(habit)
        session.commit()
        logger.info(f"Created habit: User {user_id}, Habit {habit.habit_id} '{name}'")
        return _habit_to_dict(habit)
    except SQLAlchemyError as e:
        logger.error(f"Error creating habit: {e}")
        session.rollback()
        raise
    finally:
        session.close()


def update_habit_state(habit_id, user_id, transition):
    """
    Read a habit's streak state, apply a transition and write it back in
    one transaction.

    Args:
        habit_id (int): Habit ID
        user_id (int): Owner; habits of other users are treated as missing
        transition (callable): Maps (streak, last_checked) to the new pair

    Returns:
        dict or None: Updated habit, or None if not found for this user
    """
    session = get_db_session()
    try:
        stmt = (
            select(Habit)
            .where(and_(Habit.habit_id == habit_id, Habit.user_id == user_id))
            .with_for_update()
        )
        habit = session.execute(stmt).scalar_one_or_none()
        if habit is None:
            return None

        habit.streak, habit.last_checked = transition(habit.streak, habit.last_checked)
        session.commit()
        return _habit_to_dict(habit)
    except SQLAlchemyError as e:
        logger.error(f"Error updating habit {habit_id}: {e}")
        session.rollback()
        raise
    finally:
        session.close()


def delete_habit(habit_id, user_id):
    """
    Delete a specific habit owned by the user.
    """
    session = get_db_session()
    try:
        stmt = delete(Habit).where(and_(
            Habit.habit_id == habit_id,
            Habit.user_id == user_id
        ))
        result = session.execute(stmt)
        session.commit()
        if result.rowcount > 0:
            logger.info(f"Deleted habit {habit_id} of user {user_id}")
        return result.rowcount > 0
    except SQLAlchemyError as e:
        logger.error(f"Error deleting habit {habit_id}: {e}")
        session.rollback()
        raise
    finally:
        session.close()
