"""Database session management."""
import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from .models import Base

class SessionManager:
    """Manages database sessions."""
    
    def __init__(self, database_url: str):
        """Initialize session manager with database URL."""
        self.engine: Engine = create_engine(database_url)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )
        self.logger = logging.getLogger(__name__)
        self._sessions = []
        
    def get_session(self) -> Session:
        """Get a new database session."""
        session = self.SessionLocal()
        self.logger.debug(f"Created new session: {id(session)}")
        return session
    
    def create_all(self) -> None:
        """Create any missing tables."""
        self.logger.debug("Creating missing tables")
        Base.metadata.create_all(self.engine)
        
    def __enter__(self) -> Session:
        """Context manager entry."""
        session = self.get_session()
        self._sessions.append(session)
        self.logger.debug(f"Entering context with session: {id(session)}")
        return session
        
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        session = self._sessions.pop()
        self.logger.debug(f"Exiting context with session: {id(session)}")
        try:
            if exc_type is None:
                self.logger.debug("Committing session")
                session.commit()
            else:
                self.logger.debug("Rolling back session")
                session.rollback()
        finally:
            self.logger.debug("Closing session")
            session.close()
