from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime

from knowledge_backlog.core.database import Base


class AuthorizedUser(Base):
    """Allowlist entry - usernames are stored lower-case without a domain prefix"""
    __tablename__ = "authorized_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    added_by = Column(String(255), nullable=True)  # NULL for rows seeded from config
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<AuthorizedUser {self.username}>"
