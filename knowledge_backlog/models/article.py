"""
Article model - a knowledge article tracked from Backlog to Documented
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from knowledge_backlog.core.database import Base
from knowledge_backlog.models.tag import Tag, article_tags


class ArticleStatus(str, enum.Enum):
    """Article lifecycle status"""
    BACKLOG = "Backlog"
    DOCUMENTED = "Documented"


class Article(Base):
    """
    Knowledge article

    author / author_name hold the raw identity (``domain\\user``) and the
    display name of the creator. The modified_* columns stay NULL until the
    first status or content change.
    """
    __tablename__ = "articles"

    __table_args__ = (
        Index('ix_articles_added', 'added'),
        Index('ix_articles_modified_at', 'modified_at'),
    )

    # Generated by the database unless a caller supplies one
    id = Column(Integer, primary_key=True, autoincrement=True)

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        SQLEnum(
            ArticleStatus,
            values_callable=lambda statuses: [s.value for s in statuses],
            native_enum=False,
            length=20,
        ),
        nullable=False,
        default=ArticleStatus.BACKLOG,
    )

    added = Column(DateTime, nullable=False, default=datetime.utcnow)

    author = Column(String(255), nullable=True)
    author_name = Column(String(255), nullable=True)

    modified_by = Column(String(255), nullable=True)
    modified_by_name = Column(String(255), nullable=True)
    modified_at = Column(DateTime, nullable=True)

    # Reference into the external knowledge base, set when documented
    knowledge_article_id = Column(String(255), nullable=True)

    # Read-only view of the join table; TagService.set_article_tags is the only writer
    tags = relationship(
        Tag,
        secondary=article_tags,
        order_by=Tag.name,
        viewonly=True,
    )

    def __repr__(self):
        return f"<Article {self.id} {self.status.value if self.status else None}>"
