from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table
from datetime import datetime

from knowledge_backlog.core.database import Base


# Join table between articles and tags. Rows disappear with either endpoint.
article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    """Named label attachable to many articles"""
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Case-sensitive, unique at the storage layer
    name = Column(String(255), unique=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Tag {self.name}>"
