from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, JSON
from souq.db.session import Base


def _utcnow():
    return datetime.now(timezone.utc)


class LocalDocument(Base):
    __tablename__ = "local_documents"

    collection = Column(String, primary_key=True)
    doc_id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<LocalDocument(collection={self.collection}, doc_id={self.doc_id})>"
