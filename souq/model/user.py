import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime
from souq.db.session import Base


class User(Base):
    __tablename__ = "user"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), unique=True, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    display_name = Column(String, nullable=True)
    password = Column(String, nullable=False)
    role = Column(String, nullable=False, default="customer")
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
