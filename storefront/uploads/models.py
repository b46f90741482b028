import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from ..database.core import Base


class FileUpload(Base):
    __tablename__ = "file_uploads"

    id = Column(String(50), primary_key=True, default=lambda: str(uuid.uuid4()))
    customer_name = Column(String(255), nullable=False, index=True)
    order_id = Column(String(50), nullable=False)
    file_url = Column(String(500), nullable=False)
    uploaded_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
