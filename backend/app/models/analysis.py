import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from ..database import Base
from .access_key import GUID


class Analysis(Base):
    __tablename__ = "analyses"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    key_id = Column(GUID(), ForeignKey("keys.id"), nullable=False, index=True)
    idea = Column(Text, nullable=False)
    data_json = Column(Text, nullable=False)  # normalized AnalysisData, JSON string
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    key = relationship("AccessKey", backref="analyses")
