# oil_model_server/infrastructure/database/models.py

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.sql import func

from oil_model_server.infrastructure.database.session import Base


class RequestLog(Base):
    """One row per model-run attempt. Append-only."""

    __tablename__ = "request_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    scenario = Column(Integer)
    drilling_rate = Column(Integer)
    oil_price = Column(Float)
    exchange_rate = Column(Float)
    success = Column(Boolean)
    result_count = Column(Integer)
    error_msg = Column(Text, nullable=True)
