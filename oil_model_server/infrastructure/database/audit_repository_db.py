"""DB-backed audit repository. Persists run attempts to the request_logs table."""

import logging
from datetime import timezone
from typing import List

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncEngine

from oil_model_server.domain.models.simulation import SimulationParameters
from oil_model_server.governance.audit_models import AuditRecord
from oil_model_server.infrastructure.database.models import RequestLog
from oil_model_server.infrastructure.database.session import Base, build_sessionmaker

logger = logging.getLogger(__name__)


def _to_record(orm: RequestLog) -> AuditRecord:
    timestamp = orm.timestamp
    if timestamp is not None and timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return AuditRecord(
        id=orm.id,
        username=orm.username,
        timestamp=timestamp,
        parameters=SimulationParameters(
            scenario=orm.scenario,
            drilling_rate=orm.drilling_rate,
            oil_price=orm.oil_price,
            exchange_rate=orm.exchange_rate,
        ),
        success=bool(orm.success),
        result_count=orm.result_count or 0,
        error_message=orm.error_msg or None,
    )


class DbAuditRepository:
    """Implements AuditRepository on an async SQLAlchemy engine. Each save is one independent insert."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessionmaker = build_sessionmaker(engine)

    async def create_schema(self) -> None:
        """Create request_logs if missing."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("audit_table_ready", extra={"table": RequestLog.__tablename__})

    async def save(self, record: AuditRecord) -> None:
        params = record.parameters
        orm = RequestLog(
            username=record.username,
            scenario=params.scenario,
            drilling_rate=params.drilling_rate,
            oil_price=params.oil_price,
            exchange_rate=params.exchange_rate,
            success=record.success,
            result_count=record.result_count,
            error_msg=record.error_message or "",
        )
        if record.timestamp is not None:
            orm.timestamp = record.timestamp
        async with self._sessionmaker() as session:
            session.add(orm)
            await session.commit()

    async def list_for_user(self, username: str, limit: int) -> List[AuditRecord]:
        stmt = (
            select(RequestLog)
            .where(RequestLog.username == username)
            .order_by(RequestLog.timestamp.desc(), RequestLog.id.desc())
            .limit(limit)
        )
        async with self._sessionmaker() as session:
            result = await session.execute(stmt)
            return [_to_record(orm) for orm in result.scalars().all()]

    async def ping(self) -> bool:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        await self._engine.dispose()
