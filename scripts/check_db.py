# scripts/check_db.py
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from oil_model_server.config.settings import get_settings
from oil_model_server.infrastructure.database.audit_repository_db import DbAuditRepository
from oil_model_server.infrastructure.database.session import build_engine


async def check_connection():
    database_url = get_settings().database_url
    if not database_url:
        print("DATABASE_URL is not set; audit store disabled")
        return
    repository = DbAuditRepository(build_engine(database_url))
    try:
        await repository.create_schema()
        print("DB Connected:", await repository.ping())
    finally:
        await repository.dispose()

asyncio.run(check_connection())
