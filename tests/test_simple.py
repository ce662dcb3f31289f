"""
Simple test cases to verify test configuration.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    """Root endpoint answers without a token."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "Welcome" in response.json()["data"]["message"]

@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["data"] == {"status": "ok", "database": "connected"}

@pytest.mark.asyncio
async def test_database_session(async_session: AsyncSession):
    """Test that database session works."""
    assert async_session is not None
    # Run a simple query
    from sqlalchemy import text
    result = await async_session.execute(text("SELECT 1"))
    assert result.scalar() == 1

def test_alembic_logging_config():
    """alembic.ini carries a complete logging section for env.py."""
    from logging.config import fileConfig
    from pathlib import Path
    ini = Path(__file__).resolve().parent.parent / "alembic.ini"
    fileConfig(str(ini), disable_existing_loggers=False)
