"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

from httpx import ASGITransport, AsyncClient
from app.main import app


async def test_health_endpoint():
    """Health check returns status, uptime and checks."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/v1/health")
    
    assert response.status_code == 200
    data = response.json()
    
    assert "status" in data
    assert "uptime" in data
    assert data["uptime"].startswith("PT")
    assert isinstance(data["checks"], dict)
    assert data["status"] in ["ok", "degraded"]


async def test_root_health_endpoint():
    """The root-level alias serves the same payload."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")
    
    assert response.status_code == 200
    assert "checks" in response.json()
