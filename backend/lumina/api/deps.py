# backend/lumina/api/deps.py

from fastapi import Depends

from lumina.core.config import Settings, get_settings
from lumina.core.store import ProductStore
from lumina.services.insights import InsightsClient

# one store per process; records live for the lifetime of the session
store = ProductStore()


def get_store() -> ProductStore:
    return store


def get_insights_client(settings: Settings = Depends(get_settings)) -> InsightsClient:
    return InsightsClient(settings)
