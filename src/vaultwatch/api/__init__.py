# API Module - FastAPI backend for the vault UI

from .main import app, start_api_server
from .security import SessionManager, get_session_manager, set_session_manager
from .vault_routes import get_store, set_store

__all__ = [
    "app",
    "start_api_server",
    "SessionManager",
    "get_session_manager",
    "set_session_manager",
    "get_store",
    "set_store",
]
