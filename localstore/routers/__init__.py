"""
FastAPI routers.

Each module exposes an APIRouter that create_app() includes; values.py maps
the store operations onto /values endpoints.
"""
