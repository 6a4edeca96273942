"""
FastAPI routers of the reference backend, grouped by resource.

Each file exposes an APIRouter included by ``contas.app.create_app``.
"""
