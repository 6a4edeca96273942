"""
Core utilities shared across the contas package.

This package hosts:
- configuration helpers (env vars, timeouts, notice TTL)
- cross-cutting services such as logging setup and password hashing

Services and adapters should depend on these primitives instead of reading
os.environ directly.
"""
