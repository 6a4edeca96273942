"""
Persistence adapters.

``backend``/``http_backend`` are the client-side view of the REST backend;
``sql_repository`` is the storage used by the reference backend itself.
Services depend on the ``AccountBackend`` interface rather than on httpx.
"""
