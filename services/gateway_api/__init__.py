"""Audio Gateway - Public API service.

FastAPI service that validates audio uploads, health-gates the downstream
enhancement processor, and relays its results and downloads.
"""

__all__: list[str] = []
