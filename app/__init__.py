"""Audio Gateway - Core application modules.

Provides:
- Typed settings loaded once from the environment
- Request-scoped value objects and wire schemas
- Upload acceptance rules and content-type resolution
"""

__version__ = "1.0.0"
