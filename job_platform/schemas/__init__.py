"""
Schemas module - Request/Response schemas for API endpoints.

- Request schemas (what API accepts)
- Response schemas (what API returns)
- Real-time event payloads (what the /ws channel emits)
"""
