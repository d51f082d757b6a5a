"""
Blog API — Application Package
===============================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP status codes only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← outcome → error mapping
    ├─────────────────────────────────────┤
    │   Repositories / Models / Schemas   │  ← store primitives, schema rules
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← engine + session per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
