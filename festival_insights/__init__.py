"""
Festival Insights Backend Package.

FastAPI service layer for the festival social-media analytics dashboard.
Correlates weather, engagement, hashtag, sentiment and link-attribution
series from the analytics warehouse and turns them into insights and
prioritized action items.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, and dependencies
    - models: Pydantic schemas and enums
    - services: Correlation engine (pure analyzers + async orchestration)
    - sql: Parameterized SQL queries
"""

__version__ = "1.0.0"
