# Services package init
"""
Snippetbox — Services Layer
============================

What:  Persistence and business rules sitting between routes (HTTP) and the
       database.
How:   Each service wraps one AsyncSession and is injected into routes via
       FastAPI's dependency injection, so tests can swap in a mock through
       `app.dependency_overrides`.

Service Inventory:
    - SnippetService: insert, get (unexpired only), latest ten
    - UserService: insert (argon2 hash, duplicate email detection),
      authenticate, exists
"""
