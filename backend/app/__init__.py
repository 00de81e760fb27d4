"""
Restaurants API — Application Package Initializer
==================================================

What: Marks the `app` directory as a Python package.
Who:  Used by uvicorn (`uvicorn app.main:app`), pytest and the console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes (API + HTML form)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Dependencies (Validation Layer)    │  ← reject bad input with 400
    ├─────────────────────────────────────┤
    │   RestaurantService (error mapping) │  ← tagged result → exception
    ├─────────────────────────────────────┤
    │   RestaurantStore (Storage Adapter) │  ← one MongoDB call per operation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
