# Services package init
"""
Postboard Backend — Services Layer
====================================

What:  Persistence adapter and business logic between routes and the store.

Service Inventory:
    - PostStore: Async store adapter owning the engine (post_store.py)
    - PostService: Maps store outcomes to API outcomes (post_service.py)
"""
