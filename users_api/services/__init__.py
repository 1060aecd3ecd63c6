"""Services Layer: use cases that combine core rules with the record store.

Invariants:
    - Services raise typed UsersApiError subclasses; HTTP mapping happens in api/
"""
