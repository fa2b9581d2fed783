"""Integration tests for components working together as a system.

No mocks for core functionality - tests real interactions.

Coverage:
    - /ws relay flows with several clients
    - History replay to late joiners
    - Health, history and static asset endpoints
"""
