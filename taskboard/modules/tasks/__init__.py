"""
Task Management Module

Task registry with clear separation of concerns:
- domain: Domain models
- services: Business logic
- repositories: Data access
- api: REST API endpoints
"""
