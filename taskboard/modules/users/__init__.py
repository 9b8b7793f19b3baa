"""
User Management Module

User directory and authentication with clear separation of concerns:
- auth: Authentication and authorization
- domain: Domain models
- services: Business logic
- repositories: Data access
- api: REST API endpoints
"""
