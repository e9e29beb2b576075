"""
Infrastructure Package
======================

Provides abstraction layers for external dependencies following the Dependency Inversion Principle.

Modules:
    - storage: Uploaded media on the local filesystem
    - database: MongoDB context, settings and bootstrap
    - ai: Gemini generative model client
    - container: Composition root wiring the services

This package enables:
    - Easy testing with in-memory collaborators (mongomock, temporary directories)
    - Loose coupling between business logic and infrastructure
"""
