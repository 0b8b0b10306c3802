"""
Test package for the production accounting engine.

This package contains all test modules organized by test type:
- integration: Services wired to in-memory and DuckDB repositories
- unit: Unit tests for individual components
"""
