"""
Feature modules for the HRMIS portal client.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py / guard.py: Behaviour over those interfaces
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
