"""
ERP Kernel - transactional core primitives.

Provides what every department module builds on:
- Durable collection store with all-or-nothing units of work
- Plan-then-commit helper for multi-record operations
- Workflow state machines with explicit transition tables
- Typed exceptions and structured logging
"""

__version__ = "0.1.0"
