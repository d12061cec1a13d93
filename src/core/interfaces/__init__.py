"""Core interfaces.

- Contracts (Protocol) implemented by the concrete adapters.
- The core depends on these abstractions, never on httpx.
"""
