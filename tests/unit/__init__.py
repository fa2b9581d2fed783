"""Unit tests for individual components in isolation.

Coverage:
    - models/: Event decoding, encoding and validation
    - relay/: History buffer, connection registry, message relay
    - client/: Session rendering, sending and reconnect loop
    - config: Environment loading and validation

Uses in-memory fake connections and sockets instead of the network.
"""
