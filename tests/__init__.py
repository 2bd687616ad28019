"""
Tests for the plant catalog server.

The catalog API is never contacted: transport-level tests run against
httpx.MockTransport and the servers are wired to a mocked client.
"""
