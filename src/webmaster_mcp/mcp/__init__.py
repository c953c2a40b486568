"""MCP host-protocol wiring."""
