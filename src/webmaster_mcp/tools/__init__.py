"""Tool framework: declarative tool table, validation, error boundary.

Maps each Webmaster API operation to a named, schema-described tool
that always answers with a ``CallToolResult``.
"""
