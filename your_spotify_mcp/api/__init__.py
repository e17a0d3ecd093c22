"""MCP tool surface: input schemas, handlers, error boundary, server wiring."""
