# roadmap_assembler/tools/__init__.py
"""
Service layer shared by the CLI and the MCP server.

Every tool returns a response model as a dict and reports failures as
fastmcp ToolError with a user-facing message.
"""
