"""
MCP protocol layer.

    - tools.py: Tool dispatcher and response envelopes
    - schemas.py: Pydantic argument models (published as tool input schemas)
    - server.py: Low-level MCP server wiring (tools, prompts, resources)
"""
