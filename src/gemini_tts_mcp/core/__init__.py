"""
Core Infrastructure for gemini-tts-mcp.

    - config.py: Settings from the environment, YAML voice/style document
    - logging/: Structured logging with numeric levels (stderr + JSONL)
    - proxy.py: System proxy discovery for the upstream HTTP client
"""
