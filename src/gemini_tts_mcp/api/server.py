"""
MCP Server wiring.

Binds the ToolDispatcher, the style prompts and the style resources to an
``mcp`` low-level Server and runs it over stdio.

Surface:
    tools/list, tools/call          generate, list_voices, list_styles
    prompts/list, prompts/get       one prompt per style template that has
                                    both a description and a prompt
    resources/templates/list        tts://voice-styles/{style_name}
    resources/list, resources/read  the same templates as JSON documents

The config document is re-read on every prompts/resources request, like the
listing tools, so edits show up without a restart.

Error Handling:
    tools/call never fails at the protocol level. The dispatcher's error
    envelope is raised as ToolCallFailed, which the SDK turns into a
    ``CallToolResult`` with ``isError=True`` and the envelope text.
    Unknown prompts and resources are JSON-RPC errors (McpError).

Example:
    settings = load_settings()
    server = create_server(SpeechService(settings))
    asyncio.run(run_stdio(server))
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from gemini_tts_mcp import __version__
from gemini_tts_mcp.api.tools import ToolDispatcher
from gemini_tts_mcp.core.config import StyleTemplate
from gemini_tts_mcp.core.logging import get_logger, info, verbose
from gemini_tts_mcp.services.speech_service import SpeechService

_LOG = get_logger("gemini-tts-mcp.server")

SERVER_NAME = "gemini-tts-mcp"
STYLE_URI_PREFIX = "tts://voice-styles/"
STYLE_URI_TEMPLATE = STYLE_URI_PREFIX + "{style_name}"
JSON_MIME = "application/json"

INSTRUCTIONS = (
    "Text-to-speech with Google Gemini. Call list_voices and list_styles to "
    "discover options, then generate to write a WAV file; the tool returns "
    "its absolute path."
)


class ToolCallFailed(Exception):
    """Carries an error envelope out of the call_tool handler."""


def style_uri(name: str) -> str:
    return STYLE_URI_PREFIX + name


def _style_not_found(name: str) -> McpError:
    return McpError(types.ErrorData(code=types.INVALID_REQUEST, message=f"Voice style '{name}' not found"))


class ServerHandlers:
    """
    Protocol handlers, kept separate from the Server so they can be called
    directly.

    Args:
        dispatcher: Routes tools/call.
    """

    def __init__(self, dispatcher: ToolDispatcher):
        self.dispatcher = dispatcher

    @property
    def service(self) -> SpeechService:
        return self.dispatcher.service

    def _prompt_templates(self) -> Dict[str, StyleTemplate]:
        return {
            name: template
            for name, template in self.service.style_templates().items()
            if template.prompt and template.description
        }

    # -- tools ---------------------------------------------------------------

    async def list_tools(self) -> List[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in self.dispatcher.tool_definitions()
        ]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        response = await self.dispatcher.dispatch(name, arguments)
        if response.is_error:
            raise ToolCallFailed(response.text)
        return [types.TextContent(type="text", text=response.text)]

    # -- prompts -------------------------------------------------------------

    async def list_prompts(self) -> List[types.Prompt]:
        return [
            types.Prompt(name=name, description=template.description, arguments=[])
            for name, template in self._prompt_templates().items()
        ]

    async def get_prompt(self, name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
        template = self._prompt_templates().get(name)
        if template is None:
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=f"Prompt '{name}' not found"))

        verbose(_LOG, "prompt_get", prompt=name)
        return types.GetPromptResult(
            description=f"{name}: {template.description}",
            messages=[
                types.PromptMessage(
                    role="user",
                    content=types.TextContent(type="text", text=template.prompt),
                )
            ],
        )

    # -- resources -----------------------------------------------------------

    async def list_resource_templates(self) -> List[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=STYLE_URI_TEMPLATE,
                name="voice_style",
                description="A speech style template as JSON",
                mimeType=JSON_MIME,
            )
        ]

    async def list_resources(self) -> List[types.Resource]:
        return [
            types.Resource(
                uri=style_uri(name),
                name=name,
                description=template.description or None,
                mimeType=JSON_MIME,
            )
            for name, template in self.service.style_templates().items()
        ]

    async def read_resource(self, uri: Any) -> Iterable[ReadResourceContents]:
        """
        Read ``tts://voice-styles/{style_name}``.

        Raises:
            McpError: Unknown URI or style name.
        """
        uri_text = str(uri)
        if not uri_text.startswith(STYLE_URI_PREFIX):
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=f"Unknown resource: {uri_text}"))

        name = uri_text[len(STYLE_URI_PREFIX):]
        template = self.service.style_templates().get(name)
        if template is None:
            raise _style_not_found(name)

        verbose(_LOG, "resource_read", uri=uri_text)
        return [ReadResourceContents(content=json.dumps(template.to_dict(), indent=2), mime_type=JSON_MIME)]


def create_server(service: SpeechService) -> Server:
    """Build the low-level MCP server around a SpeechService."""
    handlers = ServerHandlers(ToolDispatcher(service))
    server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)

    server.list_tools()(handlers.list_tools)
    server.call_tool()(handlers.call_tool)
    server.list_prompts()(handlers.list_prompts)
    server.get_prompt()(handlers.get_prompt)
    server.list_resource_templates()(handlers.list_resource_templates)
    server.list_resources()(handlers.list_resources)
    server.read_resource()(handlers.read_resource)

    return server


async def run_stdio(server: Server) -> None:
    """Serve MCP over stdin/stdout until the host closes the stream."""
    async with stdio_server() as (read_stream, write_stream):
        info(_LOG, "server_started", name=SERVER_NAME, version=__version__, transport="stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
    info(_LOG, "server_stopped")
