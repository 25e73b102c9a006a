"""
MCP Tool Dispatcher.

Routes a ``tools/call`` (name + arguments) to one of the SpeechService
operations and shapes the outcome into a ToolResponse.

Tools:
    generate     - synthesize speech, text = absolute path of the WAV file
    list_voices  - text = JSON list of {name, description}
    list_styles  - text = JSON map name -> {description, style, prompt?}

Request Flow:
    1. Generate unique request ID for tracing
    2. Route the tool name (unknown → "Tool not found", service untouched)
    3. Validate arguments against the pydantic schema
    4. Call the SpeechService operation
    5. Return the text payload

Error Handling:
    Every exception ends in an error envelope, the dispatcher never raises:

        Error: <message>

    TTSError subclasses contribute their code to the log line; any other
    exception (google-genai transport/auth/quota errors) is passed through
    with its own message.
"""
from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from gemini_tts_mcp.api.schemas import GenerateArgs, ListStylesArgs, ListVoicesArgs, input_schema
from gemini_tts_mcp.core.logging import fail, get_logger, info, set_request_id, success
from gemini_tts_mcp.exceptions import ErrorCode, TTSError, UnknownOperation
from gemini_tts_mcp.services.speech_service import GenerationRequest, SpeechService
from gemini_tts_mcp.services.validators import ValidationError

_LOG = get_logger("gemini-tts-mcp.tools")


@dataclass
class ToolResponse:
    """
    Result envelope of one tool invocation.

    Attributes:
        text: Payload on success, ``Error: <message>`` on failure.
        is_error: True for the error envelope.
        code: ErrorCode of the failure, None on success.
    """
    text: str
    is_error: bool = False
    code: Optional[str] = None

    @classmethod
    def failure(cls, message: str, code: str = ErrorCode.INTERNAL_ERROR) -> "ToolResponse":
        return cls(text=f"Error: {message}", is_error=True, code=code)

    @property
    def message(self) -> str:
        """Error message without the ``Error: `` prefix."""
        if self.is_error and self.text.startswith("Error: "):
            return self.text[len("Error: "):]
        return self.text


@dataclass(frozen=True)
class ToolDefinition:
    """One routable tool: published metadata plus its argument model."""
    name: str
    description: str
    args_model: Type[BaseModel]

    @property
    def input_schema(self) -> Dict[str, Any]:
        return input_schema(self.args_model)


TOOLS: Dict[str, ToolDefinition] = {
    tool.name: tool
    for tool in (
        ToolDefinition(
            name="generate",
            description=(
                "Convert text to speech with Gemini TTS and save it as a WAV file. "
                "Returns the absolute path of the file."
            ),
            args_model=GenerateArgs,
        ),
        ToolDefinition(
            name="list_voices",
            description="List the available prebuilt voices as JSON.",
            args_model=ListVoicesArgs,
        ),
        ToolDefinition(
            name="list_styles",
            description="List the available speech style templates as JSON.",
            args_model=ListStylesArgs,
        ),
    )
}


def _schema_message(tool: str, exc: SchemaError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
        problems.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return f"Invalid arguments for {tool}: " + "; ".join(problems)


class ToolDispatcher:
    """
    Routes tool calls to a SpeechService.

    No state carries across invocations; concurrent dispatches only share
    the (immutable) service settings.
    """

    def __init__(self, service: SpeechService):
        self._service = service
        self._handlers: Dict[str, Callable[[Any], Awaitable[str]]] = {
            "generate": self._generate,
            "list_voices": self._list_voices,
            "list_styles": self._list_styles,
        }

    @property
    def service(self) -> SpeechService:
        return self._service

    @staticmethod
    def tool_definitions() -> List[ToolDefinition]:
        return list(TOOLS.values())

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """
        Run one tool invocation.

        Args:
            name: Tool name from ``tools/call``.
            arguments: Raw argument object; None is treated as ``{}``.

        Returns:
            ToolResponse; failures are reported in the envelope, never raised.
        """
        rid = str(uuid.uuid4())[:12]
        set_request_id(rid)

        try:
            tool = TOOLS.get(name)
            if tool is None:
                raise UnknownOperation(name)

            info(_LOG, "tool_call", tool=name)
            try:
                args = tool.args_model.model_validate(dict(arguments or {}))
            except SchemaError as e:
                raise ValidationError(_schema_message(name, e)) from e

            text = await self._handlers[name](args)
            success(_LOG, "tool_done", tool=name)
            return ToolResponse(text=text)

        except TTSError as e:
            fail(_LOG, "tool_failed", tool=name, code=e.code, error=e.message, details=e.details or None)
            return ToolResponse.failure(e.message, e.code)

        except Exception as e:
            # upstream errors keep their own message
            message = str(e) or type(e).__name__
            fail(_LOG, "tool_failed", tool=name, code=ErrorCode.UPSTREAM_ERROR, error=message, exc_type=type(e).__name__)
            return ToolResponse.failure(message, ErrorCode.UPSTREAM_ERROR)

    # =========================================================================
    # Handlers
    # =========================================================================

    async def _generate(self, args: GenerateArgs) -> str:
        result = await self._service.generate(
            GenerationRequest(
                text=args.content,
                voice=args.voice,
                directory=args.directory,
                style=args.style,
            )
        )
        return str(result.path)

    async def _list_voices(self, args: ListVoicesArgs) -> str:
        voices = self._service.list_voices(args.count)
        return json.dumps([voice.to_dict() for voice in voices], indent=2, ensure_ascii=False)

    async def _list_styles(self, args: ListStylesArgs) -> str:
        styles = self._service.list_styles(detail=args.detail)
        return json.dumps(styles, indent=2, ensure_ascii=False)
