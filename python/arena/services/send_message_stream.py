"""Streaming send message service: SSE push channel for one turn.

Frames the dual-stream generator onto a one-way Server-Sent Events channel.
The turn must already be claimed (turns.begin_message) before this runs, so
every pre-channel failure is an ordinary JSON error response.

SSE Events:
- chunk: {"model_id": "model_a|model_b", "content": "...", "sequence": N}
- done: {"turn_id": "...", "status": "completed"}
- error: {"error": {"code": "E_...", "message": "...", "request_id": "..."}}

Guarantees:
- Events go out in emission order, one SSE frame per event
- The stream ends right after done or error
- Unexpected failures become an E_INTERNAL error event; the original
  exception text is logged, never sent
- A stream stalled or running past STREAM_TIMEOUT_S ends with E_STREAM_TIMEOUT
  as soon as the deadline passes; the turn is not completed
- Client disconnect (ASGI stops iterating, task cancelled) abandons the
  pending delay; messages persisted so far stay persisted
"""

import asyncio
import json
import time
from collections.abc import AsyncIterator

from arena.config import Settings
from arena.errors import ApiError, ApiErrorCode, StreamTimeoutError
from arena.logging import get_logger
from arena.responses import sse_error_payload
from arena.schemas.chat import StreamChunkEvent, StreamDoneEvent
from arena.services import turns as turns_service
from arena.services.dual_stream import StreamTiming, generate_dual_stream
from arena.services.randomness import RandomSource
from arena.store import InMemoryStore, Turn

logger = get_logger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

STREAM_FAILED_MESSAGE = "Failed to generate response"


def format_sse_event(event: str, data: dict) -> str:
    """Format data as an SSE event."""
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


async def stream_message_events(
    store: InMemoryStore,
    turn: Turn,
    content: str,
    random_source: RandomSource,
    settings: Settings,
    request_id: str | None = None,
) -> AsyncIterator[str]:
    """Async generator for one turn's SSE channel.

    Every pull from the dual-stream generator runs under one shared deadline,
    so a stall anywhere (fragment delay, model pause, persistence) is cut off
    when STREAM_TIMEOUT_S elapses. Yields to the client sit outside the
    timeout scope.

    Args:
        store: The entity store.
        turn: The turn claimed by begin_message (status streaming).
        content: The user's prompt.
        random_source: Shared random source.
        settings: Stream timing and deadline.
        request_id: Request ID of the call that opened the stream.

    Yields:
        SSE-formatted event strings.
    """
    timing = StreamTiming.from_settings(settings)
    timeout_s = settings.stream_timeout_s
    start_time = time.monotonic()
    deadline_at = asyncio.get_running_loop().time() + timeout_s
    fragments_sent = 0
    status = "completed"
    error_code: str | None = None

    events = generate_dual_stream(store, turn.id, content, random_source, timing)
    try:
        while True:
            try:
                async with asyncio.timeout_at(deadline_at):
                    event = await anext(events)
            except StopAsyncIteration:
                break
            chunk = StreamChunkEvent(**event.to_payload())
            yield format_sse_event("chunk", chunk.model_dump())
            fragments_sent += 1

        turns_service.complete_stream(store, turn.id)
        done = StreamDoneEvent(turn_id=turn.id, status="completed")
        yield format_sse_event("done", done.model_dump(mode="json"))

    except TimeoutError:
        exc = StreamTimeoutError()
        status, error_code = "error", exc.code.value
        logger.warning("stream_timeout", turn_id=str(turn.id), timeout_s=timeout_s)
        yield format_sse_event("error", sse_error_payload(exc, request_id))

    except (asyncio.CancelledError, GeneratorExit):
        status, error_code = "disconnected", "E_CLIENT_DISCONNECT"
        logger.info("stream_client_disconnect", turn_id=str(turn.id))
        raise

    except Exception as e:
        status = "error"
        error_code = e.code.value if isinstance(e, ApiError) else ApiErrorCode.E_INTERNAL.value
        logger.error(
            "stream_failed",
            turn_id=str(turn.id),
            error_type=type(e).__name__,
            error=str(e),
        )
        failure = ApiError(ApiErrorCode.E_INTERNAL, STREAM_FAILED_MESSAGE)
        yield format_sse_event("error", sse_error_payload(failure, request_id))

    finally:
        # Stops the inner generator's pending sleep right away on disconnect
        await events.aclose()
        logger.info(
            "stream_end",
            turn_id=str(turn.id),
            status=status,
            error_code=error_code,
            fragments_sent=fragments_sent,
            total_ms=int((time.monotonic() - start_time) * 1000),
        )
