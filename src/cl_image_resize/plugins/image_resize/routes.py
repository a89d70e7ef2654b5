"""Image resize route factory."""

from typing import Any, override

from fastapi import APIRouter, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from ...common.schemas import ResizeResponse
from ...common.wire import MSGPACK_MEDIA_TYPE, encode_response
from .task import ResizeTask


class MsgPackResponse(Response):
    media_type: str | None = MSGPACK_MEDIA_TYPE

    @override
    def render(self, content: Any) -> bytes:
        if isinstance(content, ResizeResponse):
            return encode_response(content)
        return encode_response(ResizeResponse.model_validate(content))


def create_router(task: ResizeTask, route_path: str = "/Resize") -> APIRouter:
    """Create router with injected dependencies.

    Args:
        task: ResizeTask that runs the pipeline
        route_path: Path the resize endpoint is bound to

    Returns:
        Configured APIRouter with the resize endpoint
    """
    router = APIRouter()

    @router.api_route(route_path, methods=["POST", "PUT"], response_class=MsgPackResponse)
    async def resize(request: Request) -> MsgPackResponse:
        """Resize an image held in the object store.

        The body is a msgpack map with `filename`, `bucket`, `width` and
        `height`. The response body is a msgpack map with `message`,
        `status_code`, `width` and `height`; the HTTP status mirrors
        `status_code`.
        """
        body = await request.body()
        result = await run_in_threadpool(task.execute, body)
        return MsgPackResponse(content=result, status_code=result.status_code)

    _ = resize
    return router
