import uuid
import time
from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from framework.logging.logger import _current_request

TRACE_HEADER = "X-Trace-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Per-request trace id and access log.

    The Authorization header is never logged; the authenticated subject id
    (set by the identity dependency) is logged once the response is ready.
    """

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get(TRACE_HEADER) or uuid.uuid4().hex
        request.state.trace_id = trace_id
        token = _current_request.set(request)
        start_time = time.perf_counter()

        with logger.contextualize(trace_id=trace_id):
            logger.info(
                f"{request.method} {request.url.path} started | "
                f"Client: {request.client.host if request.client else 'unknown'} | "
                f"Bearer: {'yes' if request.headers.get('Authorization') else 'no'}"
            )
            try:
                response = await call_next(request)
            except Exception as e:
                elapsed = (time.perf_counter() - start_time) * 1000
                logger.error(f"{request.method} {request.url.path} failed | {e!r} | {elapsed:.2f}ms")
                raise
            finally:
                _current_request.reset(token)

            elapsed = (time.perf_counter() - start_time) * 1000
            identity = getattr(request.state, "identity", None)
            with logger.contextualize(subject=identity.subject_id if identity else "-"):
                logger.info(
                    f"{request.method} {request.url.path} finished | "
                    f"Status: {response.status_code} | {elapsed:.2f}ms"
                )
            response.headers[TRACE_HEADER] = trace_id
            return response
