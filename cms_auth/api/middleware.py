"""CORS middleware that answers preflight requests with 204 No Content."""

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

# Headers describing the discarded "OK" body of Starlette's default preflight response.
_BODY_HEADERS = {"content-length", "content-type"}


class NoContentPreflightCORSMiddleware(CORSMiddleware):
    """Starlette CORSMiddleware, but successful preflights return 204 with an empty body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in _BODY_HEADERS
        }
        return Response(status_code=204, headers=headers)
