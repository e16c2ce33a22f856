"""One-shot response emission for buffered handlers.

A buffered handler finishes its request by calling ``emit`` exactly
once. The emitter records the response; the router sends it after the
handler returns. A second call is a programmer error and raises.
"""

from typing import Any

from perch.cors import CORSPolicy
from perch.errors import ResponseAlreadySent
from perch.http.response import Response

REDIRECT_STATUS = 301


class Emitter:
    """The ``emit(status_code=200, data={})`` callable given to handlers.

    ``emit(301, url)`` produces a redirect to ``url`` with an empty body.
    Any other status sends ``data`` as the body (bytes verbatim, str as
    text, everything else as JSON).
    """

    __slots__ = ("_cors", "_response")

    def __init__(self, cors: CORSPolicy) -> None:
        self._cors = cors
        self._response: Response | None = None

    def __call__(self, status_code: int = 200, data: Any = None) -> None:
        if self._response is not None:
            msg = "emit() was already called for this request."
            raise ResponseAlreadySent(msg)
        if data is None:
            data = {}

        if status_code == REDIRECT_STATUS:
            response = Response.redirect(str(data), status=REDIRECT_STATUS)
        else:
            response = Response.from_payload(data, status=status_code)
        self._response = self._cors.apply(response)

    @property
    def emitted(self) -> bool:
        return self._response is not None

    @property
    def response(self) -> Response | None:
        """The emitted response, or ``None`` if ``emit`` was never called."""
        return self._response
