"""Cross-origin policy.

A fixed header set added to every static and dynamic response, and the
preflight short-circuit the dispatcher runs before any routing.
"""

from __future__ import annotations

from dataclasses import dataclass

from perch.http.response import Response

PREFLIGHT_METHOD = "OPTIONS"


@dataclass(frozen=True, slots=True)
class CORSPolicy:
    """CORS response headers. Permissive by default.

    Override what you need::

        CORSPolicy(allow_origin="https://example.com", max_age=600)
    """

    allow_origin: str = "*"
    allow_methods: tuple[str, ...] = ("OPTIONS", "GET", "POST", "PUT", "PATCH", "DELETE")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization", "X-Requested-With")
    max_age: int = 2592000  # 30 days

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        """The header pairs added to every response."""
        return (
            ("Access-Control-Allow-Origin", self.allow_origin),
            ("Access-Control-Allow-Methods", ", ".join(self.allow_methods)),
            ("Access-Control-Allow-Headers", ", ".join(self.allow_headers)),
            ("Access-Control-Max-Age", str(self.max_age)),
        )

    def apply(self, response: Response) -> Response:
        """Return *response* with the policy headers added."""
        return response.with_headers(self.headers)

    @staticmethod
    def is_preflight(method: str) -> bool:
        """True for the preflight verb, in any case."""
        return method.upper() == PREFLIGHT_METHOD

    def preflight_response(self) -> Response:
        """204 with the policy headers and no body."""
        return self.apply(Response(body=b"", status=204))
