"""Problem-detail responses shared by the lookup blueprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from flask import Response, jsonify

PROBLEM_MIMETYPE = "application/problem+json"


@dataclass(frozen=True)
class ProblemResponse:
    """RFC 7807-style error payload naming the table the request targeted."""

    error: str
    status: int
    message: str | None = None
    context: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error, "status": self.status}
        if self.message:
            payload["message"] = self.message
        payload.update({key: value for key, value in self.context.items() if value is not None})
        return payload

    def to_response(self) -> tuple[Response, int]:
        response = jsonify(self.as_dict())
        response.mimetype = PROBLEM_MIMETYPE
        return response, self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **context: Any,
) -> ProblemResponse:
    return ProblemResponse(error=error, status=status, message=message, context=context)


def not_found(message: str, **context: Any) -> ProblemResponse:
    return problem_response("not_found", status=404, message=message, **context)


__all__ = ["PROBLEM_MIMETYPE", "ProblemResponse", "not_found", "problem_response"]
