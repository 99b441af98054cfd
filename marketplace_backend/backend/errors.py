# backend/errors.py

"""
API ERROR NORMALIZATION

Domain errors raised by services are translated by views into:

    {"error": {"code": "<machine_code>", "message": "<human message>"}}

Serializer validation errors keep DRF's default 400 shape.
"""

from __future__ import annotations

from rest_framework.response import Response


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )
