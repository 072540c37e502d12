"""Middleware modules for the Arena API."""

from arena.middleware.cors import ApiCORSMiddleware
from arena.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware

__all__ = ["ApiCORSMiddleware", "RequestIDMiddleware", "REQUEST_ID_HEADER"]
