from fastapi import Request

from services.context import AppContext


def get_context(request: Request) -> AppContext:
    return request.app.state.context
