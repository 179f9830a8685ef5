# SchoolDesk - request dependencies
from fastapi import Request

from records.repository import Repository


def get_repository(request: Request) -> Repository:
    """The app's one repository handle, created in the lifespan."""
    return request.app.state.repository
