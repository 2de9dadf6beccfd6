from fastapi import Request

from dev_server.store import InMemoryTaskCollection


def task_collection(request: Request) -> InMemoryTaskCollection:
    return request.app.state.collection
