from typing import Optional

from fastapi import Request


def client_ip(request: Request) -> str:
    """Remote address of the caller as seen by the ASGI server"""
    if request.client is None:
        return "unknown"
    return request.client.host


def client_user_agent(request: Request) -> Optional[str]:
    user_agent = request.headers.get("user-agent")
    if user_agent is None:
        return None
    return user_agent[:512]
