"""
crumbs - cookie jar sample

A bare ASGI application using the cookie plugin: a visit counter,
signed login cookies and a route that checks them.
Run with: uv run uvicorn sample:app --reload
"""


import logging

from crumbs import CookieValue, Request, cookie

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
logger = logging.getLogger("crumbs.sample")


async def send_text(send, body: str, status: int = 200) -> None:
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [(b"content-type", b"text/plain; charset=utf-8")],
    })
    await send({"type": "http.response.body", "body": body.encode("utf-8")})


# =============================================================================
# Routes
# =============================================================================


async def counter(request: Request) -> tuple[str, int]:
    """Count visits in a plain cookie."""
    current = request.cookie.get("counter")
    request.cookie["counter"] = str(int(current) + 1) if current else "1"
    return request.cookie["counter"], 200


async def biscuit(request: Request) -> tuple[str, int]:
    request.cookie["biscuit"] = "tea"
    return "tea", 200


async def sign_in(request: Request) -> tuple[str, int]:
    """Store the user name as a signed cookie: /sign/<name>."""
    name = request.path.removeprefix("/sign/")
    request.cookie["name"] = CookieValue(name, signed=True)
    return name, 200


async def sign_out(request: Request) -> tuple[str, int]:
    del request.cookie["name"]
    return "signed out", 200


async def auth(request: Request) -> tuple[str, int]:
    """Only answer when the signed name cookie verifies."""
    token = request.cookie.get("name")
    if token is None:
        return "Unauthorized", 401

    valid, value = request.unsign_cookie(token)
    if not valid:
        logger.warning("Rejected tampered name cookie")
        return "Unauthorized", 401

    return value or "", 200


ROUTES = {
    "/": counter,
    "/cookie": biscuit,
    "/sign-out": sign_out,
    "/auth": auth,
}


async def application(scope, receive, send) -> None:
    if scope["type"] != "http":
        return

    request = Request(scope, receive)
    handler = sign_in if request.path.startswith("/sign/") else ROUTES.get(request.path)
    if handler is None:
        await send_text(send, "Not Found", 404)
        return

    body, status = await handler(request)
    await send_text(send, body, status)


# =============================================================================
# Application Setup
# =============================================================================

app = cookie(secret="{YOUR_SECRET_HERE}", httponly=True, samesite="lax")(application)
