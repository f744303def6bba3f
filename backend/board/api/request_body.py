"""Request Body — buffered reading of incrementally delivered request bodies.

Invariants:
    - The body is read to end-of-stream before anything parses it
    - Bodies over max_bytes are rejected as MalformedRequestError
"""

from fastapi import Request

from board.core.errors import MalformedRequestError


async def read_body(request: Request, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > max_bytes:
            raise MalformedRequestError(
                f"Request body exceeds {max_bytes} bytes",
            )
        chunks.append(chunk)
    return b"".join(chunks)
