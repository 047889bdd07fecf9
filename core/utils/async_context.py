"""Base class for objects that own async resources."""


class AsyncContextManager:
    """Mixin giving ``async with`` support to anything with an async close().

    Used by the HTTP client (closes the httpx pool) and by graph retrieval
    sessions (stops polling when the block exits early).
    """

    async def close(self) -> None:
        """Release resources. Override in subclass."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
