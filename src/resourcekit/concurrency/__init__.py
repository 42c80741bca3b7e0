from .cancellation import (
    CancellationError,
    CancellationToken,
    CancellationTokenLike,
    CancellationTokenSource,
)

__all__ = [
    "CancellationError",
    "CancellationToken",
    "CancellationTokenLike",
    "CancellationTokenSource",
]
