from skillrouter.utils.retry import RetryConfig, RetryResult, retry_with_result
from skillrouter.utils.ttl_cache import TTLCache

__all__ = [
    "RetryConfig",
    "RetryResult",
    "TTLCache",
    "retry_with_result",
]
