# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis


def _transient(exc_type, base: float, cap: float, attempts: int = 3):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=base, min=base, max=cap),
        retry=retry_if_exception_type(exc_type),
    )


# only for idempotent calls (GET, redis); charge creation is never retried
def http_retry():
    return _transient(requests.RequestException, base=0.3, cap=3)


def redis_retry():
    return _transient(redis.RedisError, base=0.2, cap=2)
