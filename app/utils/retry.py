# app/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis


def _retry_on(exc_type, multiplier: float, max_wait: float, attempts: int = 3):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=multiplier, min=multiplier, max=max_wait),
        retry=retry_if_exception_type(exc_type),
    )


def http_retry():
    # Telegram Bot API
    return _retry_on(requests.RequestException, multiplier=0.3, max_wait=3)


def redis_retry():
    # mirror koszyka
    return _retry_on(redis.RedisError, multiplier=0.2, max_wait=2)
