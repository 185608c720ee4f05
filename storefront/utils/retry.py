# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from sqlalchemy.exc import IntegrityError
import redis

from storefront.utils.settings import ORDER_NUMBER_ATTEMPTS


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


#kolizja numeru zamowienia na unique index, nowy numer i jeszcze raz
def order_number_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(ORDER_NUMBER_ATTEMPTS),
        retry=retry_if_exception_type(IntegrityError),
    )
