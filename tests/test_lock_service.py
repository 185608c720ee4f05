from storefront.services.lock_service import LockService


class StubRedis:
    """Minimalny redis: SET NX i skrypt porownaj-i-usun."""

    def __init__(self):
        self.store = {}
        self.ttl = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.store:
            return None
        self.store[name] = value
        self.ttl[name] = ex
        return True

    def eval(self, script, numkeys, key, token):
        if self.store.get(key) == token:
            del self.store[key]
            return 1
        return 0


def test_lock_is_exclusive_per_user():
    locks = LockService(client=StubRedis())

    token = locks.acquire_checkout_lock(1, ttl=30)

    assert token
    assert locks.acquire_checkout_lock(1, ttl=30) is None
    assert locks.acquire_checkout_lock(2, ttl=30)


def test_only_owner_releases():
    redis = StubRedis()
    locks = LockService(client=redis)
    token = locks.acquire_checkout_lock(1, ttl=30)

    assert redis.ttl["checkout:user:1:lock"] == 30
    assert locks.release_checkout_lock(1, "someone-else") is False
    assert locks.release_checkout_lock(1, token) is True
    assert locks.acquire_checkout_lock(1, ttl=30)
