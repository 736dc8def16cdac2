import pytest

from services.receipt_service import ReceiptService


class FakeReceiptRepository:
    def __init__(self, expired=0, error=None):
        self.expired = expired
        self.error = error
        self.calls = 0

    def expire_unclaimed(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.expired


def test_expire_returns_count():
    repo = FakeReceiptRepository(expired=3)

    assert ReceiptService(repo).expire_unclaimed() == 3
    assert repo.calls == 1


def test_expire_propagates_database_errors():
    service = ReceiptService(FakeReceiptRepository(error=RuntimeError("boom")))

    with pytest.raises(RuntimeError, match="boom"):
        service.expire_unclaimed()
