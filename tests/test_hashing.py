import pytest

from pvzservice.hashing import BcryptHash, EqualsParam


@pytest.fixture(scope="module")
def hasher():
    return BcryptHash(5)


def test_bcrypt(hasher):
    password = "password"
    hashed = hasher.hash(password)
    assert hashed != password

    assert hasher.equal(EqualsParam(hashed=hashed, value=password)) is True
    assert hasher.equal(EqualsParam(hashed=hashed, value=password + password)) is False

    hashed2 = hasher.hash(password + password)
    assert hashed != hashed2


def test_same_password_hashes_differ(hasher):
    password = "password"
    first = hasher.hash(password)
    second = hasher.hash(password)
    assert first != second
    assert hasher.equal(EqualsParam(hashed=first, value=password)) is True
    assert hasher.equal(EqualsParam(hashed=second, value=password)) is True


def test_cost_below_minimum_falls_back():
    password = "password"
    low = BcryptHash(3)
    hashed = low.hash(password)
    assert low.equal(EqualsParam(hashed=hashed, value=password)) is True


def test_cost_above_maximum_raises():
    password = "password"
    with pytest.raises(ValueError):
        BcryptHash(32).hash(password)


def test_too_long_password_raises(hasher):
    password = "password"
    with pytest.raises(ValueError):
        hasher.hash(password * 10)


def test_invalid_hash_is_not_equal(hasher):
    password = "password"
    assert hasher.equal(EqualsParam(hashed="garbage", value=password)) is False