import pytest

from lazystream import config
from lazystream.config import configure, reset_config, resolve_memo


@pytest.fixture(autouse=True)
def default_config():
    reset_config()
    yield
    reset_config()


def test_defaults():
    assert config.MEMOIZE is True
    assert config.STRICT_LIMIT is None


def test_configure_memoize():
    configure(memoize=False)
    assert config.MEMOIZE is False
    assert resolve_memo(None) is False
    assert resolve_memo(True) is True


def test_configure_strict_limit():
    configure(strict_limit=10)
    assert config.STRICT_LIMIT == 10
    configure(memoize=True)
    assert config.STRICT_LIMIT == 10
    configure(strict_limit=None)
    assert config.STRICT_LIMIT is None


def test_configure_rejects_bad_values():
    with pytest.raises(ValueError):
        configure(strict_limit=-1)
    with pytest.raises(ValueError):
        configure(strict_limit=2.5)
    with pytest.raises(ValueError):
        configure(strict_limit=True)
    assert config.STRICT_LIMIT is None
    with pytest.raises(TypeError):
        configure(cache=True)


def test_reset_config():
    configure(memoize=False, strict_limit=3)
    reset_config()
    assert config.MEMOIZE is True
    assert config.STRICT_LIMIT is None
