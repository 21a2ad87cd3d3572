import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.main import create_app
from storefront.services.rates.cache_service import RateTableCacheService
from tests.helpers import StubRateProvider


@pytest.fixture
def settings(tmp_path) -> Settings:
    s = Settings(data_dir=tmp_path, _env_file=None)
    s.init_post_load()
    return s


@pytest.fixture
def rate_provider() -> StubRateProvider:
    return StubRateProvider({"INR": 1.0, "USD": 0.012, "EUR": 0.011, "GBP": 0.0095})


@pytest.fixture
def app(settings, rate_provider):
    return create_app(settings, rate_service=RateTableCacheService(rate_provider, 3600))


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
