import pytest
from fastapi.testclient import TestClient

from tests.scenario_inputs import sample_scenario


@pytest.fixture
def scenario_payload():
    return sample_scenario()


@pytest.fixture
def client():
    from propanalyzer.main import app

    return TestClient(app)
