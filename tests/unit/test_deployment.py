"""Тесты для Deployment (конфигурация и сборка PtOracle)."""

import json

import jsonschema
import pydantic
import pytest

from src.core.domain import ZERO_ADDRESS
from src.core.math.fixed_point import PRECISION, SECONDS_PER_DAY
from src.oracle import OracleDeployment, PtOracle, deploy, load_deployment, parse_deployment

from tests.unit.conftest import ADMIN, MANAGER, T0, FixedExpiryToken, StaticPriceSource


@pytest.fixture
def deployment_data():
    return {
        "slope": 10**16,
        "intercept": 5 * 10**15,
        "max_update_interval": 86400,
        "max_slope_change": 10**17,
        "max_intercept_change": 5 * 10**16,
        "manager": MANAGER,
        "admin": ADMIN,
    }


class TestParseDeployment:
    def test_valid(self, deployment_data):
        config = parse_deployment(deployment_data)

        assert isinstance(config, OracleDeployment)
        assert config.slope == 10**16
        assert config.max_slope_change == 10**17

    def test_defaults(self):
        config = parse_deployment({"slope": 0, "intercept": 0, "max_update_interval": 60, "manager": MANAGER, "admin": ADMIN})
        assert config.max_slope_change == 0
        assert config.max_intercept_change == 0

    def test_schema_violation(self, deployment_data):
        deployment_data["intercept"] = PRECISION + 1
        with pytest.raises(jsonschema.ValidationError):
            parse_deployment(deployment_data)

    def test_zero_address_passes_schema_but_not_model(self, deployment_data):
        deployment_data["manager"] = ZERO_ADDRESS
        with pytest.raises(pydantic.ValidationError):
            parse_deployment(deployment_data)


class TestLoadDeployment:
    def test_load_from_file(self, tmp_path, deployment_data):
        path = tmp_path / "deployment.json"
        path.write_text(json.dumps(deployment_data), encoding="utf-8")

        config = load_deployment(path)
        assert config.manager == MANAGER
        assert config.admin == ADMIN

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_deployment(tmp_path / "missing.json")


class TestDeploy:
    def test_builds_oracle_with_limits(self, clock, deployment_data):
        config = parse_deployment(deployment_data)
        token = FixedExpiryToken(T0 + 30 * SECONDS_PER_DAY)
        source = StaticPriceSource()

        oracle = deploy(config, token, source, clock=clock)

        assert isinstance(oracle, PtOracle)
        assert oracle.pt is token
        assert oracle.underlying_oracle is source
        assert oracle.pt_expiry == token.expiry
        assert oracle.slope == 10**16
        assert oracle.intercept == 5 * 10**15
        assert oracle.max_slope_change == 10**17
        assert oracle.max_intercept_change == 5 * 10**16
        assert oracle.last_discount_update == T0
        assert 0 < oracle.price() < PRECISION

    def test_zero_limits_skip_set_limits(self, clock, deployment_data):
        deployment_data["max_slope_change"] = 0
        deployment_data["max_intercept_change"] = 0
        config = parse_deployment(deployment_data)

        oracle = deploy(config, FixedExpiryToken(T0 + 1), StaticPriceSource(), clock=clock)

        assert oracle.events == ()
