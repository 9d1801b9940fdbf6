"""
Contract Validation Module

Модуль для валидации JSON контрактов PT оракула.
"""

from .validators import (
    ChangeRecordValidator,
    ContractValidator,
    OracleDeploymentValidator,
    SchemaLoader,
    validate_change_record,
    validate_oracle_deployment,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "OracleDeploymentValidator",
    "ChangeRecordValidator",
    # Functions
    "validate_oracle_deployment",
    "validate_change_record",
]
