"""PT Oracle — цена principal token с линейным дисконтом до погашения.

- PriceCache: цена и кэш на timestamp
- ParameterGovernor: мутации кривой и лимитов с cooldown и bounded-change
- AccessControl: роли manager / admin
"""

from .access_control import AccessControl
from .clock import Clock, ManualClock, SystemClock
from .deployment import OracleDeployment, deploy, load_deployment, parse_deployment
from .errors import (
    AuthorizationError,
    BoundedChangeError,
    InterceptChangeExceedsLimit,
    InvalidManagerIdentity,
    InvalidUpdateInterval,
    NegativeParameter,
    NotAdmin,
    NotManager,
    OracleError,
    ParameterValidationError,
    PrecisionExceeded,
    RateLimitError,
    SlopeChangeExceedsLimit,
    UpdateIntervalNotElapsed,
)
from .governor import ParameterGovernor
from .price_cache import PriceCache
from .pt_oracle import PtOracle

__all__ = [
    # Facade
    "PtOracle",
    # Components
    "AccessControl",
    "ParameterGovernor",
    "PriceCache",
    # Clock
    "Clock",
    "SystemClock",
    "ManualClock",
    # Deployment
    "OracleDeployment",
    "deploy",
    "load_deployment",
    "parse_deployment",
    # Errors
    "OracleError",
    "AuthorizationError",
    "NotManager",
    "NotAdmin",
    "ParameterValidationError",
    "PrecisionExceeded",
    "NegativeParameter",
    "InvalidUpdateInterval",
    "InvalidManagerIdentity",
    "RateLimitError",
    "UpdateIntervalNotElapsed",
    "BoundedChangeError",
    "SlopeChangeExceedsLimit",
    "InterceptChangeExceedsLimit",
]
