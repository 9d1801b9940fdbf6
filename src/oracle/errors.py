"""
Oracle Errors — таксономия ошибок PT оракула

Любая ошибка прерывает вызов целиком: ни одно поле состояния не меняется.
Повторных попыток внутри оракула нет; retry — ответственность вызывающего.

Иерархия:
    OracleError
    ├── AuthorizationError: NotManager, NotAdmin
    ├── ParameterValidationError (ValueError): PrecisionExceeded,
    │   InvalidUpdateInterval, InvalidManagerIdentity, NegativeParameter
    ├── RateLimitError: UpdateIntervalNotElapsed
    └── BoundedChangeError: SlopeChangeExceedsLimit, InterceptChangeExceedsLimit
"""


class OracleError(Exception):
    """Базовая ошибка оракула."""

    reason: str = "oracle error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.reason)


# =============================================================================
# AUTHORIZATION
# =============================================================================


class AuthorizationError(OracleError):
    """Вызывающий не обладает требуемой ролью."""


class NotManager(AuthorizationError):
    reason = "caller is not manager"


class NotAdmin(AuthorizationError):
    reason = "caller is not admin"


# =============================================================================
# VALIDATION
# =============================================================================


class ParameterValidationError(OracleError, ValueError):
    """Недопустимое значение параметра."""


class PrecisionExceeded(ParameterValidationError):
    """slope или intercept больше PRECISION."""

    def __init__(self, field: str, value: int, limit: int):
        self.field = field
        self.value = value
        self.limit = limit
        super().__init__(f"{field} exceeds precision")


class NegativeParameter(ParameterValidationError):
    """Параметр должен быть неотрицательным целым."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be a non-negative integer, got {value!r}")


class InvalidUpdateInterval(ParameterValidationError):
    reason = "invalid update interval"


class InvalidManagerIdentity(ParameterValidationError):
    reason = "invalid manager address"


# =============================================================================
# RATE LIMIT
# =============================================================================


class RateLimitError(OracleError):
    """Cooldown между мутациями кривой ещё не истёк."""


class UpdateIntervalNotElapsed(RateLimitError):
    reason = "update interval not elapsed"

    def __init__(self, elapsed: int | None = None, required: int | None = None):
        self.elapsed = elapsed
        self.required = required
        super().__init__()


# =============================================================================
# BOUNDED CHANGE
# =============================================================================


class BoundedChangeError(OracleError):
    """Запрошенное изменение больше установленного лимита."""

    def __init__(self, delta: int | None = None, limit: int | None = None):
        self.delta = delta
        self.limit = limit
        super().__init__()


class SlopeChangeExceedsLimit(BoundedChangeError):
    reason = "slope change exceeds limit"


class InterceptChangeExceedsLimit(BoundedChangeError):
    reason = "intercept change exceeds limit"
