# ScientificEngine
"""""
Named constants and single-argument functions used by the MathEngine.

The default environment is built exactly once (at import) and handed to every
evaluation as a read-only mapping, so concurrent callers never share mutable
state. Every function here follows IEEE-754 for out-of-domain input
(nan / inf) instead of raising like the plain `math` module does.
"""""
import enum
import math
from decimal import Decimal, localcontext, ROUND_HALF_UP
from types import MappingProxyType

from . import error as E


class AngleMode(enum.Enum):
    """Unit convention for the trigonometric functions."""
    DEGREES = "deg"
    RADIANS = "rad"

    def is_deg(self):
        return self is AngleMode.DEGREES

    def __invert__(self):
        # Degrees <-> Radians
        if self is AngleMode.DEGREES:
            return AngleMode.RADIANS
        return AngleMode.DEGREES

    def __str__(self):
        return "Deg" if self is AngleMode.DEGREES else "Rad"

    @classmethod
    def from_setting(cls, value):
        """Parse the config value ('deg' / 'rad', case-insensitive)."""
        if isinstance(value, AngleMode):
            return value
        text = str(value).strip().lower()
        if text in ("deg", "degree", "degrees"):
            return cls.DEGREES
        if text in ("rad", "radian", "radians"):
            return cls.RADIANS
        raise E.ConfigError(E.ERROR_MESSAGES["5501"] + str(value), code="5501")


class Binding:
    """Value bound to a name: either a constant or a function(value, mode)."""
    __slots__ = ("value", "function")

    def __init__(self, value=None, function=None):
        self.value = value
        self.function = function

    @classmethod
    def constant(cls, value):
        return cls(value=float(value))

    @classmethod
    def function_of(cls, function):
        return cls(function=function)

    @property
    def is_function(self):
        return self.function is not None

    def __repr__(self):
        if self.is_function:
            return f"Binding.function({self.function.__name__})"
        return f"Binding.constant({self.value!r})"


# -----------------------------
# IEEE-754 helpers
# -----------------------------

def round_half_away(x, places=0):
    """Round to `places` decimal places, ties away from zero (2.5 -> 3, -2.5 -> -3).

    Works on the exact binary value, so large magnitudes are rounded too.
    """
    if not math.isfinite(x):
        return x
    with localcontext() as ctx:
        # 1.8e308 with 15 decimals still fits
        ctx.prec = 400
        ctx.rounding = ROUND_HALF_UP
        rundungs_muster = Decimal(1).scaleb(-places)
        return math.copysign(float(Decimal(x).quantize(rundungs_muster)), x)


def divide(left, right):
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _is_odd_integer(value):
    return math.isfinite(value) and value == int(value) and int(value) % 2 == 1


def power(base, exponent):
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ** negative is a pole, anything else left here is a domain error
        if base == 0 and exponent < 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


def _domain_safe(function, x):
    try:
        return function(x)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


def _logarithm(function, x):
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return function(x)


# -----------------------------
# Built-in functions (value, mode) -> float
# -----------------------------

def ceil(x, mode=None):
    return float(math.ceil(x)) if math.isfinite(x) else x


def floor(x, mode=None):
    return float(math.floor(x)) if math.isfinite(x) else x


def round_(x, mode=None):
    return round_half_away(x)


def ln(x, mode=None):
    return _logarithm(math.log, x)


def log(x, mode=None):
    """Base 10 logarithm."""
    return _logarithm(math.log10, x)


def absolute(x, mode=None):
    return math.fabs(x)


def sqrt(x, mode=None):
    return _domain_safe(math.sqrt, x)


def _to_radians(x, mode):
    return math.radians(x) if mode is not None and mode.is_deg() else x


def _from_radians(x, mode):
    return math.degrees(x) if mode is not None and mode.is_deg() else x


def sin(x, mode=None):
    return _domain_safe(math.sin, _to_radians(x, mode))


def cos(x, mode=None):
    return _domain_safe(math.cos, _to_radians(x, mode))


def tan(x, mode=None):
    return _domain_safe(math.tan, _to_radians(x, mode))


def asin(x, mode=None):
    return _from_radians(_domain_safe(math.asin, x), mode)


def acos(x, mode=None):
    return _from_radians(_domain_safe(math.acos, x), mode)


def atan(x, mode=None):
    return _from_radians(math.atan(x), mode)


# -----------------------------
# Environment
# -----------------------------

CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}

FUNCTIONS = {
    "sin": sin,
    "cos": cos,
    "tan": tan,
    "asin": asin,
    "acos": acos,
    "atan": atan,
    "ceil": ceil,
    "floor": floor,
    "round": round_,
    "ln": ln,
    "log": log,
    "abs": absolute,
    "sqrt": sqrt,
}


def build_default_environment():
    """Return the read-only name -> Binding table."""
    table = {}
    for name, value in CONSTANTS.items():
        table[name] = Binding.constant(value)
    for name, function in FUNCTIONS.items():
        table[name] = Binding.function_of(function)
    return MappingProxyType(table)


DEFAULT_ENVIRONMENT = build_default_environment()
