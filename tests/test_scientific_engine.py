import math

import pytest

from CalcEngine import error as E
from CalcEngine import ScientificEngine
from CalcEngine.ScientificEngine import AngleMode, Binding, DEFAULT_ENVIRONMENT, build_default_environment


def test_angle_mode_complement():
    assert ~AngleMode.DEGREES is AngleMode.RADIANS
    assert ~AngleMode.RADIANS is AngleMode.DEGREES
    assert ~~AngleMode.DEGREES is AngleMode.DEGREES


def test_angle_mode_display():
    assert str(AngleMode.DEGREES) == "Deg"
    assert str(AngleMode.RADIANS) == "Rad"


@pytest.mark.parametrize("value, mode", [
    ("deg", AngleMode.DEGREES),
    ("RAD", AngleMode.RADIANS),
    (" degrees ", AngleMode.DEGREES),
    (AngleMode.RADIANS, AngleMode.RADIANS),
])
def test_angle_mode_from_setting(value, mode):
    assert AngleMode.from_setting(value) is mode


def test_angle_mode_from_invalid_setting():
    with pytest.raises(E.ConfigError) as info:
        AngleMode.from_setting("gradians")
    assert info.value.code == "5501"


class TestEnvironment:

    def test_contains_all_names(self):
        expected = {
            "pi", "e", "sin", "cos", "tan", "asin", "acos", "atan",
            "ceil", "floor", "round", "ln", "log", "abs", "sqrt",
        }
        assert set(DEFAULT_ENVIRONMENT) == expected

    def test_constants(self):
        assert DEFAULT_ENVIRONMENT["pi"].value == math.pi
        assert DEFAULT_ENVIRONMENT["e"].value == math.e
        assert not DEFAULT_ENVIRONMENT["pi"].is_function

    def test_functions_are_bindings(self):
        binding = DEFAULT_ENVIRONMENT["sqrt"]
        assert isinstance(binding, Binding)
        assert binding.is_function
        assert binding.function(9.0, AngleMode.RADIANS) == 3.0

    def test_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_ENVIRONMENT["tau"] = Binding.constant(2 * math.pi)

    def test_build_returns_fresh_equal_table(self):
        other = build_default_environment()
        assert other is not DEFAULT_ENVIRONMENT
        assert set(other) == set(DEFAULT_ENVIRONMENT)


class TestFunctions:

    def test_rounding_functions(self):
        assert ScientificEngine.ceil(-1.5) == -1.0
        assert ScientificEngine.floor(-1.5) == -2.0
        assert ScientificEngine.round_(2.5) == 3.0
        assert ScientificEngine.round_(-2.5) == -3.0
        assert ScientificEngine.round_(0.49999999999999994) == 0.0
        assert ScientificEngine.floor(math.inf) == math.inf

    def test_logarithms(self):
        assert ScientificEngine.log(1000.0) == 3.0
        assert ScientificEngine.ln(math.e) == 1.0
        assert ScientificEngine.ln(0.0) == -math.inf
        assert math.isnan(ScientificEngine.log(-1.0))

    def test_abs_and_sqrt(self):
        assert ScientificEngine.absolute(-2.0) == 2.0
        assert math.isnan(ScientificEngine.sqrt(-4.0))

    def test_trigonometry_modes(self):
        assert ScientificEngine.tan(45.0, AngleMode.DEGREES) == pytest.approx(1.0)
        assert ScientificEngine.sin(math.pi / 2, AngleMode.RADIANS) == 1.0
        assert ScientificEngine.acos(0.0, AngleMode.DEGREES) == pytest.approx(90.0)
        assert ScientificEngine.atan(1.0, AngleMode.DEGREES) == pytest.approx(45.0)

    def test_trigonometry_domain(self):
        assert math.isnan(ScientificEngine.asin(2.0, AngleMode.RADIANS))
        assert math.isnan(ScientificEngine.sin(math.inf, AngleMode.RADIANS))


class TestArithmetic:

    def test_divide(self):
        assert ScientificEngine.divide(1.0, 4.0) == 0.25
        assert ScientificEngine.divide(1.0, -0.0) == -math.inf
        assert ScientificEngine.divide(-1.0, 0.0) == -math.inf
        assert math.isnan(ScientificEngine.divide(0.0, 0.0))

    def test_power(self):
        assert ScientificEngine.power(2.0, 10.0) == 1024.0
        assert ScientificEngine.power(-2.0, 3.0) == -8.0
        assert ScientificEngine.power(-10.0, 401.0) == -math.inf
        assert ScientificEngine.power(10.0, 400.0) == math.inf
        assert math.isnan(ScientificEngine.power(-8.0, 0.5))
        assert ScientificEngine.power(0.0, -2.0) == math.inf
