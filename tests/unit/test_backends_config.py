"""
Тесты конфигурации движка и backend'ов

Проверяет:
1. EngineConfig: значения по умолчанию, приведение строк, immutability
2. resolve_backend
3. Контракт CalculatorFloat для обеих реализаций
4. NativeFloat: арифметика, знак, деление на ноль
5. Engine: backend и политика из конфигурации
"""

import dataclasses
import logging

import pytest

from tifloats import (
    DEFAULT_CONFIG,
    Backend,
    CalculatorFloat,
    DivideByZeroError,
    Engine,
    EngineConfig,
    Float,
    FloatOverflowError,
    NativeFloat,
    ValidationPolicy,
    resolve_backend,
    tifloat,
)

ONE = 0x10000000000000


# =============================================================================
# CONFIG
# =============================================================================


class TestEngineConfig:
    """Тесты EngineConfig"""

    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.policy == ValidationPolicy.CHECKED
        assert DEFAULT_CONFIG.backend == Backend.DECIMAL
        assert DEFAULT_CONFIG.is_checked

    def test_strings_coerced(self) -> None:
        config = EngineConfig(policy="trusted", backend="native")

        assert config.policy is ValidationPolicy.TRUSTED
        assert config.backend is Backend.NATIVE
        assert not config.is_checked

    @pytest.mark.parametrize("field", ["policy", "backend"])
    def test_unknown_value(self, field: str) -> None:
        with pytest.raises(ValueError):
            EngineConfig(**{field: "bogus"})

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.policy = ValidationPolicy.TRUSTED  # type: ignore[misc]

    def test_policy_is_str_enum(self) -> None:
        assert ValidationPolicy.CHECKED == "checked"


class TestResolveBackend:
    """Тесты resolve_backend"""

    def test_default_is_decimal(self) -> None:
        assert resolve_backend() is Float

    def test_native(self) -> None:
        assert resolve_backend(EngineConfig(backend=Backend.NATIVE)) is NativeFloat

    def test_logs_choice(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="tifloats.backends"):
            resolve_backend(EngineConfig(backend="native"))

        assert "NativeFloat" in caplog.text


class TestEngine:
    """Engine применяет backend и политику из EngineConfig"""

    def test_default_engine_is_checked_decimal(self) -> None:
        engine = Engine()

        assert engine.backend is Float
        with pytest.raises(FloatOverflowError):
            engine.mul(engine.new(False, 99, ONE), engine.new(False, 50, ONE))

    def test_trusted_policy_wraps_exponent(self) -> None:
        engine = Engine(EngineConfig(policy="trusted"))

        result = engine.mul(tifloat(ONE, 99), tifloat(ONE, 50))

        assert result.exponent == (0x80 + 149) & 0xFF

    def test_trusted_policy_applies_to_literals(self) -> None:
        engine = Engine(EngineConfig(policy=ValidationPolicy.TRUSTED))

        assert engine.new(False, 200, 0xA0000000000000).mantissa.bits == 0xA0000000000000

    def test_checked_policy_applies_to_literals(self) -> None:
        with pytest.raises(FloatOverflowError):
            Engine().new(False, 100, ONE)

    @pytest.mark.parametrize("operation", ["add", "sub", "mul", "div"])
    def test_operations_match_methods(self, operation: str) -> None:
        a, b = tifloat(0x31415926535898, 3), tifloat(0x27182818284590, -2, negative=True)
        method = {"add": Float.try_add, "sub": Float.try_sub, "mul": Float.try_mul, "div": Float.try_div}

        assert getattr(Engine(), operation)(a, b) == method[operation](a, b)

    def test_native_engine(self) -> None:
        engine = Engine(EngineConfig(backend="native"))

        a = engine.new(False, 5, ONE)
        b = engine.new(True, 4, ONE)

        assert isinstance(a, NativeFloat)
        assert engine.add(a, b) == NativeFloat(9e4)
        assert engine.div(a, b) == NativeFloat(10.0)

    def test_engine_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Engine().config = DEFAULT_CONFIG  # type: ignore[misc]


# =============================================================================
# CONTRACT
# =============================================================================


class TestCalculatorFloatContract:
    """Обе реализации удовлетворяют протоколу"""

    def test_decimal_float(self) -> None:
        assert isinstance(tifloat(ONE, 0), CalculatorFloat)

    def test_native_float(self) -> None:
        assert isinstance(NativeFloat(1.0), CalculatorFloat)

    def test_plain_float_is_not(self) -> None:
        assert not isinstance(1.0, CalculatorFloat)


# =============================================================================
# NATIVE BACKEND
# =============================================================================


class TestNativeFloat:
    """Тесты NativeFloat"""

    def test_arithmetic(self) -> None:
        a, b = NativeFloat(1e5), NativeFloat(-1e4)

        assert a.try_add(b) == NativeFloat(9e4)
        assert a.try_sub(b) == NativeFloat(1.1e5)
        assert a.try_mul(b) == NativeFloat(-1e9)
        assert a.try_div(b) == NativeFloat(10.0)

    @pytest.mark.parametrize(
        "dividend,divisor,expected",
        [
            (6.0, -3.0, 2.0),
            (-6.0, 3.0, -2.0),
            (-6.0, -3.0, -2.0),
            (6.0, 3.0, 2.0),
        ],
    )
    def test_div_sign_from_dividend(self, dividend: float, divisor: float, expected: float) -> None:
        """Знак частного, как и у packed-decimal движка, только от делимого"""
        assert NativeFloat(dividend).try_div(NativeFloat(divisor)) == NativeFloat(expected)

    def test_new_matches_decimal_literal(self) -> None:
        assert NativeFloat.new(True, -1, 0x25000000000000) == NativeFloat(-0.25)

    def test_policy_accepted(self) -> None:
        """Переполнения нет, политика не меняет результат"""
        a, b = NativeFloat(1e99), NativeFloat(1e50)

        assert a.try_mul(b, policy=ValidationPolicy.TRUSTED) == a.try_mul(b)

    def test_divide_by_zero(self) -> None:
        with pytest.raises(DivideByZeroError):
            NativeFloat(1.0).try_div(NativeFloat(0.0))

    def test_divide_by_zero_is_zero_division_error(self) -> None:
        with pytest.raises(ZeroDivisionError):
            NativeFloat(1.0).try_div(NativeFloat(-0.0))

    def test_negate_in_place(self) -> None:
        value = NativeFloat(2.5)
        value.negate()

        assert value.value == -2.5
        assert value.is_negative()

    def test_negative_zero(self) -> None:
        assert NativeFloat(-0.0).is_negative()
        assert not NativeFloat(0.0).is_negative()

    def test_mark_complex_half_is_noop(self) -> None:
        value = NativeFloat(3.0)
        value.mark_complex_half()

        assert value == NativeFloat(3.0)

    def test_ordering(self) -> None:
        assert NativeFloat(-1.0) < NativeFloat(0.0) <= NativeFloat(0.0)
        assert NativeFloat(2.0) > NativeFloat(1.0)
        assert sorted([NativeFloat(3.0), NativeFloat(-2.0)]) == [NativeFloat(-2.0), NativeFloat(3.0)]

    def test_from_float(self) -> None:
        assert NativeFloat.from_float(tifloat(0x25000000000000, -1)) == NativeFloat(0.25)

    @pytest.mark.parametrize(
        "left,right",
        [
            ((0x50000000000000, 5, False), (0x50000000000000, 4, False)),
            ((ONE, 5, False), (ONE, 4, True)),
            ((0x31415926535898, 0, False), (0x27182818284590, 0, True)),
        ],
    )
    def test_agrees_with_decimal_backend(self, left: tuple, right: tuple) -> None:
        """Результаты совпадают с packed-decimal движком до точности double"""
        a = tifloat(left[0], left[1], negative=left[2])
        b = tifloat(right[0], right[1], negative=right[2])
        native_a, native_b = NativeFloat.from_float(a), NativeFloat.from_float(b)

        for operation in ("try_add", "try_sub", "try_mul", "try_div"):
            decimal_result = float(getattr(a, operation)(b))
            native_result = float(getattr(native_a, operation)(native_b))
            assert native_result == pytest.approx(decimal_result, rel=1e-12)
