"""
Tests for JSON Schema Contract Validators

Комплексное тестирование rational контракта:
- Валидность самой схемы
- Валидация правильных данных (плоских и вложенных)
- Детекция нарушений required полей, типов и constraints
- Интеграция с Pydantic моделью Rational (model_dump / model_validate)
"""

import pytest
from jsonschema import Draft202012Validator, ValidationError

from src.core.contracts import (
    RationalValidator,
    SchemaLoader,
    validate_rational,
)
from src.core.math import Rational, ZeroDenominatorError


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_rational():
    """Валидный сериализованный Rational."""
    return {"numerator": -3, "denominator": 4}


@pytest.fixture
def valid_nested_rational():
    """Валидный вложенный Rational: (1/2) / (1/3)."""
    return {
        "numerator": {"numerator": 1, "denominator": 2},
        "denominator": {"numerator": 1, "denominator": 3},
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузки схем"""

    def test_rational_schema_is_valid(self):
        """Сама схема проходит meta-validation."""
        schema = SchemaLoader().load_schema("rational")
        Draft202012Validator.check_schema(schema)
        assert schema["title"] == "Rational"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("rational") is loader.load_schema("rational")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError, match="Schema not found"):
            SchemaLoader().load_schema("does_not_exist")


# =============================================================================
# RATIONAL CONTRACT
# =============================================================================


class TestRationalContract:
    """Тесты валидации rational контракта"""

    def test_valid(self, valid_rational):
        validate_rational(valid_rational)

    def test_valid_nested(self, valid_nested_rational):
        validate_rational(valid_nested_rational)

    def test_missing_denominator(self, valid_rational):
        del valid_rational["denominator"]
        with pytest.raises(ValidationError):
            validate_rational(valid_rational)

    def test_additional_property(self, valid_rational):
        valid_rational["sign"] = "-"
        with pytest.raises(ValidationError):
            validate_rational(valid_rational)

    @pytest.mark.parametrize("denominator", [0, -2])
    def test_non_positive_denominator(self, valid_rational, denominator):
        """Целочисленный знаменатель должен быть >= 1."""
        valid_rational["denominator"] = denominator
        with pytest.raises(ValidationError):
            validate_rational(valid_rational)

    @pytest.mark.parametrize("numerator", ["1", 1.5, True, None])
    def test_non_integer_numerator(self, valid_rational, numerator):
        valid_rational["numerator"] = numerator
        with pytest.raises(ValidationError):
            validate_rational(valid_rational)

    def test_is_valid_and_iter_errors(self, valid_rational):
        validator = RationalValidator()
        assert validator.is_valid(valid_rational)

        invalid = {"numerator": "x", "denominator": 0}
        assert not validator.is_valid(invalid)
        assert len(list(validator.iter_errors(invalid))) == 2


# =============================================================================
# PYDANTIC INTEGRATION
# =============================================================================


class TestRationalSerialization:
    """Интеграция Rational с контрактом"""

    def test_model_dump(self):
        assert Rational.new(3, -4).model_dump() == {"numerator": -3, "denominator": 4}

    def test_dump_passes_contract(self):
        RationalValidator().validate_value(Rational.new(6, -8))

    def test_nested_dump_passes_contract(self):
        value = Rational.new(Rational.new(1, 2), Rational.new(1, 3))
        dumped = value.model_dump(mode="json")
        assert dumped == {
            "numerator": {"numerator": 3, "denominator": 1},
            "denominator": {"numerator": 2, "denominator": 1},
        }
        RationalValidator().validate_value(value)

    def test_raw_negative_denominator_violates_contract(self):
        """Неканоническая raw-пара нарушает контракт."""
        with pytest.raises(ValidationError):
            RationalValidator().validate_value(Rational.raw(1, -2))

    def test_model_validate_normalizes(self):
        value = Rational.model_validate({"numerator": 2, "denominator": -4})
        assert value.numerator == -1
        assert value.denominator == 2

    def test_model_validate_nested(self, valid_nested_rational):
        value = Rational.model_validate(valid_nested_rational)
        assert isinstance(value.numerator, Rational)
        assert value == Rational.new(3, 2)

    def test_json_round_trip(self):
        value = Rational.new(-5, 6)
        assert Rational.model_validate_json(value.model_dump_json()) == value

    def test_model_validate_zero_denominator(self):
        with pytest.raises(ZeroDenominatorError):
            Rational.model_validate({"numerator": 1, "denominator": 0})
