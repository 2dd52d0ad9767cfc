"""
Rational — точное рациональное число над произвольным скаляром

Модуль реализует value type Rational, параметризованный любым скалярным
типом с контрактом упорядоченного кольца (см. src.core.math.scalar):
- Канонизация (сокращение на GCF + нормализация знака) в каждом конструкторе
  и в результате каждой арифметической операции
- Равенство и порядок через перекрёстное умножение (без деления и float)
- Rational сам реализует контракт скаляра (RationalOps), поэтому
  Rational от Rational — валидный скаляр (вложенность не ограничена)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ (каноническая форма):
1. denominator > ZERO
2. gcf(|numerator|, |denominator|) == ONE
3. Знак значения хранится только в numerator
4. Значения immutable: каждая операция возвращает новый Rational

ФОРМУЛЫ:
    n1/d1 + n2/d2 = (n1*d2 + n2*d1) / (d1*d2)
    n1/d1 - n2/d2 = (n1*d2 - n2*d1) / (d1*d2)
    n1/d1 * n2/d2 = (n1*n2) / (d1*d2)
    n1/d1 / n2/d2 = (n1*d2) / (d1*n2)
    n1/d1 % n2/d2 = ((n1*d2) % (d1*n2)) / (d1*d2)
    n1/d1 == n2/d2  <=>  n1*d2 == d1*n2
    n1/d1 <  n2/d2  <=>  n1*d2 - d1*n2 < ZERO
"""

import logging
from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from src.core.math.scalar import (
    INTEGER_OPS,
    ScalarOps,
    is_scalar,
    scalar_ops,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NegativeOperandError(ValueError):
    """
    Нарушение предусловия gcf: отрицательный операнд.

    Через публичные конструкторы недостижимо: знак снимается до вызова gcf.
    """

    pass


class ZeroDenominatorError(ZeroDivisionError):
    """
    Нулевой знаменатель.

    Возникает в new(n, ZERO), при делении/остатке на нулевой Rational
    и при inv() от нуля.
    """

    pass


# =============================================================================
# GCF
# =============================================================================


def gcf(a: Any, b: Any, ops: Optional[ScalarOps] = None) -> Any:
    """
    Наибольший общий делитель двух неотрицательных скаляров.

    Алгоритм (Евклид через остаток):
    - Если один операнд ZERO → результат другой операнд
    - Если операнды равны → результат этот операнд
    - Иначе больший операнд заменяется на larger % smaller

    Args:
        a: Неотрицательный скаляр
        b: Неотрицательный скаляр
        ops: ScalarOps операндов (default: по типу a)

    Returns:
        GCF(a, b); gcf(0, x) == x

    Raises:
        NegativeOperandError: Если любой операнд < ZERO

    Examples:
        >>> gcf(12, 18)
        6
        >>> gcf(0, 7)
        7
    """
    if ops is None:
        ops = scalar_ops(a)
    zero = ops.zero

    if a < zero or b < zero:
        logger.error("gcf precondition violated: a=%s b=%s", a, b)
        raise NegativeOperandError(
            f"cannot compute GCF of negative operands: {ops.render(a)}, {ops.render(b)}"
        )

    while True:
        if a == zero:
            return b
        if b == zero:
            return a
        if a > b:
            a = ops.rem(a, b)
        elif b > a:
            b = ops.rem(b, a)
        else:
            return a


def _align_kinds(numerator: Any, denominator: Any) -> Tuple[Any, Any]:
    # Rational в одной части и голый скаляр в другой: голый скаляр вкладывается
    if isinstance(numerator, Rational) and not isinstance(denominator, Rational):
        return numerator, Rational.whole(denominator)
    if isinstance(denominator, Rational) and not isinstance(numerator, Rational):
        return Rational.whole(numerator), denominator
    return numerator, denominator


def reduce_pair(numerator: Any, denominator: Any) -> Tuple[Any, Any]:
    """
    Каноническая пара (n, d) для значения numerator / denominator.

    1. Флаг знака переключается для каждого отрицательного операнда,
       операнды берутся по модулю
    2. factor = gcf(|n|, |d|)
    3. n и d делятся на factor
    4. Знак возвращается в numerator

    Raises:
        ZeroDenominatorError: Если denominator == ZERO
    """
    numerator, denominator = _align_kinds(numerator, denominator)
    ops = scalar_ops(numerator)
    zero = ops.zero

    if denominator == zero:
        raise ZeroDenominatorError(
            f"zero denominator: {ops.render(numerator)}/{ops.render(denominator)}"
        )

    positive = True
    if numerator < zero:
        positive = not positive
        numerator = -numerator
    if denominator < zero:
        positive = not positive
        denominator = -denominator

    factor = gcf(numerator, denominator, ops)
    numerator = ops.div(numerator, factor)
    denominator = ops.div(denominator, factor)

    if not positive:
        numerator = -numerator
    return numerator, denominator


# =============================================================================
# RATIONAL
# =============================================================================


class Rational(BaseModel):
    """
    Точное рациональное число numerator / denominator.

    Immutable модель (frozen=True). Конструкторы:
    - Rational.new(n, d) / Rational(numerator=n, denominator=d): канонизация
    - Rational.whole(n): вложение скаляра (d = ONE), уже канонично
    - Rational.raw(n, d): пара сохраняется как есть, БЕЗ гарантии канонической
      формы. Для доверенных внутренних вычислений; сравнения и порядок
      предполагают denominator > ZERO, поэтому raw-значение с отрицательным
      знаменателем нужно сначала починить через canonical().
    """

    numerator: Any = Field(..., description="Числитель (несёт знак значения)")
    denominator: Any = Field(..., description="Знаменатель (> ZERO в канонической форме)")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def canonicalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if "numerator" not in data or "denominator" not in data:
            # отсутствующие поля репортит сам pydantic
            return data

        numerator = _load_part(data["numerator"])
        denominator = _load_part(data["denominator"])
        numerator, denominator = reduce_pair(numerator, denominator)
        return {"numerator": numerator, "denominator": denominator}

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def new(cls, numerator: Any, denominator: Any) -> "Rational":
        """
        Канонический Rational для numerator / denominator.

        Raises:
            ZeroDenominatorError: Если denominator == ZERO

        Examples:
            >>> Rational.new(2, -4)
            Rational(numerator=-1, denominator=2)
        """
        return cls(numerator=numerator, denominator=denominator)

    @classmethod
    def whole(cls, value: Any) -> "Rational":
        """Вложение скаляра: value / ONE"""
        return cls.model_construct(numerator=value, denominator=scalar_ops(value).one)

    @classmethod
    def raw(cls, numerator: Any, denominator: Any) -> "Rational":
        """Пара без сокращения и без проверок (не гарантированно канонична)"""
        return cls.model_construct(numerator=numerator, denominator=denominator)

    @classmethod
    def zero(cls, ops: ScalarOps = INTEGER_OPS) -> "Rational":
        return cls.raw(ops.zero, ops.one)

    @classmethod
    def one(cls, ops: ScalarOps = INTEGER_OPS) -> "Rational":
        return cls.raw(ops.one, ops.one)

    @classmethod
    def order_of(cls, power: int, ops: ScalarOps = INTEGER_OPS) -> "Rational":
        """
        Степень десяти как Rational.

        power < 0  → ONE / ops.order_of(|power|)
        power >= 0 → ops.order_of(power) / ONE

        Examples:
            >>> str(Rational.order_of(-2))
            '(1/100)'
        """
        if power < 0:
            return cls.raw(ops.one, ops.order_of(-power))
        return cls.raw(ops.order_of(power), ops.one)

    # -------------------------------------------------------------------------
    # Канонизация
    # -------------------------------------------------------------------------

    @property
    def ops(self) -> ScalarOps:
        """ScalarOps скаляра, над которым построено значение"""
        return scalar_ops(self.numerator)

    def canonical(self) -> "Rational":
        """Повторная канонизация хранимой пары (no-op по значению)"""
        return self.new(self.numerator, self.denominator)

    def is_canonical(self) -> bool:
        """Проверка инварианта канонической формы без построения нового значения"""
        ops = self.ops
        if not self.denominator > ops.zero:
            return False
        return gcf(ops.abs(self.numerator), self.denominator, ops) == ops.one

    def inv(self) -> "Rational":
        """
        Обратное значение: new(denominator, numerator).

        Raises:
            ZeroDenominatorError: Если numerator == ZERO
        """
        return self.new(self.denominator, self.numerator)

    def __scalar_ops__(self) -> "RationalOps":
        return RationalOps(scalar_ops(self.numerator))

    def _coerce(self, other: Any) -> Optional["Rational"]:
        if isinstance(other, Rational):
            return other
        if is_scalar(other):
            return Rational.whole(other)
        return None

    # -------------------------------------------------------------------------
    # Равенство и порядок
    # -------------------------------------------------------------------------

    def _cross_difference(self, rhs: "Rational") -> Any:
        return self.numerator * rhs.denominator - self.denominator * rhs.numerator

    def __eq__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.numerator * rhs.denominator == self.denominator * rhs.numerator

    def __hash__(self) -> int:
        value = self.canonical()
        if value.denominator == value.ops.one:
            return hash(value.numerator)
        return hash((value.numerator, value.denominator))

    def __lt__(self, other: Any) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._cross_difference(rhs) < self.ops.zero

    def __le__(self, other: Any) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._cross_difference(rhs) <= self.ops.zero

    def __gt__(self, other: Any) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._cross_difference(rhs) > self.ops.zero

    def __ge__(self, other: Any) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._cross_difference(rhs) >= self.ops.zero

    def __bool__(self) -> bool:
        return self.numerator != self.ops.zero

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __neg__(self) -> "Rational":
        # смена знака сохраняет gcf
        return self.raw(-self.numerator, self.denominator)

    def __pos__(self) -> "Rational":
        return self

    def __abs__(self) -> "Rational":
        return self.raw(self.ops.abs(self.numerator), self.denominator)

    def __add__(self, other: Any) -> "Rational":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.new(
            self.numerator * rhs.denominator + rhs.numerator * self.denominator,
            self.denominator * rhs.denominator,
        )

    def __sub__(self, other: Any) -> "Rational":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.new(
            self.numerator * rhs.denominator - rhs.numerator * self.denominator,
            self.denominator * rhs.denominator,
        )

    def __mul__(self, other: Any) -> "Rational":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.new(
            self.numerator * rhs.numerator,
            self.denominator * rhs.denominator,
        )

    def __truediv__(self, other: Any) -> "Rational":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self.new(
            self.numerator * rhs.denominator,
            self.denominator * rhs.numerator,
        )

    def __mod__(self, other: Any) -> "Rational":
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if rhs.numerator == rhs.ops.zero:
            raise ZeroDenominatorError(f"remainder by zero: {self} % {rhs}")
        return self.new(
            (self.numerator * rhs.denominator) % (self.denominator * rhs.numerator),
            self.denominator * rhs.denominator,
        )

    def __radd__(self, other: Any) -> "Rational":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs + self

    def __rsub__(self, other: Any) -> "Rational":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __rmul__(self, other: Any) -> "Rational":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs * self

    def __rtruediv__(self, other: Any) -> "Rational":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __rmod__(self, other: Any) -> "Rational":
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs % self

    # Составные формы: self заменяется результатом бинарного оператора
    def __iadd__(self, other: Any) -> "Rational":
        return self.__add__(other)

    def __isub__(self, other: Any) -> "Rational":
        return self.__sub__(other)

    def __imul__(self, other: Any) -> "Rational":
        return self.__mul__(other)

    def __itruediv__(self, other: Any) -> "Rational":
        return self.__truediv__(other)

    def __imod__(self, other: Any) -> "Rational":
        return self.__mod__(other)

    # -------------------------------------------------------------------------
    # Форматирование
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        ops = self.ops
        return f"({ops.render(self.numerator)}/{ops.render(self.denominator)})"

    def latex(self) -> str:
        """LaTeX форма: \\frac{numerator}{denominator} (хранимая пара как есть)"""
        ops = self.ops
        return f"\\frac{{{ops.render(self.numerator)}}}{{{ops.render(self.denominator)}}}"


def _load_part(part: Any) -> Any:
    # вложенный Rational приходит из JSON как dict
    if isinstance(part, dict):
        return Rational.model_validate(part)
    if not is_scalar(part):
        raise ValueError(f"{type(part).__name__} is not a scalar: {part!r}")
    return part


# =============================================================================
# RATIONAL AS SCALAR
# =============================================================================


class RationalOps(ScalarOps):
    """
    Контракт скаляра для Rational над скаляром inner.

    Идентичности: ZERO = 0/1, ONE = 1/1 (в терминах inner).
    Деление и остаток — операторы самого Rational, поэтому
    Rational[Rational[...]] канонизируется тем же кодом.
    """

    def __init__(self, inner: ScalarOps):
        self.inner = inner
        self.name = f"Rational[{inner.name}]"

    @property
    def zero(self) -> Rational:
        return Rational.zero(self.inner)

    @property
    def one(self) -> Rational:
        return Rational.one(self.inner)

    def div(self, a: Rational, b: Rational) -> Rational:
        return a / b

    def abs(self, value: Rational) -> Rational:
        return abs(value)

    def inv(self, value: Rational) -> Rational:
        return value.inv()

    def order_of(self, power: int) -> Rational:
        return Rational.order_of(power, self.inner)

    def latex(self, value: Rational) -> str:
        return value.latex()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RationalOps) and self.inner == other.inner

    def __hash__(self) -> int:
        return hash((RationalOps, self.inner))

    def __repr__(self) -> str:
        return f"RationalOps({self.inner!r})"
