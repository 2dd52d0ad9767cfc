"""
Scalar — контракт возможностей скалярного типа

Любой тип, который используется как numerator/denominator рационального
числа, должен предоставлять:
- Две константы: аддитивную (ZERO) и мультипликативную (ONE) единицы
- Полный порядок (<, ==), согласованный с кольцевыми операциями
- Кольцевые операции: -x, +, -, *, точное деление и остаток (%)
- Опционально: обратный элемент, генератор степеней десяти,
  текстовый и LaTeX рендеринг

Python int не может нести атрибуты ZERO/ONE, поэтому идентичности и
тип-специфичные операции вынесены в объект ScalarOps. Диспетчеризация
выполняется по runtime-типу значения через реестр (scalar_ops).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. ScalarOps.div используется только там, где деление точное
2. ScalarOps.rem на неотрицательных операндах возвращает неотрицательный остаток
3. bool не является скаляром (несмотря на то, что bool — подкласс int)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Final, Protocol, Union, runtime_checkable

logger = logging.getLogger(__name__)

# Основание генератора степеней (order_of)
POWER_BASE: Final[int] = 10


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CapabilityNotSupported(TypeError):
    """
    Скалярный тип не поддерживает запрошенную возможность.

    Возникает для опциональных возможностей (inverse, order_of) и для
    значений, тип которых не зарегистрирован как скаляр.
    """

    pass


# =============================================================================
# ORDERED RING PROTOCOL
# =============================================================================


@runtime_checkable
class OrderedRing(Protocol):
    """Значение упорядоченного кольца: операторы, нужные Rational."""

    def __neg__(self) -> Any: ...

    def __add__(self, rhs: Any) -> Any: ...

    def __sub__(self, rhs: Any) -> Any: ...

    def __mul__(self, rhs: Any) -> Any: ...

    def __mod__(self, rhs: Any) -> Any: ...

    def __lt__(self, rhs: Any) -> bool: ...

    def __le__(self, rhs: Any) -> bool: ...

    def __gt__(self, rhs: Any) -> bool: ...

    def __ge__(self, rhs: Any) -> bool: ...


# =============================================================================
# SCALAR OPS
# =============================================================================


class ScalarOps(ABC):
    """
    Набор возможностей скалярного типа.

    Обязательные: zero, one, div.
    Остальные методы имеют реализации по умолчанию через операторы значения;
    опциональные возможности по умолчанию вызывают CapabilityNotSupported.
    """

    name: str = "scalar"

    @property
    @abstractmethod
    def zero(self) -> Any:
        """Аддитивная единица (ZERO)"""

    @property
    @abstractmethod
    def one(self) -> Any:
        """Мультипликативная единица (ONE)"""

    @abstractmethod
    def div(self, a: Any, b: Any) -> Any:
        """
        Точное деление a / b.

        Вызывается только когда b делит a нацело (после сокращения на GCF).
        """

    def rem(self, a: Any, b: Any) -> Any:
        """Остаток a % b (семантика самого скалярного типа)"""
        return a % b

    def abs(self, value: Any) -> Any:
        """Модуль значения через порядок и отрицание"""
        return -value if value < self.zero else value

    def inv(self, value: Any) -> Any:
        """Обратный элемент (1 / value). Опционально."""
        raise CapabilityNotSupported(f"{self.name} does not support inverse")

    def order_of(self, power: int) -> Any:
        """Значение POWER_BASE ** power. Опционально."""
        raise CapabilityNotSupported(f"{self.name} does not support order_of")

    def render(self, value: Any) -> str:
        """Текстовое представление значения"""
        return str(value)

    def latex(self, value: Any) -> str:
        """LaTeX представление значения"""
        return self.render(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class IntegerOps(ScalarOps):
    """
    Возможности Python int.

    div — целочисленное деление (//), точное в местах использования.
    order_of определён только для power >= 0.
    inv определён только для единиц кольца (1 и -1).
    """

    name = "int"

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    def div(self, a: int, b: int) -> int:
        return a // b

    def abs(self, value: int) -> int:
        return abs(value)

    def inv(self, value: int) -> int:
        if value in (1, -1):
            return value
        raise CapabilityNotSupported(f"int {value} has no integer inverse")

    def order_of(self, power: int) -> int:
        if power < 0:
            raise CapabilityNotSupported(
                f"int cannot represent {POWER_BASE}^{power} (negative power)"
            )
        return POWER_BASE**power

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IntegerOps)

    def __hash__(self) -> int:
        return hash(IntegerOps)


INTEGER_OPS: Final[IntegerOps] = IntegerOps()


# =============================================================================
# REGISTRY
# =============================================================================

ScalarOpsFactory = Callable[[Any], ScalarOps]

# Тип значения → ScalarOps (или фабрика, строящая ScalarOps по значению)
_REGISTRY: Dict[type, Union[ScalarOps, ScalarOpsFactory]] = {
    int: INTEGER_OPS,
}


def register_scalar(
    python_type: type, ops: Union[ScalarOps, ScalarOpsFactory]
) -> None:
    """
    Регистрация нового скалярного типа.

    Args:
        python_type: Тип значений (например, decimal.Decimal)
        ops: ScalarOps либо фабрика value -> ScalarOps

    Raises:
        TypeError: Если python_type — bool
    """
    if python_type is bool:
        raise TypeError("bool cannot be registered as a scalar")

    logger.debug("registering scalar type %s -> %r", python_type.__name__, ops)
    _REGISTRY[python_type] = ops


def scalar_ops(value: Any) -> ScalarOps:
    """
    ScalarOps для runtime-типа значения.

    Порядок поиска:
    1. Hook __scalar_ops__ на типе значения (используется Rational)
    2. Реестр по MRO типа

    Raises:
        CapabilityNotSupported: Если тип не является скаляром
    """
    value_type = type(value)
    if value_type is bool:
        raise CapabilityNotSupported("bool is not a scalar")

    hook = getattr(value_type, "__scalar_ops__", None)
    if hook is not None:
        return hook(value)

    for base in value_type.__mro__:
        entry = _REGISTRY.get(base)
        if entry is None:
            continue
        if isinstance(entry, ScalarOps):
            return entry
        return entry(value)

    raise CapabilityNotSupported(f"{value_type.__name__} is not a registered scalar")


def is_scalar(value: Any) -> bool:
    """Проверка, может ли значение использоваться как скаляр"""
    try:
        scalar_ops(value)
    except CapabilityNotSupported:
        return False
    return True
