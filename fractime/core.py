import math
import operator
from typing import Any, ClassVar

from typing_extensions import Self, override

from fractime.storage import IntType
from fractime.util import round_half_away, split_ms


class FracturedTime:
    """A time value split into whole milliseconds (th) and 1/R fractions (tl).

    ``FracturedTime`` itself is unconfigured. Concrete types are created with
    :func:`fractured_time` or by subclassing with class keywords::

        class Half(FracturedTime, storage=INT16, resolution=2): ...

    Both components are kept as floats so that carries between them are
    exact before the integer readers (``high``/``low``) round them back into the
    storage type.
    """

    __slots__ = ("_high", "_low")

    STORAGE: ClassVar[IntType | None] = None
    RESOLUTION: ClassVar[int | None] = None

    def __init_subclass__(
        cls,
        *,
        storage: IntType | None = None,
        resolution: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if storage is None and resolution is None:
            # Plain subclass of a configured type keeps its configuration
            return
        if storage is None or resolution is None:
            raise TypeError(
                f"{cls.__name__} must set both storage and resolution.\n"
                f"Got storage={storage!r}, resolution={resolution!r}\n"
                f"Example: class Half(FracturedTime, storage=INT16, resolution=2)"
            )
        _validate_config(storage, resolution)
        cls.STORAGE = storage
        cls.RESOLUTION = resolution

    def __init__(self, th: int = 0, tl: int = 0):
        cls = type(self)
        if cls.RESOLUTION is None:
            raise TypeError(
                f"{cls.__name__} has no storage type or resolution.\n"
                f"Hint: create a configured type first:\n"
                f"  Time = fractured_time(UINT32, 100)\n"
                f"  value = Time(5, 33)"
            )
        self._high: float = float(cls._narrow(th, "th"))
        self._low: float = float(cls._narrow(tl, "tl"))
        self._normalize()

    # --- construction -----------------------------------------------------

    @classmethod
    def from_th(cls, th: int) -> Self:
        """Return a value of ``th`` whole high-units."""
        return cls(th, 0)

    @classmethod
    def from_tl(cls, tl: int) -> Self:
        """Return a value of ``tl`` low-units, folded into whole high-units."""
        return cls(0, tl)

    @classmethod
    def from_ms(cls, ms: float) -> Self:
        """Return the value closest to ``ms`` milliseconds.

        The fractional millisecond is kept unrounded in the low component,
        so ``from_ms(x).time_ms()`` gives ``x`` back up to float error. A
        fraction that rounds to a full high-unit is carried into ``high``.
        """
        if not math.isfinite(ms):
            raise ValueError(f"from_ms() requires a finite value, got {ms!r}")
        whole, fraction = split_ms(ms)
        value = cls._from_raw(whole, fraction * cls._resolution())
        value._normalize()
        return value

    @classmethod
    def th(cls, n: int) -> Self:
        """``Time.th(10)`` reads as "10 high-units"."""
        return cls.from_th(n)

    @classmethod
    def tl(cls, n: int) -> Self:
        """``Time.tl(1)`` reads as "1 low-unit"."""
        return cls.from_tl(n)

    @classmethod
    def _from_raw(cls, high: float, low: float) -> Self:
        value = cls.__new__(cls)
        value._high = high
        value._low = low
        return value

    def copy(self) -> Self:
        return self._from_raw(self._high, self._low)

    # --- mutators ---------------------------------------------------------

    def set_th(self, th: int) -> None:
        """Overwrite the high component. The low component is left as is."""
        self._high = float(self._narrow(th, "th"))

    def set_tl(self, tl: int) -> None:
        self._low = float(self._narrow(tl, "tl"))
        self._normalize()

    def set_thtl(self, th: int, tl: int) -> None:
        self._high = float(self._narrow(th, "th"))
        self._low = float(self._narrow(tl, "tl"))
        self._normalize()

    # --- readers ----------------------------------------------------------

    def get_th(self) -> int:
        return self._storage().cast(round_half_away(self._high))

    def get_tl(self) -> int:
        return self._storage().cast(round_half_away(self._low))

    @property
    def high(self) -> int:
        """Whole high-units, rounded half away from zero."""
        return self.get_th()

    @property
    def low(self) -> int:
        """Low-units within the current high-unit, rounded half away from zero."""
        return self.get_tl()

    def astuple(self) -> tuple[int, int]:
        return self.get_th(), self.get_tl()

    def time_ms(self) -> float:
        """Collapse both components into milliseconds.

        Sums the real components, so the result is right even when the pair
        is not normalized.
        """
        resolution = self._resolution()
        return (self._high * resolution + self._low) / resolution

    # --- arithmetic -------------------------------------------------------

    def __add__(self, other: Self) -> Self:
        if not isinstance(other, FracturedTime):
            return NotImplemented
        self._check_compatible(other, "+")
        cls = type(self)
        # Rebuilt from the rounded readings so errors do not pile up in loops
        return cls(self.get_th() + other.get_th(), self.get_tl() + other.get_tl())

    def __sub__(self, other: Self) -> Self:
        if not isinstance(other, FracturedTime):
            return NotImplemented
        self._check_compatible(other, "-")
        cls = type(self)
        if not self._storage().signed and self < other:
            return cls(0, 0)

        th = self.get_th() - other.get_th()
        tl = self.get_tl()
        rtl = other.get_tl()
        if tl < rtl:
            # Borrow just enough whole high-units to cover the low deficit
            borrows = -((tl - rtl) // self._resolution())
            th -= borrows
            tl += borrows * self._resolution()
        return cls(th, tl - rtl)

    def __iadd__(self, other: Self) -> Self:
        return self + other

    def __isub__(self, other: Self) -> Self:
        return self - other

    # --- comparison -------------------------------------------------------

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FracturedTime) or not self._same_config(other):
            return NotImplemented
        return (self._high, self._low) == (other._high, other._low)

    @override
    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: Self) -> bool:
        if not isinstance(other, FracturedTime):
            return NotImplemented
        self._check_compatible(other, "<")
        return (self._high, self._low) < (other._high, other._low)

    def __gt__(self, other: Self) -> bool:
        if not isinstance(other, FracturedTime):
            return NotImplemented
        self._check_compatible(other, ">")
        return (self._high, self._low) > (other._high, other._low)

    def __le__(self, other: Self) -> bool:
        result = self.__gt__(other)
        if result is NotImplemented:
            return result
        return not result

    def __ge__(self, other: Self) -> bool:
        result = self.__lt__(other)
        if result is NotImplemented:
            return result
        return not result

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}(th={self.get_th()}, tl={self.get_tl()})"

    @override
    def __str__(self) -> str:
        """Human-friendly string: components and their value in milliseconds."""
        return f"{self.get_th()} {self.get_tl()} = {self.time_ms():g} ms"

    # --- internals --------------------------------------------------------

    def _normalize(self) -> None:
        """Fold whole high-units out of the low component.

        Only an overflowing low component is folded; a negative one (signed
        storage) is left alone. A remainder that still reads as a full
        high-unit (e.g. 99.6 of 100) is carried too, and a remainder landing
        exactly on -0.5 is snapped to zero so ``low`` never reads -1.
        """
        resolution = self._resolution()
        if round_half_away(self._low) < resolution:
            return
        whole, fraction = split_ms(self._low / resolution)
        self._high += whole
        self._low = fraction * resolution
        if round_half_away(self._low) >= resolution:
            self._high += 1
            self._low -= resolution
            if round_half_away(self._low) < 0:
                self._low = 0.0

    def _same_config(self, other: "FracturedTime") -> bool:
        return (
            self.STORAGE == other.STORAGE and self.RESOLUTION == other.RESOLUTION
        )

    def _check_compatible(self, other: "FracturedTime", symbol: str) -> None:
        if not self._same_config(other):
            raise TypeError(
                f"Cannot combine fractured times of different configurations.\n"
                f"Got: {type(self).__name__} {symbol} {type(other).__name__}\n"
                f"Hint: convert through milliseconds first:\n"
                f"  {type(self).__name__}.from_ms(other.time_ms())"
            )

    @classmethod
    def _narrow(cls, value: int, what: str) -> int:
        if isinstance(value, bool):
            raise TypeError(f"{what} must be an integer, got bool {value!r}")
        try:
            index = operator.index(value)
        except TypeError:
            raise TypeError(
                f"{what} must be an integer, got {type(value).__name__!r}: "
                f"{value!r}\n"
                f"Hint: use {cls.__name__}.from_ms() for fractional milliseconds"
            ) from None
        return cls._storage().cast(index)

    @classmethod
    def _storage(cls) -> IntType:
        if cls.STORAGE is None:
            raise TypeError(
                f"{cls.__name__} has no storage type or resolution.\n"
                f"Hint: Time = fractured_time(UINT32, 100)"
            )
        return cls.STORAGE

    @classmethod
    def _resolution(cls) -> int:
        if cls.RESOLUTION is None:
            raise TypeError(
                f"{cls.__name__} has no storage type or resolution.\n"
                f"Hint: Time = fractured_time(UINT32, 100)"
            )
        return cls.RESOLUTION


_REGISTRY: dict[tuple[IntType, int], type[FracturedTime]] = {}


def _validate_config(storage: IntType, resolution: int) -> None:
    if not isinstance(storage, IntType):
        raise TypeError(
            f"storage must be an IntType such as INT16 or UINT32.\n"
            f"Got {type(storage).__name__!r}: {storage!r}"
        )
    if isinstance(resolution, bool) or not isinstance(resolution, int):
        raise ValueError(
            f"resolution must be a positive integer, "
            f"got {type(resolution).__name__!r}: {resolution!r}"
        )
    if resolution <= 0:
        raise ValueError(
            f"resolution must be a positive integer, got {resolution}.\n"
            f"It is the number of low-units in one high-unit (e.g. 2 or 100)."
        )
    if not storage.contains(resolution):
        raise ValueError(
            f"resolution {resolution} does not fit storage type {storage} "
            f"(range {storage.min}..{storage.max})"
        )


def fractured_time(storage: IntType, resolution: int) -> type[FracturedTime]:
    """Return the fractured time type for ``storage`` and ``resolution``.

    The same configuration always returns the same class, so values built
    from separate calls combine freely.

    Example:
        >>> Time = fractured_time(UINT32, 100)
        >>> value = Time.th(5) - Time.tl(33)
        >>> value.astuple()
        (4, 67)
    """
    _validate_config(storage, resolution)
    key = (storage, resolution)
    cls = _REGISTRY.get(key)
    if cls is None:
        name = f"FracturedTime_{storage.name}_{resolution}"
        cls = type(
            name,
            (FracturedTime,),
            {"__slots__": (), "__module__": __name__},
            storage=storage,
            resolution=resolution,
        )
        _REGISTRY[key] = cls
    return cls
