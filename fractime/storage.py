"""Integer storage types for the components of a fractured time value.

An ``IntType`` describes the caller-visible integer type of the high and low
components: its width in bits and whether it is signed. Values written into a
component are narrowed the way a C cast narrows them (two's complement wrap),
so a ``UINT32`` component never reads back negative.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class IntType:
    name: str
    bits: int
    signed: bool

    def __post_init__(self) -> None:
        if self.bits <= 0:
            raise ValueError(
                f"IntType bits must be positive, got {self.bits} for {self.name!r}"
            )

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def cast(self, value: int) -> int:
        """Narrow ``value`` into this type, wrapping modulo 2**bits."""
        wrapped = value & ((1 << self.bits) - 1)
        if self.signed and wrapped > self.max:
            wrapped -= 1 << self.bits
        return wrapped

    def __str__(self) -> str:
        return self.name


INT8 = IntType(name="int8", bits=8, signed=True)
INT16 = IntType(name="int16", bits=16, signed=True)
INT32 = IntType(name="int32", bits=32, signed=True)
INT64 = IntType(name="int64", bits=64, signed=True)
UINT8 = IntType(name="uint8", bits=8, signed=False)
UINT16 = IntType(name="uint16", bits=16, signed=False)
UINT32 = IntType(name="uint32", bits=32, signed=False)
UINT64 = IntType(name="uint64", bits=64, signed=False)
