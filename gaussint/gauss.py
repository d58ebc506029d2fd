import cmath
import logging
import sys

from dataclasses import dataclass
from functools import cache
from math import prod
from typing import ClassVar, Generator, Iterator, Union

from sympy import factorint, isprime

from gaussint.utils import mod_sqrt_prime, round_div_ties_away_from_zero

OTHER_OP_TYPES = Union[int, float, complex]
_OTHER_OP_TYPES = (int, float, complex)  # mypyc-friendly for isinstance
OP_TYPES = Union["gaussint", OTHER_OP_TYPES]

logger = logging.getLogger("gaussint.gauss")


# TODO: Once Py3.9 support has been dropped, add slots=True
# @dataclass(frozen=True, slots=True)
@dataclass(frozen=True)
class GaussianFactorization:
    """
    Deterministic factorization into Gaussian primes:

        x = unit * P1 * P2 * ... * Pk

    - unit is one of gaussint.UNITS.
    - Pi are Gaussian primes, each the first-quadrant associate (re > 0, im >= 0),
        sorted by (norm, re, im). Repeated primes are listed repeatedly.
    """
    unit: "gaussint"
    primes: tuple["gaussint", ...]

    def prod(self) -> "gaussint":
        """Recreate the factored number"""
        return prod(self.primes, start=self.unit)

    def powers(self) -> dict["gaussint", int]:
        """The primes with their multiplicities, in the same order as primes"""
        out: dict[gaussint, int] = {}
        for p in self.primes:
            out[p] = out.get(p, 0) + 1
        return out


class gaussint:
    """
    Gaussian integer re + im*i, an element of the ring Z[i].

    Backed by Python ints, so components never overflow.

    Notes:
      - Values are immutable; every operation returns a new gaussint.
      - / and // both perform Euclidean division: the quotient is self * conj(other) / N(other)
        with each component rounded to the nearest integer, ties away from zero. The remainder
        then always satisfies N(r) <= N(other) / 2.
      - A gaussint compares (and hashes) equal to an int, float or complex with the same exact value.
    """

    __slots__ = ("re", "im")

    re: int
    im: int

    UNITS: ClassVar[list["gaussint"]] = []

    def __init__(self, re: int = 0, im: int = 0) -> None:
        """
        Initialize a gaussint.

        Args:
            re: The real component. Coerced with int(), so floats are truncated.
            im: The imaginary component. Coerced the same way.
        """
        self.re = int(re)
        self.im = int(im)

    # region constructors / conversions
    @classmethod
    def from_complex(cls, c: complex) -> "gaussint":
        """Build a gaussint from a complex number, truncating each part like int() does."""
        c = complex(c)
        return cls(int(c.real), int(c.imag))

    @classmethod
    def _from_obj(cls, n: OP_TYPES) -> "gaussint":
        """Convert a random object to a gaussint"""
        if isinstance(n, gaussint):
            return n

        if isinstance(n, complex):
            return cls.from_complex(n)

        if isinstance(n, _OTHER_OP_TYPES):
            return cls(int(n), 0)

        return NotImplemented

    @classmethod
    def _coerce(cls, n: OP_TYPES, action: str) -> "gaussint":
        """Like _from_obj, but raise for unsupported types instead of returning NotImplemented."""
        res = cls._from_obj(n)
        if res is NotImplemented:
            raise TypeError(f"Unable to {action} gaussint and type {type(n)}")

        return res

    def components(self) -> tuple[int, int]:
        """Return (re, im)."""
        return (self.re, self.im)

    @property
    def real(self) -> int:
        return self.re

    @property
    def imag(self) -> int:
        return self.im

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __int__(self) -> int:
        """Narrow to the real component. The imaginary part is dropped, not checked."""
        return self.re

    def polar(self) -> tuple[float, float]:
        """
        Polar form (r, theta) with self == r * exp(i * theta).

        Lossy: computed on floats.
        """
        return cmath.polar(complex(self))
    # endregion

    @property
    def is_rational(self) -> bool:
        """True iff the imaginary component is zero."""
        return self.im == 0

    @property
    def is_unit(self) -> bool:
        """True iff self is one of 1, -1, i, -i."""
        return abs(self) == 1

    def conjugate(self) -> "gaussint":
        """Complex conjugation: a+bi -> a-bi."""
        return gaussint(self.re, -self.im)

    def norm(self) -> "gaussint":
        """self * conj(self), always rational. See __abs__ for the plain int."""
        return self * self.conjugate()

    def __add__(self, other: OP_TYPES) -> "gaussint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, gaussint):
            return gaussint(self.re + other.re, self.im + other.im)

        return NotImplemented

    def __radd__(self, other: OTHER_OP_TYPES) -> "gaussint":
        return self.__add__(other)

    def __sub__(self, other: OP_TYPES) -> "gaussint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if isinstance(other, gaussint):
            return gaussint(self.re - other.re, self.im - other.im)

        return NotImplemented

    def __rsub__(self, other: OTHER_OP_TYPES) -> "gaussint":
        return self.__neg__().__add__(other)

    def __neg__(self) -> "gaussint":
        return gaussint(-self.re, -self.im)

    def __pos__(self) -> "gaussint":
        return gaussint(self.re, self.im)

    def __mul__(self, other: OP_TYPES) -> "gaussint":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussint):
            return NotImplemented

        # (a+bi)(c+di) = (ac-bd) + (ad+bc)i
        a, b = self.re, self.im
        c, d = other.re, other.im
        return gaussint(a * c - b * d, a * d + b * c)

    def __rmul__(self, other: OTHER_OP_TYPES) -> "gaussint":
        return self.__mul__(other)

    def __pow__(self, exp: int) -> "gaussint":
        e = int(exp)
        if e < 0:
            raise ValueError("Negative powers not supported")

        result = gaussint(1, 0)
        base: gaussint = self
        while e:
            if e & 1:
                result = result * base

            e >>= 1
            if e:
                base = base * base

        return result

    # region Euclidean division (Z[i] is norm-Euclidean)
    def __divmod__(self, other: OP_TYPES) -> tuple["gaussint", "gaussint"]:
        """
        Nearest-lattice division in Z[i]:
            self = q * other + r

        Returns:
            (q, r) where abs(r) <= abs(other) / 2.

        Raises:
            ZeroDivisionError: if other == 0
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, gaussint):
            return NotImplemented

        n = abs(other)
        if n == 0:
            raise ZeroDivisionError("gaussint division by zero")

        # q ~ self * conj(other) / N(other), then round each component
        num = self * other.conjugate()
        q = gaussint(round_div_ties_away_from_zero(num.re, n), round_div_ties_away_from_zero(num.im, n))

        return q, self - q * other

    def __rdivmod__(self, other: OTHER_OP_TYPES) -> tuple["gaussint", "gaussint"]:
        if isinstance(other, _OTHER_OP_TYPES):
            return divmod(self._from_obj(other), self)

        return NotImplemented

    def __truediv__(self, other: OP_TYPES) -> "gaussint":
        # There are no fractions here, / is Euclidean division as well
        return self.__floordiv__(other)

    def __rtruediv__(self, other: OTHER_OP_TYPES) -> "gaussint":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).__truediv__(self)

        return NotImplemented

    def __floordiv__(self, other: OP_TYPES) -> "gaussint":
        q, _ = divmod(self, other)
        return q

    def __rfloordiv__(self, other: OTHER_OP_TYPES) -> "gaussint":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).__floordiv__(self)

        return NotImplemented

    def __mod__(self, other: OP_TYPES) -> "gaussint":
        _, r = divmod(self, other)
        return r

    def __rmod__(self, other: OTHER_OP_TYPES) -> "gaussint":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).__mod__(self)

        return NotImplemented
    # endregion

    # region Relations
    def divides(self, other: OP_TYPES) -> bool:
        """
        True iff other is a multiple of self.

        Zero divides nothing, so this never raises ZeroDivisionError.

        Raises:
            TypeError: If other can't be converted to a gaussint.
        """
        other = self._coerce(other, "test divisibility of")
        if not self:
            return False

        return not (other % self)

    def congruent(self, other: OP_TYPES, modulus: OP_TYPES) -> bool:
        """
        True iff self ≡ other (mod modulus), i.e. modulus divides self - other.

        Raises:
            ZeroDivisionError: If modulus is zero.
            TypeError: If other or modulus can't be converted to a gaussint.
        """
        other = self._coerce(other, "test congruence of")
        modulus = self._coerce(modulus, "test congruence of")
        return not ((self - other) % modulus)

    def is_even(self) -> bool:
        """True iff self ≡ 0 (mod 1+i)."""
        return self.congruent(0, _ONE_PLUS_I)

    def is_odd(self) -> bool:
        """True iff self ≡ 1 (mod 1+i)."""
        return self.congruent(1, _ONE_PLUS_I)

    def is_associated(self, other: OP_TYPES) -> bool:
        """True iff self * u == other for one of the four units u."""
        other = self._coerce(other, "test association of")
        return any(self * u == other for u in gaussint.UNITS)
    # endregion

    def __abs__(self) -> int:
        """Norm as a plain int: re^2 + im^2."""
        return self.re * self.re + self.im * self.im

    def __bool__(self) -> bool:
        return (self.re | self.im) != 0

    def __iter__(self) -> Iterator[int]:
        return iter((self.re, self.im))

    def __len__(self) -> int:
        return 2

    def __getitem__(self, idx: int) -> int:
        if idx == 0:
            return self.re
        if idx == 1:
            return self.im
        raise IndexError("gaussint index out of range (valid: 0..1)")

    def __eq__(self, other: object) -> bool:
        # int/float comparisons are exact in Python, no rounding through float
        if isinstance(other, (int, float)):
            return self.im == 0 and self.re == other

        if isinstance(other, complex):
            return self.re == other.real and self.im == other.imag

        if not isinstance(other, gaussint):
            return False

        return self.re == other.re and self.im == other.im

    def __hash__(self) -> int:
        """
        Same combination CPython uses for complex, so a gaussint hashes like every
            int, float or complex it compares equal to.
        """
        width = sys.hash_info.width
        h = (hash(self.re) + sys.hash_info.imag * hash(self.im)) & ((1 << width) - 1)
        if h >= 1 << (width - 1):
            h -= 1 << width

        return -2 if h == -1 else h

    def __repr__(self) -> str:
        return f"gaussint({self.re}, {self.im})"

    def __str__(self) -> str:
        # A negative imaginary part carries its own sign
        if self.im < 0:
            return f"{self.re}{self.im}i"

        return f"{self.re}+{self.im}i"

    # region GCD
    def _normalize_unit(self) -> "gaussint":
        """
        Deterministic associate choice up to ±1.

        Negate if the real part is negative, or if it is zero and the imaginary part is negative.

        Returns:
            gaussint: The unit normalized gaussint.
        """
        if self.re < 0 or (self.re == 0 and self.im < 0):
            return -self

        return self

    def _canonical_associate(self) -> tuple["gaussint", "gaussint"]:
        """
        Rotate into the first quadrant: re > 0 and im >= 0.

        Returns:
             tuple: (z_canon, u) such that z_canon = self*u. Zero is returned unchanged with u = 1.
        """
        for u in gaussint.UNITS:
            cand = self * u
            if cand.re > 0 and cand.im >= 0:
                return cand, u

        return self, gaussint.UNITS[0]

    def gcd(self, other: OP_TYPES, *, normalize: bool = True) -> "gaussint":
        """
        GCD via the Euclidean algorithm.

        The result is only unique up to a unit; with normalize=True (the default) the associate
            with re > 0, or re == 0 and im >= 0, is returned.

        Raises:
            TypeError: If other can't be converted to a gaussint.
            ArithmeticError: If the remainder norms stop decreasing, which would be a bug in division.
        """
        a = self
        b = self._coerce(other, "take gcd of")

        if not a:
            return b._normalize_unit() if normalize else b

        if b:
            last = abs(b)
            while b:
                a, b = b, a % b

                if b:
                    nb = abs(b)
                    if nb >= last:
                        raise ArithmeticError("Euclidean descent failed (non-decreasing remainder norm)")
                    last = nb

        return a._normalize_unit() if normalize else a

    def lcm(self, other: OP_TYPES) -> "gaussint":
        """Least common multiple, normalized like gcd. lcm with zero is zero."""
        other = self._coerce(other, "take lcm of")
        if not self or not other:
            return gaussint(0, 0)

        return ((self * other) // self.gcd(other))._normalize_unit()
    # endregion

    # region Primes
    def is_gaussian_prime(self) -> bool:
        """
        Gaussian primality.

        a+bi is prime iff either
          1. exactly one of a, b is zero and the absolute value of the other is a rational prime
             of the form 4n+3, or
          2. both are nonzero and a^2 + b^2 is a rational prime (never of the form 4n+3).

        Returns:
            bool: Whether self is a Gaussian prime.
        """
        a, b = self.re, self.im

        if a == 0 or b == 0:
            # Also covers zero: abs(0) is not prime
            m = abs(a + b)
            return m % 4 == 3 and isprime(m)

        n = a * a + b * b
        if not isprime(n):
            return False

        assert n % 4 != 3, f"sum of two squares {n} is 3 mod 4"
        return True

    @staticmethod
    @cache
    def _prime_over_rational(p: int) -> "gaussint":
        """
        The first-quadrant Gaussian prime of norm p, for a rational prime p that is 2 or 1 mod 4.
            Found as gcd(p, x+i) where x^2 ≡ -1 (mod p).

        Returns:
            gaussint: A Gaussian prime with norm p.

        Raises:
            ArithmeticError: If p is not a sum of two squares, or the construction fails.
        """
        p = int(p)
        if p == 2:
            return gaussint(1, 1)

        x = mod_sqrt_prime(p - 1, p)
        if x is None:
            raise ArithmeticError(f"-1 is not a square mod {p}")

        base = gaussint(p, 0).gcd(gaussint(x, 1))
        if abs(base) != p:
            raise ArithmeticError("prime construction failed: gcd did not have norm p")

        base_canon, _ = base._canonical_associate()
        return base_canon

    def factor(self) -> GaussianFactorization:
        """
        Factor into Gaussian primes.

        The rational primes p dividing the norm are found with sympy, then:
          - p == 2 contributes 1+i,
          - p ≡ 3 (mod 4) is itself a Gaussian prime with norm p^2,
          - p ≡ 1 (mod 4) splits as pi * conj(pi); whichever of them divides is extracted.

        Returns:
            GaussianFactorization: The factorization.

        Raises:
            ValueError: If self is zero.
            ArithmeticError: If there is an unexpected problem preventing factoring, indicating a bug in the code.
        """
        if not self:
            raise ValueError("Cannot factor zero")

        rest = self
        primes: list[gaussint] = []
        for p, e in sorted(factorint(abs(self)).items()):
            logger.debug("factoring %s: rational prime %d with exponent %d", self, p, e)

            if p % 4 == 3:
                candidates = [gaussint(p, 0)]
                count = e // 2
            else:
                pi = gaussint._prime_over_rational(p)
                pi_conj, _ = pi.conjugate()._canonical_associate()
                candidates = [pi, pi_conj]
                count = e

            for _ in range(count):
                for cand in candidates:
                    q, r = divmod(rest, cand)
                    if not r:
                        rest = q
                        primes.append(cand)
                        break
                else:
                    raise ArithmeticError(f"no Gaussian prime over {p} divides {rest}")

        # Remaining cofactor must be a unit once every prime norm is extracted.
        if not rest.is_unit:
            raise ArithmeticError("remaining cofactor is not a unit; factorization incomplete")

        primes.sort(key=lambda x: (abs(x), x.re, x.im))
        return GaussianFactorization(unit=rest, primes=tuple(primes))
    # endregion


gaussint.UNITS = [gaussint(1, 0), gaussint(0, 1), gaussint(-1, 0), gaussint(0, -1)]
_ONE_PLUS_I = gaussint(1, 1)


def units() -> list[gaussint]:
    """The four units 1, i, -1, -i"""
    return list(gaussint.UNITS)


def gcd(a: gaussint, b: OP_TYPES) -> gaussint:
    """Simply a helper method to match existing Python gcd syntax"""
    return gaussint._coerce(a, "take gcd of").gcd(b)


def lcm(a: gaussint, b: OP_TYPES) -> gaussint:
    """Simply a helper method to match existing Python lcm syntax"""
    return gaussint._coerce(a, "take lcm of").lcm(b)


def congruent(a: OP_TYPES, b: OP_TYPES, modulus: OP_TYPES) -> bool:
    """True iff a ≡ b (mod modulus)"""
    return gaussint._coerce(a, "test congruence of").congruent(b, modulus)


# region Enumeration
def gaussian_integers(n: int) -> Generator[gaussint, None, None]:
    """Every gaussint with both components in [-n, n], real part in the outer loop."""
    for re in range(-n, n + 1):
        for im in range(-n, n + 1):
            yield gaussint(re, im)


def positive_gaussian_integers(n: int) -> Generator[gaussint, None, None]:
    """Every gaussint with real part in [0, n] and imaginary part in [-n, n]."""
    for re in range(0, n + 1):
        for im in range(-n, n + 1):
            yield gaussint(re, im)


def gaussian_primes(n: int) -> Generator[gaussint, None, None]:
    """The Gaussian primes among gaussian_integers(n)."""
    for z in gaussian_integers(n):
        if z.is_gaussian_prime():
            yield z


def positive_gaussian_primes(n: int) -> Generator[gaussint, None, None]:
    """The Gaussian primes with both components in [0, n]."""
    for re in range(0, n + 1):
        for im in range(0, n + 1):
            z = gaussint(re, im)
            if z.is_gaussian_prime():
                yield z
# endregion
