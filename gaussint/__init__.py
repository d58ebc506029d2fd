from gaussint.gauss import (
    GaussianFactorization,
    congruent,
    gaussian_integers,
    gaussian_primes,
    gaussint,
    gcd,
    lcm,
    positive_gaussian_integers,
    positive_gaussian_primes,
    units,
)

__all__ = [
    "GaussianFactorization",
    "congruent",
    "gaussian_integers",
    "gaussian_primes",
    "gaussint",
    "gcd",
    "lcm",
    "positive_gaussian_integers",
    "positive_gaussian_primes",
    "units",
]
