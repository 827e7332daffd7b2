from __future__ import annotations


class BeckerIRRError(ValueError):
    """Base class for every failure raised while solving a Becker IRR."""


class DegenerateSeries(BeckerIRRError):
    """The cash-flow series cannot admit a Becker IRR (too short or single-signed)."""


class DomainViolation(BeckerIRRError):
    """A rate, guess or iterate put the compounding base 1 + r at or below zero."""


class DerivativeVanished(BeckerIRRError):
    """The residual is locally flat, so a Newton step cannot be taken."""


class NonConvergent(BeckerIRRError):
    """The iteration bound was exhausted before the precision criterion held."""
