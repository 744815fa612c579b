"""Interpreter settings read from the environment. Command-line flags take precedence over these."""

import os

from lambdainterp.lang.error import GenericException
from lambdainterp.pure.reduction import MAX_REDUCE_STEPS, STRATEGIES

DEFAULT_MAX_STEPS = MAX_REDUCE_STEPS
DEFAULT_STRATEGY = "applicative"


def setting_from_env(var, default, cast=str):
    """Returns cast(os.environ[var]), or default if var is unset or empty."""
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise GenericException("invalid value '{}' for {}", (raw, var), diagnosis=False)


def _natural(raw):
    value = int(raw)
    if value < 0:
        raise ValueError(raw)
    return value


def get_max_steps():
    return setting_from_env("LAMBDAINTERP_MAX_STEPS", DEFAULT_MAX_STEPS, _natural)


def get_strategy():
    strategy = setting_from_env("LAMBDAINTERP_STRATEGY", DEFAULT_STRATEGY)
    if strategy not in STRATEGIES:
        raise GenericException("invalid value '{}' for {}", (strategy, "LAMBDAINTERP_STRATEGY"), diagnosis=False)
    return strategy
