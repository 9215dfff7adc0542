"""
Bootstrap пакета tests.property.

Регистрирует профили Hypothesis для property тестов пула и выбирает один по
HYPOTHESIS_PROFILE (по умолчанию "dev", или "ci" при заданной переменной CI).
"""

import os

from hypothesis import HealthCheck, settings

settings.register_profile(
    "dev",
    settings(
        max_examples=100,
        deadline=None,
        suppress_health_check=(HealthCheck.too_slow,),
    ),
)

settings.register_profile(
    "ci",
    settings(
        max_examples=300,
        deadline=None,
        suppress_health_check=(HealthCheck.too_slow,),
        derandomize=True,
    ),
)

settings.register_profile(
    "fast",
    settings(max_examples=20, deadline=None),
)

_default = "ci" if os.environ.get("CI") else "dev"
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", _default))
