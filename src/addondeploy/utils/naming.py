"""Config naming helpers."""

import random
import string


_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def random_suffix(length: int = 6) -> str:
    """Random lowercase alphanumeric suffix for generated config names."""
    return "".join(random.choices(_SUFFIX_ALPHABET, k=length))


def dependency_config_name(offering_name: str, suffix: str) -> str:
    return f"{offering_name}-{suffix}"
