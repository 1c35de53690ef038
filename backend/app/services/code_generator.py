"""Human-readable linking code generation."""

import secrets

# No 0/O or 1/I lookalikes
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
DEFAULT_PREFIX = "STU-"
DEFAULT_LENGTH = 6


def generate_linking_code(prefix: str = DEFAULT_PREFIX, length: int = DEFAULT_LENGTH) -> str:
    return prefix + "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def make_code_factory(prefix: str = DEFAULT_PREFIX, length: int = DEFAULT_LENGTH):
    """Bind prefix and length into a zero-argument code factory."""

    def factory() -> str:
        return generate_linking_code(prefix=prefix, length=length)

    return factory
