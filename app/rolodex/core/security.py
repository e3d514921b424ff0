import secrets


def generate_secret_key(nbytes: int = 64) -> str:
    """Generate a random hex secret suitable for ``AUTH_SECRET_KEY``."""

    return secrets.token_hex(nbytes)


def print_secret_key() -> None:
    print(generate_secret_key())
