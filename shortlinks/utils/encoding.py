import re
import secrets
import string

# Base62 alphabet: 26 upper + 26 lower + 10 digits
ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
SHORT_CODE_LENGTH = 6
SHORT_CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")

# Paths served by the app itself that a short code must not shadow (routes are case-sensitive)
RESERVED_CODES = frozenset({"health"})


def generate_short_code(length: int = SHORT_CODE_LENGTH, rng=None) -> str:
    """Draw ``length`` characters uniformly, with replacement, from the Base62 alphabet.

    ``rng`` is anything with a ``choice`` method (``random.Random`` for seeded tests);
    it defaults to the OS CSPRNG.
    """
    rng = rng or secrets.SystemRandom()
    return ''.join(rng.choice(ALPHABET) for _ in range(length))


def is_valid_short_code(code: str) -> bool:
    return bool(SHORT_CODE_PATTERN.fullmatch(code))
