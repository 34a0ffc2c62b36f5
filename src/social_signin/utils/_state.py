import logging
import random
import time
import uuid

logger = logging.getLogger(__name__)


def _base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    result = ""

    while True:
        value, remainder = divmod(value, 36)
        result = digits[remainder] + result

        if value == 0:
            return result


def generate_state() -> str:
    """Generate a fresh anti-forgery state token for one sign-in attempt."""
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        # uuid4 needs os.urandom, which some sandboxed interpreters lack
        logger.warning("No secure random source available, using fallback state")

        return f"{_base36(time.monotonic_ns())}-{_base36(random.getrandbits(64))}"
