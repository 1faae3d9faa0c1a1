"""Short code generation utilities."""

import random
import string
from typing import Callable, Optional


class ShortCodeGenerator:
    """Generate short codes for links."""

    # Base36 characters (digits + lowercase letters)
    BASE36_CHARS = string.digits + string.ascii_lowercase  # 0-9a-z

    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Optional random source (a fresh ``random.Random`` if omitted)
        """
        self.default_length = default_length
        self.rng = rng or random.Random()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random base36 short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE36_CHARS, k=length))

    def allocate(self, is_taken: Callable[[str], bool], length: Optional[int] = None) -> str:
        """Draw random codes until one is free.

        The loop never gives up; with 36^6 codes a collision is rare, so it
        terminates almost immediately in practice. Callers must hold whatever
        lock makes ``is_taken`` and the following insert one atomic step.

        Args:
            is_taken: Membership test against the current set of live codes
            length: Length of the code (uses default if not specified)

        Returns:
            A code for which ``is_taken`` returned False
        """
        while True:
            code = self.generate_random(length)
            if not is_taken(code):
                return code

