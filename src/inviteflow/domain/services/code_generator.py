"""Code generation service.

Provides cryptographically secure random codes for invitations and other
single-use links. Codes carry no timing or sequence information.
"""

import secrets

# 16 bytes = 128 bits of entropy
MIN_CODE_BYTES = 16


class CodeGenerator:
    """Generator for unguessable opaque codes."""

    def __init__(self, length_bytes: int = 32) -> None:
        """Initialize the generator.

        Args:
            length_bytes: Number of random bytes per code. Default is 32 bytes.

        Raises:
            ValueError: If fewer than 16 bytes are requested.
        """
        if length_bytes < MIN_CODE_BYTES:
            raise ValueError(
                f"Code length must be at least {MIN_CODE_BYTES} bytes, got {length_bytes}"
            )
        self.length_bytes = length_bytes

    def generate(self) -> str:
        """Generate a URL-safe random code.

        Returns:
            URL-safe token string.
        """
        return secrets.token_urlsafe(self.length_bytes)
