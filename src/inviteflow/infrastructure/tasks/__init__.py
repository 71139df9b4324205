"""Background tasks run alongside the API."""

from inviteflow.infrastructure.tasks.code_cleanup import (
    purge_expired_codes,
    run_code_cleanup_loop,
)

__all__ = ["purge_expired_codes", "run_code_cleanup_loop"]
