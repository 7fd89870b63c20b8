"""Decide what to do when the account listing returns 404."""

from dataclasses import dataclass

from .console import Console
from .models import AccountSelector

NOT_FOUND_HINT = "Please ensure it is spelled correctly, because it's neither a user nor an organization."


@dataclass(frozen=True)
class RetryDecision:
    retry: bool
    reason: str = ""

    @classmethod
    def retry_with_flipped_type(cls) -> "RetryDecision":
        return cls(retry=True)

    @classmethod
    def abort(cls, reason: str) -> "RetryDecision":
        return cls(retry=False, reason=reason)


def resolve_not_found(
    selector: AccountSelector,
    has_retried: bool,
    *,
    no_prompt: bool,
    console: Console,
) -> RetryDecision:
    """Offer a single retry under the opposite account type.

    The caller must record that a retry happened; a second 404 in the same
    run always aborts.
    """
    if no_prompt:
        return RetryDecision.abort(f"Account not found. {NOT_FOUND_HINT}")

    if has_retried:
        return RetryDecision.abort(f"Account still not found. {NOT_FOUND_HINT}")

    current = selector.account_type
    console.error(
        f"{current.label} not found. "
        "Please ensure it is spelled correctly and that it is the correct account type."
    )
    if console.confirm(f"Do you wanna try again using the {current.opposite().label.lower()} account type? (y/n) "):
        return RetryDecision.retry_with_flipped_type()

    console.notice("Exiting...")
    return RetryDecision.abort(f"{current.label} {selector.account} not found and retry was declined.")
