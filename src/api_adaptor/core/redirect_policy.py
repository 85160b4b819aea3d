"""
Redirect policy.

Pure decision logic for one redirect-candidate response: follow it,
leave it to the error classifier, or reject the chain. Holds no state;
the engine owns the hop counter and the initial origin.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Union
from urllib.parse import urljoin

from .config import ClientConfig
from .context import Origin

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# OUTCOMES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RejectReason(str, Enum):
    """Why a redirect that would otherwise be followed was refused."""
    TOO_MANY_REDIRECTS = "too_many_redirects"
    LOCATION_MISSING = "location_missing"
    CROSS_ORIGIN_DISALLOWED = "cross_origin_disallowed"


@dataclass(frozen=True)
class Follow:
    """Follow the redirect to ``next_url``."""
    next_url: str
    cross_origin: bool
    forward_credentials: bool


@dataclass(frozen=True)
class DoNotFollow:
    """Not a redirect this client follows; surface the response as an HTTP error."""
    pass


@dataclass(frozen=True)
class Reject:
    """Redirect refused for ``reason``."""
    reason: RejectReason


RedirectOutcome = Union[Follow, DoNotFollow, Reject]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# POLICY
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

REDIRECT_STATUS_CODES: FrozenSet[int] = frozenset({301, 302, 303, 307, 308})

# Codes that preserve the method and body
METHOD_PRESERVING_REDIRECT_CODES: FrozenSet[int] = frozenset({307, 308})

SAFE_METHODS: FrozenSet[str] = frozenset({"GET", "HEAD"})


def is_redirect_candidate(status_code: int) -> bool:
    """301/302/303/307/308 only; 304, 305 and 306 are never followed."""
    return status_code in REDIRECT_STATUS_CODES


def should_follow(method: str, status_code: int, config: ClientConfig) -> bool:
    """
    Is this method/status pair one the client follows at all?

    GET and HEAD follow every candidate code. Other methods follow only
    307/308 and only with ``follow_non_get_redirects`` enabled, so a
    non-idempotent request is never silently replayed.
    """
    if not is_redirect_candidate(status_code):
        return False

    if method.upper() in SAFE_METHODS:
        return True

    return config.follow_non_get_redirects and status_code in METHOD_PRESERVING_REDIRECT_CODES


def resolve_location(current_url: str, location: str) -> str:
    """
    Resolve a Location value against the URL that produced it.

    A reference that cannot be resolved is returned verbatim; the engine's
    URL validation then reports it as InvalidUrl.
    """
    try:
        return urljoin(current_url, location)
    except ValueError:
        return location


class RedirectPolicy:
    """
    Decides what to do with a redirect-candidate response.

    Checks, in order: method/status eligibility, Location presence,
    cross-origin permission against the *initial* origin, then the
    redirect budget.

    Example:
        >>> policy = RedirectPolicy(ClientConfig())
        >>> policy.decide("GET", 302, Origin.from_url("https://a.test/"),
        ...               "https://a.test/x", "/y", redirects_followed=0)
        Follow(next_url='https://a.test/y', cross_origin=False, forward_credentials=True)
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def decide(
        self,
        method: str,
        status_code: int,
        initial_origin: Origin,
        current_url: str,
        location: Optional[str],
        redirects_followed: int,
    ) -> RedirectOutcome:
        """
        Args:
            method: Method of the request that got the redirect
            status_code: Response status
            initial_origin: Origin of the caller's original URL
            current_url: URL of the hop that produced this response
            location: Location header value (None or blank when missing)
            redirects_followed: Hops already followed in this operation

        Returns:
            Follow, DoNotFollow or Reject

        Raises:
            InvalidUrl: the resolved Location is not a valid URL
        """
        if not should_follow(method, status_code, self.config):
            return DoNotFollow()

        if location is None or not location.strip():
            return Reject(RejectReason.LOCATION_MISSING)

        next_url = resolve_location(current_url, location.strip())
        cross_origin = Origin.from_url(next_url) != initial_origin

        if cross_origin and not self.config.allow_cross_origin_redirects:
            return Reject(RejectReason.CROSS_ORIGIN_DISALLOWED)

        if redirects_followed >= self.config.max_redirects:
            return Reject(RejectReason.TOO_MANY_REDIRECTS)

        return Follow(
            next_url=next_url,
            cross_origin=cross_origin,
            forward_credentials=self.config.forwards_credentials(cross_origin),
        )
