"""
Redirect-following request engine.

Runs one logical request as a bounded loop of physical exchanges:

    prepare hop -> transport -> 2xx: done
                             -> redirect: ask RedirectPolicy, next hop
                             -> anything else: classify and raise

Credentials are attached per hop and only when the hop is same-origin with
the caller's original URL (or forwarding is explicitly enabled).
"""

import logging
import time
from dataclasses import replace
from typing import Optional

from .config import ClientConfig
from .context import Origin, RawResponse, RequestDescriptor, Success
from .error_handler import ErrorHandler
from .exceptions import APIAdaptorError, RedirectLocationMissing, TooManyRedirects
from .headers import HeaderContext, default_request_headers, merge_headers
from .logging.filters import clear_correlation_id, get_correlation_id, new_correlation_id, set_correlation_id
from .logging.logger import APIAdaptorLogger
from .redirect_policy import Follow, RedirectPolicy, Reject, RejectReason
from .transport import RequestsTransport, TransportFailure

CREDENTIAL_HEADERS = ("Authorization", "Proxy-Authorization")


def next_hop(request: RequestDescriptor, follow: Follow) -> RequestDescriptor:
    """
    Descriptor for the hop after a followed redirect.

    Method, body and caller headers carry over unchanged (only 307/308 are
    followed for methods with a body); only the URL moves.
    """
    return request.with_url(follow.next_url)


class RequestEngine:
    """
    Executes requests, following redirects according to ``ClientConfig``.

    Args:
        config: Client configuration (defaults if None)
        transport: Object with ``perform_exchange(RequestDescriptor) -> RawResponse``
        header_context: Ambient per-thread headers
        logger: Structured logger; a silent package logger if None

    Example:
        >>> engine = RequestEngine(ClientConfig(max_redirects=5))
        >>> success = engine.execute(RequestDescriptor("GET", "https://api.test/a"))
        >>> success.status_code, success.exchanges
        (200, 2)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport=None,
        header_context: Optional[HeaderContext] = None,
        logger: Optional[APIAdaptorLogger] = None,
    ):
        self.config = config or ClientConfig()
        self.transport = transport if transport is not None else RequestsTransport(verify=self.config.verify_ssl)
        self.header_context = header_context if header_context is not None else HeaderContext()
        self.logger = logger if logger is not None else APIAdaptorLogger(self.config.logging)
        self.policy = RedirectPolicy(self.config)

    def prepare(self, request: RequestDescriptor, forward_credentials: bool) -> RequestDescriptor:
        """
        Build the outgoing descriptor for one hop.

        Header layers, later winning: defaults, ambient, caller. Credentials
        from the config are added only when ``forward_credentials`` is set
        (the first hop, or a Follow outcome that allows it); otherwise every
        credential (headers and basic auth) is stripped, including ones the
        caller passed explicitly.
        """
        headers = merge_headers(
            default_request_headers(has_body=request.body is not None),
            self.header_context.headers(),
            request.headers,
        )
        auth = request.auth

        if forward_credentials:
            if self.config.bearer_token:
                headers = merge_headers(headers, {"Authorization": f"Bearer {self.config.bearer_token}"})
            elif self.config.basic_auth is not None:
                auth = self.config.basic_auth
        else:
            headers = {
                name: value for name, value in headers.items()
                if name.lower() not in {h.lower() for h in CREDENTIAL_HEADERS}
            }
            auth = None

        return replace(request, headers=headers, auth=auth, timeout=self.config.timeout)

    def execute(self, request: RequestDescriptor) -> Success:
        """
        Run ``request`` to completion.

        Returns:
            Success with the final 2xx response and the number of exchanges

        Raises:
            InvalidUrl: the request URL or a redirect target is not valid
            TimedOut, EndpointNotFound, SocketError: transport failures
            TooManyRedirects: more redirects than ``max_redirects``
            RedirectLocationMissing: followable redirect without Location
            HTTPErrorResponse: any other non-2xx outcome (subclass per status)
        """
        owns_correlation_id = get_correlation_id() is None
        if owns_correlation_id:
            set_correlation_id(new_correlation_id())

        start_time = time.time()
        try:
            return self._run(request)
        except APIAdaptorError as e:
            self._log(
                logging.ERROR,
                "Request failed",
                method=request.method,
                url=request.url,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            raise
        finally:
            if owns_correlation_id:
                clear_correlation_id()

    def _run(self, request: RequestDescriptor) -> Success:
        initial_origin = Origin.from_url(request.url)
        current = request
        cross_origin = False
        forward_credentials = True
        redirects_followed = 0
        exchanges = 0

        while True:
            outgoing = self.prepare(current, forward_credentials)

            self._log(
                logging.INFO,
                "Request started",
                method=outgoing.method,
                url=outgoing.url,
                hop=redirects_followed,
                cross_origin=cross_origin,
            )

            try:
                raw = self.transport.perform_exchange(outgoing)
            except TransportFailure as failure:
                raise ErrorHandler.classify_transport_failure(failure, current.url) from failure
            exchanges += 1

            if 200 <= raw.status_code < 300:
                self._log(
                    logging.INFO,
                    "Request completed",
                    method=outgoing.method,
                    url=outgoing.url,
                    status_code=raw.status_code,
                    exchanges=exchanges,
                )
                return Success(raw, exchanges=exchanges, redirects_followed=redirects_followed)

            if raw.status_code == 408:
                raise ErrorHandler.build_http_error(raw.status_code, current.url, raw.body)

            outcome = self.policy.decide(
                current.method,
                raw.status_code,
                initial_origin,
                current.url,
                raw.location,
                redirects_followed,
            )

            if isinstance(outcome, Follow):
                self._log(
                    logging.INFO,
                    "Redirect followed",
                    status_code=raw.status_code,
                    url=current.url,
                    location=outcome.next_url,
                    cross_origin=outcome.cross_origin,
                    hop=redirects_followed + 1,
                )
                current = next_hop(current, outcome)
                cross_origin = outcome.cross_origin
                forward_credentials = outcome.forward_credentials
                redirects_followed += 1
                continue

            raise self._error_for(outcome, raw, current, request.url)

    def _error_for(self, outcome, raw: RawResponse, current: RequestDescriptor,
                   initial_url: str) -> APIAdaptorError:
        if isinstance(outcome, Reject):
            if outcome.reason is RejectReason.TOO_MANY_REDIRECTS:
                return TooManyRedirects(self.config.max_redirects, initial_url)
            if outcome.reason is RejectReason.LOCATION_MISSING:
                return RedirectLocationMissing(current.url)

        # DoNotFollow, cross-origin refusal and plain error statuses
        return ErrorHandler.build_http_error(raw.status_code, current.url, raw.body)

    def _log(self, level: int, message: str, **fields) -> None:
        try:
            self.logger.log(level, message, **fields)
        except Exception:
            # Logging must never change the outcome of a request
            pass

    def close(self):
        close = getattr(self.transport, 'close', None)
        if close is not None:
            close()
