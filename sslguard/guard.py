"""
SecureRouteGuard decides whether a request sits on the wrong transport.

The guard is a pure function of its policy and inputs: it holds no
per-request state and is safe to share between concurrent requests.
"""

import logging

from .context import RequestContext, RouteParams
from .decision import NO_ACTION, Decision, RedirectToInsecure, RedirectToSecure
from .policy import SecurityPolicy

logger = logging.getLogger(__name__)


class SecureRouteGuard:
    """
    Evaluates route parameters and transport state against a SecurityPolicy.

    Example:
        >>> guard = SecureRouteGuard(SecurityPolicy(secured={"users": "*"}))
        >>> guard.evaluate(
        ...     RouteParams(controller="users", action="login"),
        ...     RequestContext(is_secure=False, host="example.com", path="/users/login"),
        ... )
        RedirectToSecure(url='https://example.com/users/login')
    """

    def __init__(self, policy: SecurityPolicy):
        self.policy = policy

    def requires_secure(self, params: RouteParams) -> bool:
        """
        Whether the route described by params must be served over HTTPS.

        Secured prefixes win over the per-controller table. Unknown or empty
        controllers and actions simply do not match.
        """
        prefixes = self.policy.prefixes
        if prefixes and params.prefix and params.prefix in prefixes:
            return True

        if not params.controller:
            return False
        rule = self.policy.secured.get(params.controller)
        if rule is None:
            return False

        return params.action in rule

    def evaluate(self, params: RouteParams, context: RequestContext) -> Decision:
        """
        Compare the policy verdict with the request transport.

        Returns:
            RedirectToSecure, RedirectToInsecure or NoAction
        """
        must_be_secure = self.requires_secure(params)
        logger.debug(
            "Evaluated %s.%s (prefix=%s): secure required=%s, request secure=%s",
            params.controller,
            params.action,
            params.prefix,
            must_be_secure,
            context.is_secure,
        )

        if must_be_secure == context.is_secure:
            return NO_ACTION

        if not context.host:
            logger.warning(
                "Cannot build redirect URL for %s without a host; leaving request on %s",
                context.full_path,
                "https" if context.is_secure else "http",
            )
            return NO_ACTION

        if must_be_secure:
            return self.force_secure(context)
        return self.force_insecure(context)

    def force_secure(self, context: RequestContext) -> RedirectToSecure:
        """Redirect decision for the HTTPS version of the current URL."""
        return RedirectToSecure(context.url_for_scheme("https"))

    def force_insecure(self, context: RequestContext) -> RedirectToInsecure:
        """Redirect decision for the plain HTTP version of the current URL."""
        return RedirectToInsecure(context.url_for_scheme("http"))


def evaluate(
    policy: SecurityPolicy, params: RouteParams, context: RequestContext
) -> Decision:
    """Shortcut for ``SecureRouteGuard(policy).evaluate(params, context)``."""
    return SecureRouteGuard(policy).evaluate(params, context)
