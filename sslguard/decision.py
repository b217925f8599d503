"""
Outcomes of evaluating a request against a security policy.
"""

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class NoAction:
    """The request is already on the transport the policy asks for."""

    is_redirect: ClassVar[bool] = False


@dataclass(frozen=True)
class RedirectToSecure:
    """The request must be repeated over HTTPS at ``url``."""

    url: str

    is_redirect: ClassVar[bool] = True
    scheme: ClassVar[str] = "https"


@dataclass(frozen=True)
class RedirectToInsecure:
    """The request must be repeated over plain HTTP at ``url``."""

    url: str

    is_redirect: ClassVar[bool] = True
    scheme: ClassVar[str] = "http"


Decision = Union[NoAction, RedirectToSecure, RedirectToInsecure]

NO_ACTION = NoAction()
