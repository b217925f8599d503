"""
Security policy for sslguard.

A policy states which controllers and actions must be served over HTTPS and
which route prefixes are secured as a whole. Anything the policy does not
mention is expected to be served over plain HTTP.

Example:
    >>> policy = SecurityPolicy(
    ...     secured={"users": ["login", "register"], "checkout": "*"},
    ...     prefixes={"admin"},
    ... )
    >>> policy.secured["checkout"]
    AllActions(kind='all')
"""

from types import MappingProxyType
from typing import Annotated, Any, Dict, FrozenSet, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .status import REDIRECT_STATUS_CODES, HTTPStatus

WILDCARD = "*"


class AllActions(BaseModel):
    """Every action of the controller must be secure."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["all"] = "all"

    def __contains__(self, action: object) -> bool:
        return True


class ActionSet(BaseModel):
    """Only the listed actions of the controller must be secure."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["set"] = "set"
    actions: FrozenSet[str] = frozenset()

    def __contains__(self, action: object) -> bool:
        return action in self.actions


ActionRule = Annotated[Union[AllActions, ActionSet], Field(discriminator="kind")]


def coerce_action_rule(value: Any) -> Any:
    """
    Normalize the loose configuration shapes into a tagged action rule.

    - "*" -> AllActions
    - "login" -> ActionSet({"login"})
    - ["login", "logout"] -> ActionSet({"login", "logout"})
    - any collection containing "*" -> AllActions

    Mappings and already built rules are passed on in tagged form for pydantic to validate.
    """
    if isinstance(value, (AllActions, ActionSet)):
        return value.model_dump()
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        if WILDCARD in value:
            return {"kind": "all"}
        return {"kind": "set", "actions": frozenset(value)}
    return value


class SecurityPolicy(BaseModel):
    """
    Read-only HTTPS policy shared by every request.

    Attributes:
        secured: Controller name -> AllActions or ActionSet.
        prefixes: Route prefixes whose routes are all secured.
        auto_redirect: When False the decision is computed but no redirect is issued.
        redirect_status_code: Status used for redirect responses.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    secured: Dict[str, ActionRule] = Field(default_factory=dict)
    prefixes: FrozenSet[str] = frozenset()
    auto_redirect: bool = Field(default=True, alias="autoRedirect")
    redirect_status_code: int = int(HTTPStatus.HTTP_302_FOUND)

    @field_validator("secured", mode="before")
    @classmethod
    def _coerce_secured(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {controller: coerce_action_rule(rule) for controller, rule in value.items()}
        return value

    @field_validator("prefixes", mode="before")
    @classmethod
    def _coerce_prefixes(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset({value}) if value else frozenset()
        return value

    @field_validator("redirect_status_code")
    @classmethod
    def _check_redirect_status(cls, value: int) -> int:
        if value not in REDIRECT_STATUS_CODES:
            allowed = ", ".join(str(int(code)) for code in sorted(REDIRECT_STATUS_CODES))
            raise ValueError(f"redirect_status_code must be one of {allowed}, got {value}")
        return value

    @field_validator("secured")
    @classmethod
    def _freeze_secured(cls, value: Dict[str, Any]) -> Mapping[str, Any]:
        # Read-only view; frozen=True alone still allows policy.secured[...] = ...
        return MappingProxyType(value)

    @field_serializer("secured", mode="wrap")
    def _dump_secured(self, value: Mapping[str, Any], handler):
        return handler(dict(value))
