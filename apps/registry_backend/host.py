"""
Host boundary for the registry.

Each invocation loads the stored registry, runs exactly one operation and,
for change methods, saves the result as the next state version together with
a receipt. Invocations are serialized per process; the version check on save
rejects a write based on a state that has since moved on.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from apps.registry.models import RegistryState
from apps.registry.registry import EventLog, Outcome, Registry
from apps.registry_backend.state_store import (
    StaleState,
    load_state,
    receipt_write,
    save_state,
)
from common_core.logging_setup import call_id_ctx

log = logging.getLogger("assetledger.host")


class HostError(RuntimeError):
    code = "HOST_ERROR"


class UnknownMethod(HostError):
    code = "UNKNOWN_METHOD"


class InvalidArgs(HostError):
    code = "INVALID_ARGS"

    def __init__(self, method: str, errors: list[dict[str, Any]]):
        super().__init__(f"invalid_args method={method}")
        self.errors = errors


class ProhibitedInView(HostError):
    code = "PROHIBITED_IN_VIEW"


class StateConflict(HostError):
    code = "STATE_CONFLICT"


class RegisterCompanyArgs(BaseModel):
    owner: str
    name: str
    location: str


class AssetArgs(BaseModel):
    name: str
    serial: str
    company_name: str


class TakeInventoryArgs(BaseModel):
    company_name: str
    serial: str
    status: str


class CompanyNameArgs(BaseModel):
    company_name: str


class NoArgs(BaseModel):
    pass


CHANGE_METHODS: dict[str, type[BaseModel]] = {
    "register_company": RegisterCompanyArgs,
    "register_asset": AssetArgs,
    "edit_asset": AssetArgs,
    "take_inventory": TakeInventoryArgs,
}

VIEW_METHODS: dict[str, type[BaseModel]] = {
    "count_companies": NoArgs,
    "count_assets": CompanyNameArgs,
    "count_inventories": CompanyNameArgs,
}


@dataclass(frozen=True)
class CallResult:
    method: str
    result: Any
    logs: list[str]
    version: int


def _parse_args(method: str, args: dict[str, Any] | None) -> BaseModel:
    schema = CHANGE_METHODS.get(method) or VIEW_METHODS.get(method)
    if schema is None:
        raise UnknownMethod(f"unknown_method {method}")
    try:
        return schema.model_validate(args or {})
    except ValidationError as e:
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()
        ]
        raise InvalidArgs(method, errors) from e


def _to_result(value: Any) -> Any:
    if isinstance(value, Outcome):
        return asdict(value)
    return value


class ContractHost:
    _lock = threading.Lock()

    def __init__(
        self,
        session_factory,
        contract_id: str,
        *,
        clock: Callable[[], datetime] | None = None,
        count_mode: str = "last",
        miss_log_mode: str = "scan",
    ) -> None:
        self.session_factory = session_factory
        self.contract_id = contract_id
        self.clock = clock
        self.count_mode = count_mode
        self.miss_log_mode = miss_log_mode

    def _registry(self, state: RegistryState, events: EventLog) -> Registry:
        return Registry(
            state,
            clock=self.clock,
            events=events,
            count_mode=self.count_mode,
            miss_log_mode=self.miss_log_mode,
        )

    def call(self, method: str, args: dict[str, Any] | None, signer_id: str | None) -> CallResult:
        parsed = _parse_args(method, args)
        is_change = method in CHANGE_METHODS
        extra = {"contract_id": self.contract_id, "method": method, "signer_id": signer_id}

        with self._lock:
            db = self.session_factory()
            try:
                state, version = load_state(db, self.contract_id)
                events = EventLog()
                registry = self._registry(state, events)
                value = getattr(registry, method)(**parsed.model_dump())

                if is_change:
                    try:
                        version = save_state(db, self.contract_id, registry.state, version)
                    except StaleState as e:
                        raise StateConflict(str(e)) from e
                    receipt_write(
                        db,
                        self.contract_id,
                        method,
                        signer_id,
                        call_id_ctx.get() or None,
                        version,
                        parsed.model_dump(),
                        events.messages,
                    )
                    db.commit()
                log.info(f"contract_call version={version}", extra=extra)
                return CallResult(method, _to_result(value), list(events.messages), version)
            except Exception:
                db.rollback()
                log.exception("contract_call_failed", extra=extra)
                raise
            finally:
                db.close()

    def view(self, method: str, args: dict[str, Any] | None) -> CallResult:
        if method in CHANGE_METHODS:
            raise ProhibitedInView(f"prohibited_in_view {method}")
        return self.call(method, args, signer_id=None)

    def state(self) -> tuple[RegistryState, int]:
        db = self.session_factory()
        try:
            return load_state(db, self.contract_id)
        finally:
            db.close()
