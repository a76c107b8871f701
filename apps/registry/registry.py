from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from apps.registry.models import Asset, Company, Inventory, RegistryState
from common_core.clock import format_date_taken, utc_now

log = logging.getLogger("assetledger.registry")

CountMode = Literal["last", "sum"]
MissLogMode = Literal["scan", "once"]

MSG_COMPANY_ADDED = "company added successfully"
MSG_COMPANY_NOT_FOUND = "company not found"
MSG_NO_COMPANY = "no company found with that name"
MSG_NO_ASSET_EDIT = "no asset found with that serial"
MSG_NO_ASSET_INVENTORY = "no asset found with that serial number"
MSG_INVENTORY_TAKEN = "asset inventory successful"


@dataclass(frozen=True)
class Outcome:
    matched: int  # companies whose name matched
    affected: int  # records created or edited


class EventLog:
    """Log lines emitted during one invocation, kept in call order."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def log_str(self, msg: str) -> None:
        self.messages.append(msg)
        log.info(f"contract_log {msg}", extra={"component": "registry"})

    def clear(self) -> None:
        self.messages.clear()


class Registry:
    """
    The company / asset / inventory aggregate and its operations.

    Names and serials are not unique: every operation that looks something up
    by name or serial acts on all matches. A miss never raises; it is reported
    through ``events`` and the operation is otherwise a no-op.
    """

    def __init__(
        self,
        state: RegistryState | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        events: EventLog | None = None,
        count_mode: CountMode = "last",
        miss_log_mode: MissLogMode = "scan",
    ) -> None:
        if count_mode not in ("last", "sum"):
            raise ValueError("invalid_count_mode")
        if miss_log_mode not in ("scan", "once"):
            raise ValueError("invalid_miss_log_mode")
        self.state = state if state is not None else RegistryState()
        self.clock = clock or utc_now
        self.events = events if events is not None else EventLog()
        self.count_mode = count_mode
        self.miss_log_mode = miss_log_mode

    @property
    def companies(self) -> list[Company]:
        return self.state.companies

    def _matching(self, company_name: str) -> Iterator[Company]:
        return (c for c in self.companies if c.name == company_name)

    def _count(self, company_name: str, size: Callable[[Company], int]) -> int:
        total = 0
        for company in self._matching(company_name):
            if self.count_mode == "sum":
                total += size(company)
            else:
                total = size(company)
        return total

    # -----------------------------
    # Companies
    # -----------------------------

    def register_company(self, owner: str, name: str, location: str) -> Outcome:
        company = Company(
            id=len(self.companies),
            owner=owner,
            name=name,
            location=location,
        )
        self.companies.append(company)
        self.events.log_str(MSG_COMPANY_ADDED)
        return Outcome(matched=0, affected=1)

    def count_companies(self) -> int:
        return len(self.companies)

    # -----------------------------
    # Assets
    # -----------------------------

    def register_asset(self, name: str, serial: str, company_name: str) -> Outcome:
        matched = 0
        for company in self.companies:
            if company.name == company_name:
                matched += 1
                company.assets.append(Asset(name=name, serial=serial, company=company_name))
            elif self.miss_log_mode == "scan":
                self.events.log_str(MSG_COMPANY_NOT_FOUND)

        if matched == 0 and self.miss_log_mode == "once":
            self.events.log_str(MSG_COMPANY_NOT_FOUND)
        return Outcome(matched=matched, affected=matched)

    def edit_asset(self, name: str, serial: str, company_name: str) -> Outcome:
        matched = 0
        edited = 0
        for company in self._matching(company_name):
            matched += 1
            hits = 0
            for asset in company.assets:
                if asset.serial == serial:
                    hits += 1
                    asset.name = name
                    asset.serial = serial
                    asset.company = company_name
            if hits == 0:
                self.events.log_str(MSG_NO_ASSET_EDIT)
            edited += hits

        if matched == 0:
            self.events.log_str(MSG_NO_COMPANY)
        return Outcome(matched=matched, affected=edited)

    def count_assets(self, company_name: str) -> int:
        return self._count(company_name, lambda c: len(c.assets))

    # -----------------------------
    # Inventory checks
    # -----------------------------

    def take_inventory(self, company_name: str, serial: str, status: str) -> Outcome:
        matched = 0
        recorded = 0
        for company in self._matching(company_name):
            matched += 1
            hits = 0
            for asset in company.assets:
                if asset.serial != serial:
                    continue
                hits += 1
                company.inventories.append(
                    Inventory(
                        date_taken=format_date_taken(self.clock()),
                        serial=serial,
                        status=status,
                    )
                )
                asset.status = status
                self.events.log_str(MSG_INVENTORY_TAKEN)
            if hits == 0:
                self.events.log_str(MSG_NO_ASSET_INVENTORY)
            recorded += hits

        if matched == 0:
            self.events.log_str(MSG_NO_COMPANY)
        return Outcome(matched=matched, affected=recorded)

    def count_inventories(self, company_name: str) -> int:
        return self._count(company_name, lambda c: len(c.inventories))
