from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from apps.registry.models import RegistryState
from apps.registry_backend.models import CallReceipt, ContractState


class StaleState(RuntimeError):
    pass


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def load_state(db, contract_id: str) -> tuple[RegistryState, int]:
    row = db.get(ContractState, contract_id)
    if row is None:
        return RegistryState(), 0
    return RegistryState.model_validate(row.state_json), row.version


def save_state(db, contract_id: str, state: RegistryState, expected_version: int) -> int:
    """
    Write ``state`` as the next version; ``expected_version`` is what the caller loaded.

    The write is conditional on the stored version, so a save based on a state
    another session has moved on from raises ``StaleState`` and changes nothing.
    """
    blob = state.model_dump(mode="json")

    if expected_version == 0:
        found = db.execute(
            select(ContractState.version).where(ContractState.contract_id == contract_id)
        ).scalar_one_or_none()
        if found is not None:
            raise StaleState(f"state_version_mismatch expected=0 found={found}")
        db.add(ContractState(contract_id=contract_id, state_json=blob, version=1, updated_at_utc=_now()))
        try:
            db.flush()
        except IntegrityError as e:
            raise StaleState("state_version_mismatch expected=0 found=existing") from e
        return 1

    res = db.execute(
        update(ContractState)
        .where(
            ContractState.contract_id == contract_id,
            ContractState.version == expected_version,
        )
        .values(state_json=blob, version=expected_version + 1, updated_at_utc=_now())
        .execution_options(synchronize_session=False)
    )
    if res.rowcount != 1:
        raise StaleState(f"state_version_mismatch expected={expected_version}")
    return expected_version + 1


def receipt_write(
    db,
    contract_id: str,
    method: str,
    signer_id: str | None,
    call_id: str | None,
    version: int,
    args: dict[str, Any],
    logs: list[str],
) -> None:
    db.add(
        CallReceipt(
            contract_id=contract_id,
            method=method,
            signer_id=signer_id,
            call_id=call_id,
            version=version,
            args_json=args,
            logs_json=list(logs),
            created_at_utc=_now(),
        )
    )


def receipts_for(db, contract_id: str, limit: int = 100) -> list[CallReceipt]:
    stmt = (
        select(CallReceipt)
        .where(CallReceipt.contract_id == contract_id)
        .order_by(CallReceipt.id.desc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())
