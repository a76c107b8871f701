from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, Integer, String

from common_core.db import Base


class ContractState(Base):
    __tablename__ = "contract_state"
    contract_id = Column(String(128), primary_key=True)
    state_json = Column(JSON, nullable=False)
    version = Column(Integer, nullable=False, default=0)
    updated_at_utc = Column(DateTime, nullable=False)


class CallReceipt(Base):
    __tablename__ = "call_receipts"
    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(String(128), nullable=False, index=True)
    method = Column(String(64), nullable=False, index=True)
    signer_id = Column(String(128), nullable=True, index=True)  # recorded, never enforced
    call_id = Column(String(64), nullable=True, index=True)
    version = Column(Integer, nullable=False)
    args_json = Column(JSON, nullable=False)
    logs_json = Column(JSON, nullable=False)
    created_at_utc = Column(DateTime, nullable=False, index=True)
