# chainlance/routers/session.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from chainlance.models.project import Category
from chainlance.models.session import AccountSwitch, PoolStats, RoleUpdate, SessionInfo, WalletConnectRequest
from chainlance.models.transaction import Transaction
from chainlance.routers.deps import get_session
from chainlance.services.session import SessionState
from chainlance.services.wallet import DemoWalletProvider, WalletError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/session", response_model=SessionInfo)
async def read_session(session: SessionState = Depends(get_session)):
    return session.info()


@router.put("/session/role", response_model=SessionInfo)
async def switch_role(update: RoleUpdate, session: SessionState = Depends(get_session)):
    session.role = update.role
    logger.info(f"Role switched to {update.role.value}")
    return session.info()


@router.post("/wallet/connect", response_model=SessionInfo)
async def connect_wallet(payload: Optional[WalletConnectRequest] = None, session: SessionState = Depends(get_session)):
    """
    Connect the wallet. Without a wallet the response carries install_url
    for the front end to open instead.
    """
    if not session.wallet.available:
        return session.info()
    provider = session.wallet.provider
    if payload and payload.public_key and isinstance(provider, DemoWalletProvider):
        provider.approve(payload.public_key)
    try:
        session.account = session.wallet.connect()
    except WalletError as e:
        logger.error(f"Wallet connection failed: {e}")
        raise HTTPException(status_code=502, detail="Wallet connection failed.")
    return session.info()


@router.post("/wallet/disconnect", response_model=SessionInfo)
async def disconnect_wallet(session: SessionState = Depends(get_session)):
    try:
        session.wallet.disconnect()
    except WalletError as e:
        logger.error(f"Wallet disconnect failed: {e}")
        raise HTTPException(status_code=502, detail="Wallet disconnect failed.")
    session.account = None
    return session.info()


@router.post("/wallet/account", response_model=SessionInfo)
async def switch_account(switch: AccountSwitch, session: SessionState = Depends(get_session)):
    """Simulate the user selecting another account inside the demo wallet."""
    provider = session.wallet.provider
    if not isinstance(provider, DemoWalletProvider):
        raise HTTPException(status_code=400, detail="Account switching is only available on the demo wallet")
    provider.switch_account(switch.public_key)
    return session.info()


@router.get("/transactions", response_model=List[Transaction])
async def list_transactions(session: SessionState = Depends(get_session)):
    return session.ledger.entries


@router.get("/stats", response_model=PoolStats)
async def read_stats(session: SessionState = Depends(get_session)):
    store = session.store
    return PoolStats(total_value_locked=store.total_value_locked(), project_count=len(store.projects))


@router.get("/categories", response_model=List[str])
async def list_categories():
    return [c.value for c in Category]
