# chainlance/services/session.py
import logging
from typing import Optional

from advisory.client import AdvisoryClient
from chainlance.config import Config
from chainlance.models.session import SessionInfo, UserRole
from chainlance.services.ledger import Ledger
from chainlance.services.storage import LocalStorage, create_storage
from chainlance.services.store import ProjectStore
from chainlance.services.wallet import DemoWalletProvider, WalletAdapter
from chainlance.utils.helpers import short_address

logger = logging.getLogger(__name__)


class SessionState:
    """Everything one running demo session owns.

    Routes receive this object through dependency injection. It observes the
    wallet so the connected account follows the wallet's own events.
    """

    def __init__(self, store: ProjectStore, wallet: WalletAdapter, advisory: AdvisoryClient,
                 role: UserRole = UserRole.CLIENT):
        self.store = store
        self.wallet = wallet
        self.advisory = advisory
        self.role = role
        self.account: Optional[str] = None

    @property
    def ledger(self) -> Ledger:
        return self.store.ledger

    def start(self) -> None:
        """Register for wallet events and try a silent reconnect."""
        self.wallet.subscribe(self)
        self.account = self.wallet.eager_connect()
        if self.account:
            logger.info(f"Reconnected wallet {self.account}")

    def stop(self) -> None:
        self.wallet.unsubscribe(self)

    def on_address_changed(self, address: Optional[str]) -> None:
        self.account = address

    def on_disconnected(self) -> None:
        self.account = None

    def info(self) -> SessionInfo:
        return SessionInfo(
            role=self.role,
            account=self.account,
            short_account=short_address(self.account) if self.account else None,
            wallet_available=self.wallet.available,
            install_url=None if self.wallet.available else self.wallet.install_url,
        )


def create_session(storage: Optional[LocalStorage] = None,
                   advisory: Optional[AdvisoryClient] = None,
                   wallet: Optional[WalletAdapter] = None) -> SessionState:
    """
    Wire a session from configuration, letting callers swap any collaborator.

    Returns:
        SessionState: A session that has not been started yet.
    """
    if advisory is None:
        advisory = AdvisoryClient(
            model=Config.ADVISORY_MODEL,
            api_key=Config.GEMINI_API_KEY or None,
            default_deadline_days=Config.DEFAULT_DEADLINE_DAYS,
        )
    if wallet is None:
        provider = None
        if Config.DEMO_WALLET_ENABLED:
            provider = DemoWalletProvider(Config.DEMO_WALLET_ADDRESS or None, trusted=Config.DEMO_WALLET_TRUSTED)
        wallet = WalletAdapter(provider, install_url=Config.WALLET_INSTALL_URL)
    store = ProjectStore(storage or create_storage(), Config.STORAGE_KEY, advisory)
    return SessionState(store, wallet, advisory)
