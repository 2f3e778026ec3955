# chainlance/services/wallet.py
import logging
from typing import Callable, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

ACCOUNT_CHANGED = "accountChanged"
DISCONNECT = "disconnect"


class WalletError(Exception):
    """Raised when the wallet refuses or fails a request."""


class WalletProvider(Protocol):
    """Surface of an injected wallet (Phantom-style)."""

    def connect(self, only_if_trusted: bool = False) -> str: ...

    def disconnect(self) -> None: ...

    def on(self, event: str, callback: Callable) -> None: ...

    def remove_listener(self, event: str, callback: Callable) -> None: ...


class WalletObserver(Protocol):
    def on_address_changed(self, address: Optional[str]) -> None: ...

    def on_disconnected(self) -> None: ...


class DemoWalletProvider:
    """In-process stand-in for a browser wallet extension.

    ``approve`` plays the part of the user accepting the connection prompt;
    ``switch_account`` plays the part of the user picking another account.
    """

    def __init__(self, public_key: Optional[str] = None, trusted: bool = False):
        self.public_key = public_key
        self.trusted = trusted
        self.connected = False
        self._listeners: Dict[str, List[Callable]] = {}

    def approve(self, public_key: str) -> None:
        self.public_key = public_key
        self.trusted = True

    def connect(self, only_if_trusted: bool = False) -> str:
        if not self.public_key:
            raise WalletError("User rejected the request.")
        if only_if_trusted and not self.trusted:
            raise WalletError("Site is not trusted.")
        self.connected = True
        return self.public_key

    def disconnect(self) -> None:
        self.connected = False
        self._emit(DISCONNECT)

    def switch_account(self, public_key: Optional[str]) -> None:
        self.public_key = public_key
        self._emit(ACCOUNT_CHANGED, public_key)

    def on(self, event: str, callback: Callable) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def remove_listener(self, event: str, callback: Callable) -> None:
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def _emit(self, event: str, *args) -> None:
        for callback in list(self._listeners.get(event, [])):
            callback(*args)


class WalletAdapter:
    """Thin wrapper over an injected wallet that only ever yields an address.

    With no provider the adapter is unavailable and callers offer
    ``install_url`` instead.
    """

    def __init__(self, provider: Optional[WalletProvider] = None,
                 install_url: str = "https://phantom.app/"):
        self.provider = provider
        self.install_url = install_url
        self._observers: List[WalletObserver] = []

    @property
    def available(self) -> bool:
        return self.provider is not None

    def connect(self) -> str:
        if not self.provider:
            raise WalletError("No wallet installed.")
        try:
            address = self.provider.connect()
        except WalletError:
            raise
        except Exception as e:
            raise WalletError(str(e)) from e
        logger.info(f"Wallet connected: {address}")
        return address

    def eager_connect(self) -> Optional[str]:
        """Reconnect silently if the wallet already trusts this site."""
        if not self.provider:
            return None
        try:
            return self.provider.connect(only_if_trusted=True)
        except Exception as e:
            logger.debug(f"Wallet auto-connect failed or not trusted: {e}")
            return None

    def disconnect(self) -> None:
        if not self.provider:
            return
        try:
            self.provider.disconnect()
        except Exception as e:
            raise WalletError(str(e)) from e

    def subscribe(self, observer: WalletObserver) -> None:
        if not self.provider or observer in self._observers:
            return
        self._observers.append(observer)
        if len(self._observers) == 1:
            self.provider.on(ACCOUNT_CHANGED, self._handle_account_changed)
            self.provider.on(DISCONNECT, self._handle_disconnect)

    def unsubscribe(self, observer: WalletObserver) -> None:
        if observer not in self._observers:
            return
        self._observers.remove(observer)
        if not self._observers and self.provider:
            self.provider.remove_listener(ACCOUNT_CHANGED, self._handle_account_changed)
            self.provider.remove_listener(DISCONNECT, self._handle_disconnect)

    def _handle_account_changed(self, address: Optional[str] = None) -> None:
        address = str(address) if address else None
        logger.info(f"Wallet account changed: {address}")
        for observer in list(self._observers):
            observer.on_address_changed(address)

    def _handle_disconnect(self, *args) -> None:
        logger.info("Wallet disconnected")
        for observer in list(self._observers):
            observer.on_disconnected()
