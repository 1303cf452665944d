import json
import logging
from typing import Optional

from pizzahub.client.cart import Cart
from pizzahub.client.storage import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "authToken"
CURRENT_USER_KEY = "currentUser"
CART_KEY = "cart"


class AppState:
    """
    Состояние клиентской сессии: токен, текущий пользователь и корзина.
    Хранилище читается только в load() и пишется только в save().
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store: KeyValueStore = store if store is not None else MemoryStore()
        self.auth_token: Optional[str] = None
        self.current_user: Optional[dict] = None
        self.cart = Cart()

    @classmethod
    def restore(cls, store: KeyValueStore) -> "AppState":
        state = cls(store)
        state.load()
        return state

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)

    def load(self) -> None:
        self.auth_token = self.store.get_item(AUTH_TOKEN_KEY)
        self.current_user = None

        raw_user = self.store.get_item(CURRENT_USER_KEY)
        if raw_user:
            try:
                self.current_user = json.loads(raw_user)
            except json.JSONDecodeError:
                logger.warning("Stored user is malformed, ignoring it")

        self.cart = Cart.from_json(self.store.get_item(CART_KEY))

    def save(self) -> None:
        if self.auth_token:
            self.store.set_item(AUTH_TOKEN_KEY, self.auth_token)
        else:
            self.store.remove_item(AUTH_TOKEN_KEY)

        if self.current_user is not None:
            self.store.set_item(CURRENT_USER_KEY, json.dumps(self.current_user, ensure_ascii=False))
        else:
            self.store.remove_item(CURRENT_USER_KEY)

        self.store.set_item(CART_KEY, self.cart.to_json())

    def sign_in(self, token: str, user: dict) -> None:
        self.auth_token = token
        self.current_user = user

    def sign_out(self) -> None:
        # корзина при выходе сохраняется
        self.auth_token = None
        self.current_user = None
