# hobbyconnect/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable

from hobbyconnect.services._shared.errors import (
    AuthenticationError,
    ConfigurationError,
    InvalidTokenError,
    NotFoundError,
    StaleAccountError,
    StoreError,
)
from hobbyconnect.services._shared.ports.credential_store import (
    CredentialStore,
    FederatedCredential,
    LocalCredential,
    UserAccount,
)
from hobbyconnect.services._shared.ports.id_token_verifier import IdTokenVerifier
from hobbyconnect.services.auth.dto import (
    AccountOut,
    GoogleSignInIn,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RegisterIn,
    SessionOut,
    TokenPair,
)
from hobbyconnect.services.auth.issuer import TokenIssuer
from hobbyconnect.services.auth.passwords import PasswordHasher
from hobbyconnect.services.auth.validator import TokenValidator

log = logging.getLogger(__name__)


def to_account_out(account: UserAccount) -> AccountOut:
    return AccountOut(
        id=account.id,
        email=account.email,
        name=account.name,
        bio=account.bio,
        avatar_url=account.avatar_url,
    )


class SessionService:
    """
    Session lifecycle service (register / login / refresh / logout / federated sign-in).

    Every transition reads the account, mutates its outstanding refresh
    tokens and writes it back with a compare-and-swap save. Losing the race
    re-runs the transition against the fresh state; for refresh and logout
    that means re-validating the presented token, so a token consumed by a
    concurrent request is seen as reused.
    """

    def __init__(
        self,
        *,
        store: CredentialStore,
        issuer: TokenIssuer,
        validator: TokenValidator,
        passwords: PasswordHasher | None = None,
        id_tokens: IdTokenVerifier | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param store: Credential store holding accounts and sessions.
        :param issuer: Mints token pairs.
        :param validator: Verifies tokens (shares ``issuer`` settings).
        :param passwords: Password hasher; a scrypt hasher by default.
        :param id_tokens: Federated ID-token verifier; ``None`` disables Google sign-in.
        """
        self.store = store
        self.issuer = issuer
        self.validator = validator
        self.passwords = passwords or PasswordHasher()
        self.id_tokens = id_tokens
        self.max_attempts = issuer.settings.max_save_attempts

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AccountOut:
        """
        Create a local account. No session is opened.

        :raises ConflictError: If the email is already registered.
        """
        account = self.store.create(
            email=dto.email,
            credential=LocalCredential(password_hash=self.passwords.hash(dto.password)),
            name=dto.name or dto.email.split("@", 1)[0],
            avatar_url=dto.avatar_url,
        )
        log.info("auth.register", extra={"event": "auth.register", "user_id": account.id})
        return to_account_out(account)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> SessionOut:
        """
        Authenticate credentials and open an additional session.

        Earlier sessions of the same user stay valid.

        :raises AuthenticationError: Same error for an unknown email, a wrong
            password or an account without a local password.
        """
        account = self.store.find_by_email(dto.email)
        password_hash = None
        if account is not None and isinstance(account.credential, LocalCredential):
            password_hash = account.credential.password_hash
        matched = self.passwords.verify(password_hash, dto.password)
        if account is None or not matched:
            log.info("auth.login.failed", extra={"event": "auth.login.failed"})
            raise AuthenticationError()

        pair = self.issuer.issue(account.id)
        self._save_with_retry(account, lambda a: a.with_refresh_token(pair.refresh_token))
        log.info("auth.login", extra={"event": "auth.login", "user_id": account.id})
        return SessionOut(tokens=pair, user_id=account.id)

    # ------------------------------------------------------------------ #
    # Refresh with atomic rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> SessionOut:
        """
        Exchange an outstanding refresh token for a new pair.

        The presented token is removed and the new one appended in the same
        save, so the old token can never validate again.

        :raises InvalidTokenError: If the token is invalid, expired or reused.
        :raises StoreError: If the rotation could not be persisted.
        """
        issued: list[TokenPair] = []

        def rotate(account: UserAccount) -> UserAccount:
            issued.append(self.issuer.issue(account.id))
            return account.without_refresh_token(dto.refresh_token).with_refresh_token(
                issued[-1].refresh_token
            )

        account = self._transition(dto.refresh_token, rotate)
        log.info("auth.refresh.rotated", extra={"event": "auth.refresh.rotated", "user_id": account.id})
        return SessionOut(tokens=issued[-1], user_id=account.id)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Retire one refresh token. Other sessions of the user stay valid.

        :raises InvalidTokenError: If the token is not currently outstanding.
        """
        account = self._transition(
            dto.refresh_token, lambda a: a.without_refresh_token(dto.refresh_token)
        )
        log.info("auth.logout", extra={"event": "auth.logout", "user_id": account.id})

    # ------------------------------------------------------------------ #
    # Federated sign-in
    # ------------------------------------------------------------------ #

    def google_sign_in(self, dto: GoogleSignInIn) -> SessionOut:
        """
        Sign in with a Google ID token, creating the account on first use.

        An existing account with the same (provider-verified) email is reused.
        The new refresh token is appended like any other login.

        :raises ConfigurationError: If federated sign-in is not configured.
        :raises InvalidTokenError: If the ID token is rejected.
        """
        if self.id_tokens is None:
            raise ConfigurationError("Google sign-in is not configured")
        identity = self.id_tokens.verify(dto.credential)

        account = self.store.find_by_email(identity.email)
        if account is None:
            account = self.store.create(
                email=identity.email,
                credential=FederatedCredential(provider=identity.provider, subject=identity.subject),
                name=identity.name or identity.email.split("@", 1)[0],
                avatar_url=identity.picture,
            )
            log.info("auth.register", extra={"event": "auth.register", "user_id": account.id})

        pair = self.issuer.issue(account.id)
        account = self._save_with_retry(
            account, lambda a: a.with_refresh_token(pair.refresh_token)
        )
        log.info("auth.login", extra={"event": "auth.login", "user_id": account.id})
        return SessionOut(
            tokens=pair,
            user_id=account.id,
            email=account.email,
            avatar_url=account.avatar_url,
        )

    # ------------------------------------------------------------------ #
    # Identity
    # ------------------------------------------------------------------ #

    def whoami(self, user_id: str) -> AccountOut:
        """Return the profile of the authenticated user."""
        account = self.store.find_by_id(user_id)
        if account is None:
            raise NotFoundError("User", user_id)
        return to_account_out(account)

    # ------------------------------------------------------------------ #
    # Compare-and-swap helpers
    # ------------------------------------------------------------------ #

    def _save_with_retry(
        self, account: UserAccount, mutate: Callable[[UserAccount], UserAccount]
    ) -> UserAccount:
        """Apply ``mutate`` and save, re-reading the account after each lost race."""
        current: UserAccount | None = account
        for attempt in range(1, self.max_attempts + 1):
            if current is None:
                raise InvalidTokenError("Unknown subject")
            try:
                return self.store.save(mutate(current))
            except StaleAccountError:
                log.debug(
                    "auth.save.stale",
                    extra={"event": "auth.save.stale", "user_id": account.id, "attempt": attempt},
                )
                current = self.store.find_by_id(account.id)
        raise StoreError("Session update kept conflicting")

    def _transition(
        self, refresh_token: str, mutate: Callable[[UserAccount], UserAccount]
    ) -> UserAccount:
        """Validate ``refresh_token`` and save ``mutate(owner)``, re-validating after lost races."""
        for attempt in range(1, self.max_attempts + 1):
            account = self.validator.validate_refresh(refresh_token)
            try:
                return self.store.save(mutate(account))
            except StaleAccountError:
                log.debug(
                    "auth.save.stale",
                    extra={"event": "auth.save.stale", "user_id": account.id, "attempt": attempt},
                )
        raise StoreError("Session update kept conflicting")
