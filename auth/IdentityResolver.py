# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-07
# Description: IdentityResolver
# -----------------------------------------------------------------------------
import time
from typing import Any, Dict, Mapping, Optional

import httpx
from jose import JWTError, jwt

from config.Config import Config
from utility.errors import Unauthorized
from utility.logging_utils import get_class_logger

DEVICE_ID_HEADER = "x-device-id"


class IdentityResolver:
    """
    Resolves the effective user id for a request from its headers.

    Two modes, chosen from config:
      - cognito:   Authorization: Bearer <RS256 JWT> verified against the
                   user pool JWKS; the user id is the 'sub' claim
      - device-id: the x-device-id header is the user id (dev/local)

    Request bodies and query strings are never consulted.
    """

    def __init__(
        self,
        cfg: Config,
        *,
        http_client: Optional[httpx.Client] = None,
        jwks_refetch_interval: float = 30.0,
        logger=None,
    ):
        self.cfg = cfg
        self.use_cognito = cfg.use_cognito
        self.http_client = http_client
        self.logger = logger or get_class_logger(self.__class__)
        self._jwks: Optional[Dict[str, Any]] = None
        self._jwks_fetched_at = 0.0
        self.jwks_refetch_interval = jwks_refetch_interval

        if self.use_cognito:
            self.logger.info("Identity mode: cognito (pool=%s)", cfg.cognito_user_pool_id)
        else:
            self.logger.warning(
                "Identity mode: device-id. Set COGNITO_USER_POOL_ID and COGNITO_CLIENT_ID to enable Cognito."
            )

    @property
    def mode(self) -> str:
        return "cognito" if self.use_cognito else "device-id"

    @property
    def issuer(self) -> str:
        return (
            f"https://cognito-idp.{self.cfg.cognito_region}.amazonaws.com/"
            f"{self.cfg.cognito_user_pool_id}"
        )

    @property
    def jwks_uri(self) -> str:
        return f"{self.issuer}/.well-known/jwks.json"

    def resolve(self, headers: Mapping[str, str]) -> str:
        if self.use_cognito:
            return self._resolve_cognito(headers)
        return self._resolve_device_id(headers)

    def _resolve_device_id(self, headers: Mapping[str, str]) -> str:
        device_id = (headers.get(DEVICE_ID_HEADER) or "").strip()
        if not device_id:
            raise Unauthorized(
                f"Missing {DEVICE_ID_HEADER} header. Set {DEVICE_ID_HEADER} to your device UUID."
            )
        return device_id

    def _resolve_cognito(self, headers: Mapping[str, str]) -> str:
        auth_header = headers.get("authorization") or ""
        if not auth_header.startswith("Bearer "):
            raise Unauthorized("Missing bearer token")
        token = auth_header[len("Bearer "):].strip()

        try:
            kid = jwt.get_unverified_header(token).get("kid")
        except JWTError as e:
            self.logger.warning("Rejected token header: %s", e)
            raise Unauthorized("Invalid or expired authentication token") from e

        try:
            claims = jwt.decode(
                token,
                self._get_jwks(kid),
                algorithms=["RS256"],
                audience=self.cfg.cognito_client_id,
                issuer=self.issuer,
            )
        except JWTError as e:
            self.logger.warning("Rejected token: %s", e)
            raise Unauthorized("Invalid or expired authentication token") from e

        sub = claims.get("sub")
        if not sub:
            raise Unauthorized("Token has no subject")
        return str(sub)

    def _get_jwks(self, kid: Optional[str] = None) -> Dict[str, Any]:
        """
        Cached user pool key set. An unknown kid means the pool rotated its
        keys, so the set is fetched again, at most once per refetch interval.
        """
        if self._jwks is not None:
            if kid is None or any(isinstance(key, dict) and key.get("kid") == kid for key in self._jwks["keys"]):
                return self._jwks
            if time.monotonic() - self._jwks_fetched_at < self.jwks_refetch_interval:
                return self._jwks
            self.logger.info("Unknown key id '%s'; refreshing JWKS", kid)

        self.logger.info("Fetching JWKS from %s", self.jwks_uri)
        try:
            if self.http_client is not None:
                resp = self.http_client.get(self.jwks_uri)
            else:
                resp = httpx.get(self.jwks_uri, timeout=10.0)
            resp.raise_for_status()
            jwks = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error("JWKS fetch failed: %s", e)
            raise Unauthorized("Unable to verify authentication token") from e

        if not isinstance(jwks, dict) or not jwks.get("keys"):
            raise Unauthorized("Unable to verify authentication token")

        self._jwks = jwks
        self._jwks_fetched_at = time.monotonic()
        return jwks
