"""
Client HTTP asynchrone pour l'API d'administration.

Le token d'accès est envoyé sur chaque requête. Sur un 401, le client
rafraîchit le token une seule fois (les 401 concurrents partagent ce
rafraîchissement) puis rejoue la requête d'origine une seule fois.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from src.client.exceptions import ApiError, AuthenticationExpiredError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
REFRESH_PATH = "/auth/refresh"


class AdminApiClient:
    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self._refresh_lock = asyncio.Lock()
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def clear_tokens(self) -> None:
        self.access_token = None
        self.refresh_token = None

    def _auth_headers(self, token: Optional[str]) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"} if token else {}

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            raise ApiError(response.status_code, response.text)
        detail = body.get("detail", body) if isinstance(body, dict) else body
        raise ApiError(response.status_code, detail)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Ouvre une session et mémorise les tokens d'accès et de rafraîchissement."""
        response = await self._http.post(LOGIN_PATH, json={"email": email, "password": password})
        self._raise_for_status(response)
        data = response.json()
        self.access_token = data["token"]
        self.refresh_token = data["refresh_token"]
        logger.info(f"[AdminApiClient] Session ouverte pour {email}")
        return data

    async def _refresh(self, expired_token: Optional[str]) -> None:
        async with self._refresh_lock:
            # Un autre appel a déjà remplacé le token pendant l'attente du verrou
            if self.access_token is not None and self.access_token != expired_token:
                return
            if not self.refresh_token:
                self.clear_tokens()
                raise AuthenticationExpiredError()
            logger.debug("[AdminApiClient] Rafraîchissement du token d'accès")
            response = await self._http.post(REFRESH_PATH, json={"refresh_token": self.refresh_token})
            if not response.is_success:
                logger.warning(f"[AdminApiClient] Échec du rafraîchissement ({response.status_code})")
                self.clear_tokens()
                raise AuthenticationExpiredError()
            self.access_token = response.json()["token"]

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Envoie la requête authentifiée, avec un seul rafraîchissement et une seule relance sur 401."""
        extra_headers = kwargs.pop("headers", None) or {}
        token = self.access_token
        response = await self._http.request(method, url, headers={**extra_headers, **self._auth_headers(token)}, **kwargs)
        if response.status_code != 401:
            return response

        await self._refresh(token)
        return await self._http.request(
            method, url, headers={**extra_headers, **self._auth_headers(self.access_token)}, **kwargs
        )

    async def get(self, url: str, **kwargs: Any) -> Any:
        response = await self.request("GET", url, **kwargs)
        self._raise_for_status(response)
        return self._decode(response)

    async def post(self, url: str, **kwargs: Any) -> Any:
        response = await self.request("POST", url, **kwargs)
        self._raise_for_status(response)
        return self._decode(response)

    async def put(self, url: str, **kwargs: Any) -> Any:
        response = await self.request("PUT", url, **kwargs)
        self._raise_for_status(response)
        return self._decode(response)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        response = await self.request("DELETE", url, **kwargs)
        self._raise_for_status(response)
        return self._decode(response)
