from __future__ import annotations

import logging
from typing import Any, BinaryIO
from urllib.parse import urlencode

import requests
from pydantic import ValidationError

from mixcloud_uploader import __version__
from mixcloud_uploader.config import OAuthCredentials
from mixcloud_uploader.errors import MixcloudApiError
from mixcloud_uploader.models import UploadResponse, User

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://www.mixcloud.com/oauth/authorize"
ACCESS_TOKEN_URL = "https://www.mixcloud.com/oauth/access_token"
API_ME_URL = "https://api.mixcloud.com/me/"
API_UPLOAD_URL = "https://api.mixcloud.com/upload/"

USER_AGENT = f"Mixcloud CLI Uploader v{__version__}"


def authorize_url(credentials: OAuthCredentials) -> str:
    query = urlencode({"client_id": credentials.client_id, "redirect_uri": credentials.redirect_uri})
    return f"{AUTHORIZE_URL}?{query}"


class MixcloudService:
    def __init__(self, access_token: str = "", session: requests.Session | None = None) -> None:
        self.access_token = access_token
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})

    def exchange_code_for_token(self, code: str, credentials: OAuthCredentials) -> str:
        """Trade an OAuth authorization code for an access token.

        Returns an empty string when the reply carries no ``access_token``.
        """
        params = {
            "client_id": credentials.client_id,
            "redirect_uri": credentials.redirect_uri,
            "client_secret": credentials.client_secret,
            "code": code,
        }
        payload = self._get_json(ACCESS_TOKEN_URL, params, "Error fetching Access Code")
        if not isinstance(payload, dict):
            raise MixcloudApiError("Error decoding response from API - expected a JSON object")
        token = payload.get("access_token")
        return token if isinstance(token, str) else ""

    def fetch_current_user(self) -> User:
        payload = self._get_json(
            API_ME_URL, {"access_token": self.access_token}, "Error fetching your profile data"
        )
        try:
            user = User.model_validate(payload)
        except ValidationError as exc:
            raise MixcloudApiError(f"Error decoding response from API - {exc}") from exc
        logger.debug("Authenticated as %s (pro=%s)", user.username, user.is_pro)
        return user

    def upload(self, body: BinaryIO, content_type: str, content_length: int) -> UploadResponse:
        """POST a prepared multipart body and decode the reply."""
        headers = {"Content-Type": content_type, "Content-Length": str(content_length)}
        try:
            response = self.session.post(
                API_UPLOAD_URL,
                params={"access_token": self.access_token},
                data=body,
                headers=headers,
            )
        except requests.RequestException as exc:
            raise MixcloudApiError(f"Error: {exc}") from exc

        logger.debug("Upload finished with HTTP %s", response.status_code)
        try:
            return UploadResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise MixcloudApiError(f"Error decoding response from API - {exc}") from exc

    def _get_json(self, url: str, params: dict[str, str], failure_message: str) -> Any:
        try:
            response = self.session.get(url, params=params)
        except requests.RequestException as exc:
            raise MixcloudApiError(f"{failure_message}: {exc}") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise MixcloudApiError(f"Error decoding response from API - {exc}") from exc
